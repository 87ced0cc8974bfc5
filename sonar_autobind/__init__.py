"""sonar_autobind

Connected-mode binding suggestions for a code workspace.

Why this exists
---------------
A workspace opened in an editor usually contains one or more folders that
belong to a project on a SonarQube server or a SonarCloud organization. Once
candidate projects have been discovered for those folders, somebody has to
decide whether to bind them silently, ask the user, or leave them alone, and
remember when the user said "don't ask again".

This package owns that decision plus the small pieces around it:

* domain types and wire codecs (``models``, ``protocol``)
* the recursive marker-file scan that feeds suggestion discovery
  (``file_scanner``)
* connection lookup and the durable suppression flags (``connections``,
  ``suppression``, ``state``)
* the decision engine itself (``autobinding``)

The CLI and ``wiring`` are thin composition roots around these components.
"""

from __future__ import annotations

__version__ = "0.3.0"
