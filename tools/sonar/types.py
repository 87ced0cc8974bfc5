from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SonarConfig:
    """Connection settings for SonarQube / SonarCloud API calls.

    ``org`` is only set for SonarCloud; SonarQube servers have no organizations.
    """
    host: str
    token: Optional[str] = None
    org: Optional[str] = None
