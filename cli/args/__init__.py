"""CLI argument builder modules.

The top-level :mod:`autobind_cli` is intentionally kept thin. Shared flags are
registered by :func:`cli.args.base.add_base_args`.
"""

from __future__ import annotations

__all__ = [
    "base",
]
