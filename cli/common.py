from __future__ import annotations

"""cli.common

Small shared helpers for CLI command modules.
"""

import json
from pathlib import Path
from typing import Any, List, Optional

from sonar_autobind.workspace import uri_to_path


def read_json_arg(raw: Optional[str], *, flag: str) -> Any:
    """Load a JSON file named by a CLI flag, failing with a readable message."""
    if not raw:
        raise SystemExit(f"{flag} is required for this mode.")
    p = Path(raw).expanduser()
    if not p.exists():
        raise SystemExit(f"{flag}: file not found: {p}")
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(f"{flag}: invalid JSON in {p}: {e}")


def folders_from_uris(uris: List[str]) -> List[Path]:
    """Existing local directories named by file:// URIs (others are dropped)."""
    out: List[Path] = []
    for uri in uris:
        try:
            p = uri_to_path(uri)
        except ValueError:
            continue
        if p.is_dir():
            out.append(p)
    return out
