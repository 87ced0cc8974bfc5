"""sonar_autobind.workspace

The set of folders currently open in the workspace, plus URI helpers.

The engine never creates or destroys folders; it only asks which open folder
(if any) a URI from the language server belongs to.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from sonar_autobind.models import WorkspaceFolder


def uri_to_path(uri: str) -> Path:
    """Convert a ``file://`` URI (or a bare path) into a local path."""
    parsed = urlparse(uri)
    if parsed.scheme and parsed.scheme != "file":
        raise ValueError(f"Only file:// URIs are supported, got {uri!r}")
    if not parsed.scheme:
        return Path(uri)
    return Path(url2pathname(parsed.path))


def path_to_uri(path: Path) -> str:
    return Path(path).expanduser().resolve().as_uri()


def normalize_uri(uri: str) -> str:
    """Canonical form used for identity checks (no trailing slash)."""
    u = (uri or "").strip()
    while u.endswith("/") and not u.endswith(":///"):
        u = u[:-1]
    return u


def _comparison_key(uri: str) -> str:
    return unquote(normalize_uri(uri))


def _is_same_or_child(uri: str, folder_uri: str) -> bool:
    """Both arguments are comparison keys (decoded, no trailing slash except at the root)."""
    if uri == folder_uri:
        return True
    prefix = folder_uri if folder_uri.endswith("/") else folder_uri + "/"
    return uri.startswith(prefix)


class Workspace:
    """Open workspace folders, in index order."""

    def __init__(self, folders: Iterable[WorkspaceFolder] = ()) -> None:
        self._folders: List[WorkspaceFolder] = [
            WorkspaceFolder(uri=normalize_uri(f.uri), name=f.name, index=f.index) for f in folders
        ]

    @classmethod
    def from_paths(cls, paths: Sequence[Path]) -> "Workspace":
        folders = []
        for idx, p in enumerate(paths):
            resolved = Path(p).expanduser().resolve()
            folders.append(WorkspaceFolder(uri=resolved.as_uri(), name=resolved.name, index=idx))
        return cls(folders)

    @property
    def folders(self) -> List[WorkspaceFolder]:
        return list(self._folders)

    def get_workspace_folder(self, uri: str) -> Optional[WorkspaceFolder]:
        """Return the open folder equal to or containing ``uri`` (deepest wins)."""
        target = _comparison_key(uri)
        best: Optional[WorkspaceFolder] = None
        for folder in self._folders:
            if _is_same_or_child(target, _comparison_key(folder.uri)):
                if best is None or len(folder.uri) > len(best.uri):
                    best = folder
        return best
