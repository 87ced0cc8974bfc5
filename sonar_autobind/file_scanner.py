"""sonar_autobind.file_scanner

Recursive listing of a workspace folder for binding discovery.

Every regular file is reported; the two scanner configuration files
(``sonar-project.properties`` and ``.sonarcloud.properties``) additionally
carry their text, because their ``sonar.projectKey`` / ``sonar.organization``
entries are the strongest hint about which remote project a folder belongs to.

Failure model
-------------
Scanning is best-effort. If a directory cannot be listed (or a marker file in
it cannot be read) that directory contributes nothing and the scan carries on
with its siblings. Callers therefore cannot tell an empty folder from an
unreadable one.

Symlinks, sockets and other special entries are skipped; symlinks are not
followed, so link cycles cannot make the walk loop.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Union

from sonar_autobind.models import MARKER_FILENAMES, FoundFile
from sonar_autobind.protocol import FolderUriParams, ListFilesInScopeResponse
from sonar_autobind.workspace import uri_to_path

logger = logging.getLogger(__name__)


def _read_marker(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def scan(root: Union[str, Path]) -> List[FoundFile]:
    """Depth-first listing of ``root``; see module docstring for semantics."""

    root = Path(root)
    try:
        found: List[FoundFile] = []
        with os.scandir(root) as it:
            entries = list(it)
        for entry in entries:
            if entry.is_file(follow_symlinks=False):
                full = root / entry.name
                content = _read_marker(full) if entry.name in MARKER_FILENAMES else None
                found.append(FoundFile(file_name=entry.name, file_path=str(full), content=content))
            elif entry.is_dir(follow_symlinks=False):
                found.extend(scan(root / entry.name))
        return found
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", root, e)
        return []


def list_files_in_folder(params: FolderUriParams) -> ListFilesInScopeResponse:
    return ListFilesInScopeResponse(found_files=scan(uri_to_path(params.folder_uri)))
