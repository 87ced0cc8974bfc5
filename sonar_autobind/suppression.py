"""sonar_autobind.suppression

Durable "don't ask again" flags for binding prompts.

Two flags, both kept in the workspace state:

- workspace flag: never prompt for this workspace again
- folder flag:    URIs of folders that must never be prompted again

The folder set only grows; nothing in this package removes entries.
"""

from __future__ import annotations

import logging
import threading
from typing import List

from sonar_autobind.state import WorkspaceState

DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_WS_FLAG = "doNotAskAboutAutoBindingForWorkspace"
DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_FOLDER_FLAG = "doNotAskAboutAutoBindingForFolder"

logger = logging.getLogger(__name__)


class SuppressionStore:
    def __init__(self, state: WorkspaceState) -> None:
        self._state = state
        # Read-then-append on the folder set must not interleave.
        self._lock = threading.Lock()

    def is_workspace_suppressed(self) -> bool:
        return bool(self._state.get(DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_WS_FLAG, False))

    def suppressed_folders(self) -> List[str]:
        raw = self._state.get(DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_FOLDER_FLAG, [])
        if not isinstance(raw, list):
            return []
        return [str(u) for u in raw]

    def is_folder_suppressed(self, folder_uri: str) -> bool:
        return folder_uri in self.suppressed_folders()

    def suppress_workspace(self) -> None:
        if self.is_workspace_suppressed():
            return
        self._state.update(DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_WS_FLAG, True)
        logger.info("Binding prompts disabled for this workspace")

    def suppress_folder(self, folder_uri: str) -> None:
        with self._lock:
            folders = self.suppressed_folders()
            if folder_uri in folders:
                return
            self._state.update(DO_NOT_ASK_ABOUT_AUTO_BINDING_FOR_FOLDER_FLAG, [*folders, folder_uri])
        logger.info("Binding prompts disabled for folder %s", folder_uri)
