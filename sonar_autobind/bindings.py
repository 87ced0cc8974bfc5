"""sonar_autobind.bindings

File-backed binding service used by the CLI.

A binding is recorded as ``{folder_uri: {"connectionId": ..., "projectKey": ...}}``
in one JSON file. Activating connected-mode analysis for a bound folder is the
editor's job; this module only remembers the choice.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from sonar_autobind.connections import ConnectionSettings
from sonar_autobind.fs import read_json, write_json_atomic
from sonar_autobind.models import Connection, ServerKind, WorkspaceFolder
from sonar_autobind.presenter import PickItem, Presenter
from sonar_autobind.workspace import Workspace
from tools.sonar.api import search_projects
from tools.sonar.types import SonarConfig

logger = logging.getLogger(__name__)

ProjectSearch = Callable[[SonarConfig], List[Dict[str, str]]]


def sonar_config_for(connection: Connection) -> SonarConfig:
    if connection.kind == ServerKind.SONARCLOUD:
        return SonarConfig(host=connection.host, token=connection.token, org=connection.organization_key)
    return SonarConfig(host=connection.host, token=connection.token)


class FileBindingService:
    def __init__(
        self,
        path: Path,
        *,
        settings: ConnectionSettings,
        workspace: Workspace,
        presenter: Presenter,
        project_search: ProjectSearch = search_projects,
    ) -> None:
        self.path = Path(path)
        self._settings = settings
        self._workspace = workspace
        self._presenter = presenter
        self._project_search = project_search

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = read_json(self.path)
        if not isinstance(raw, dict):
            raise ValueError(f"Bindings file must contain a JSON object: {self.path}")
        return raw

    def bindings(self) -> Dict[str, Any]:
        return self._load()

    def get_binding(self, folder_uri: str) -> Optional[Dict[str, str]]:
        return self._load().get(folder_uri)

    def save_binding(self, project_key: str, connection_id: str, folder: WorkspaceFolder) -> None:
        data = self._load()
        data[folder.uri] = {"connectionId": connection_id, "projectKey": project_key}
        write_json_atomic(self.path, data)
        logger.info("Saved binding %s -> %s (%s)", folder.name, project_key, connection_id)

    def create_or_edit_binding(self, connection_id: str, context_value: str) -> None:
        kind = ServerKind.from_context_value(context_value)
        connection = self._settings.find_connection(connection_id, kind)
        if connection is None:
            raise ValueError(f"Unknown {kind.value} connection: {connection_id!r}")

        folder = self._pick_folder()
        if folder is None:
            return

        projects = self._project_search(sonar_config_for(connection))
        if not projects:
            logger.warning("No projects found for %s connection '%s'", kind.value, connection_id)
            return

        current = self.get_binding(folder.uri) or {}
        items = [
            PickItem(
                label=p["name"],
                description=p["key"] + (" (current)" if p["key"] == current.get("projectKey") else ""),
                value=p["key"],
            )
            for p in projects
        ]
        picked = self._presenter.pick(
            items,
            title=f"Bind folder '{folder.name}'",
            placeholder=f"Select the {kind.value} project to bind with '{folder.name}'",
        )
        if picked is None:
            return
        self.save_binding(picked.value, connection_id, folder)

    def _pick_folder(self) -> Optional[WorkspaceFolder]:
        folders = self._workspace.folders
        if len(folders) == 1:
            return folders[0]
        picked = self._presenter.pick(
            [PickItem(label=f.name, description=f.uri, value=f) for f in folders],
            title="Select Folder to Bind",
            placeholder="Which workspace folder do you want to bind?",
        )
        return None if picked is None else picked.value
