import tempfile
import unittest
from pathlib import Path

from fakes import FakePresenter

from sonar_autobind.bindings import FileBindingService, sonar_config_for
from sonar_autobind.connections import ConnectionSettings
from sonar_autobind.models import SonarCloudConnection, SonarQubeConnection, WorkspaceFolder
from sonar_autobind.workspace import Workspace
from tools.sonar.types import SonarConfig


SETTINGS = ConnectionSettings(
    sonarqube=[SonarQubeConnection(server_url="https://sq.local/", connection_id="corp", token="t1")],
    sonarcloud=[SonarCloudConnection(organization_key="acme", token="t2")],
)


class FakeSearch:
    def __init__(self, projects):
        self.projects = projects
        self.configs = []

    def __call__(self, cfg: SonarConfig):
        self.configs.append(cfg)
        return list(self.projects)


class TestFileBindingService(unittest.TestCase):
    def make(self, td: str, *, folders, presenter, projects=()):
        self.search = FakeSearch(projects)
        return FileBindingService(
            Path(td) / "bindings.json",
            settings=SETTINGS,
            workspace=Workspace(folders),
            presenter=presenter,
            project_search=self.search,
        )

    def test_save_binding_persists_per_folder(self) -> None:
        folder = WorkspaceFolder(uri="file:///ws", name="ws")
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(td, folders=[folder], presenter=FakePresenter())
            svc.save_binding("proj1", "cloudConn", folder)
            self.assertEqual({"connectionId": "cloudConn", "projectKey": "proj1"}, svc.get_binding("file:///ws"))
            self.assertIsNone(svc.get_binding("file:///other"))

    def test_create_or_edit_binding_picks_project_for_single_folder(self) -> None:
        folder = WorkspaceFolder(uri="file:///ws", name="ws")
        presenter = FakePresenter(picks=[1])
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(
                td,
                folders=[folder],
                presenter=presenter,
                projects=[{"key": "a", "name": "A"}, {"key": "b", "name": "B"}],
            )
            svc.create_or_edit_binding("<default>", "sonarcloudConnection")
            self.assertEqual({"connectionId": "<default>", "projectKey": "b"}, svc.get_binding("file:///ws"))

        self.assertEqual([SonarConfig(host="https://sonarcloud.io", token="t2", org="acme")], self.search.configs)
        self.assertEqual(1, len(presenter.pick_calls))

    def test_create_or_edit_binding_asks_for_folder_in_multi_root(self) -> None:
        folders = [WorkspaceFolder(uri="file:///a", name="a"), WorkspaceFolder(uri="file:///b", name="b", index=1)]
        presenter = FakePresenter(picks=[1, 0])
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(td, folders=folders, presenter=presenter, projects=[{"key": "p", "name": "P"}])
            svc.create_or_edit_binding("corp", "sonarqubeConnection")
            self.assertEqual({"file:///b": {"connectionId": "corp", "projectKey": "p"}}, svc.bindings())
        self.assertEqual(SonarConfig(host="https://sq.local", token="t1"), self.search.configs[0])

    def test_dismissed_project_pick_saves_nothing(self) -> None:
        folder = WorkspaceFolder(uri="file:///ws", name="ws")
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(td, folders=[folder], presenter=FakePresenter(picks=[None]), projects=[{"key": "p", "name": "P"}])
            svc.create_or_edit_binding("corp", "sonarqubeConnection")
            self.assertEqual({}, svc.bindings())
            self.assertFalse((Path(td) / "bindings.json").exists())

    def test_no_projects_found_logs_warning_and_skips_pick(self) -> None:
        folder = WorkspaceFolder(uri="file:///ws", name="ws")
        presenter = FakePresenter()
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(td, folders=[folder], presenter=presenter, projects=[])
            with self.assertLogs("sonar_autobind.bindings", level="WARNING") as logs:
                svc.create_or_edit_binding("corp", "sonarqubeConnection")
            self.assertEqual({}, svc.bindings())
        self.assertIn("No projects found for SonarQube connection 'corp'", logs.output[0])
        self.assertEqual([], presenter.pick_calls)

    def test_unknown_connection_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            svc = self.make(td, folders=[], presenter=FakePresenter())
            with self.assertRaises(ValueError):
                svc.create_or_edit_binding("corp", "sonarcloudConnection")

    def test_sonar_config_for_sonarqube_has_no_org(self) -> None:
        cfg = sonar_config_for(SonarQubeConnection(server_url="https://sq/"))
        self.assertIsNone(cfg.org)
        self.assertEqual("https://sq", cfg.host)


if __name__ == "__main__":
    unittest.main()
