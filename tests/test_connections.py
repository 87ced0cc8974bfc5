import tempfile
import unittest
from pathlib import Path

from fakes import FakePresenter

from sonar_autobind.connections import (
    SELECT_CONNECTION_TITLE,
    ConnectionResolver,
    ConnectionSettings,
    load_connection_settings,
)
from sonar_autobind.models import (
    DEFAULT_CONNECTION_ID,
    ServerKind,
    SonarCloudConnection,
    SonarQubeConnection,
)


class TestConnectionResolver(unittest.TestCase):
    def test_single_sonarqube_connection_falls_back_to_server_url(self) -> None:
        settings = ConnectionSettings(sonarqube=[SonarQubeConnection(server_url="https://sq.local")])
        presenter = FakePresenter()
        target = ConnectionResolver(settings, presenter).resolve_target_connection()

        self.assertEqual("https://sq.local", target.label)
        self.assertEqual(DEFAULT_CONNECTION_ID, target.connection_id)
        self.assertEqual(ServerKind.SONARQUBE, target.kind)
        self.assertEqual("sonarqubeConnection", target.context_value)
        self.assertEqual([], presenter.pick_calls)

    def test_single_sonarcloud_connection_prefers_explicit_id(self) -> None:
        settings = ConnectionSettings(
            sonarcloud=[SonarCloudConnection(organization_key="acme", connection_id="acme-cloud")]
        )
        target = ConnectionResolver(settings, FakePresenter()).resolve_target_connection()
        self.assertEqual("acme-cloud", target.label)
        self.assertEqual("acme-cloud", target.connection_id)
        self.assertEqual("SonarCloud", target.description)
        self.assertEqual("sonarcloudConnection", target.context_value)

    def test_single_sonarcloud_connection_label_falls_back_to_org(self) -> None:
        settings = ConnectionSettings(sonarcloud=[SonarCloudConnection(organization_key="acme")])
        target = ConnectionResolver(settings, FakePresenter()).resolve_target_connection()
        self.assertEqual("acme", target.label)
        self.assertEqual(DEFAULT_CONNECTION_ID, target.connection_id)

    def test_several_connections_are_offered_with_kind_tags(self) -> None:
        settings = ConnectionSettings(
            sonarqube=[SonarQubeConnection(server_url="https://sq.local", connection_id="sq")],
            sonarcloud=[SonarCloudConnection(organization_key="acme")],
        )
        presenter = FakePresenter(picks=[1])
        target = ConnectionResolver(settings, presenter).resolve_target_connection()

        items, title = presenter.pick_calls[0]
        self.assertEqual(SELECT_CONNECTION_TITLE, title)
        self.assertEqual([("sq", "SonarQube"), ("acme", "SonarCloud")], [(i.label, i.description) for i in items])
        self.assertEqual(ServerKind.SONARCLOUD, target.kind)
        self.assertEqual(DEFAULT_CONNECTION_ID, target.connection_id)

    def test_dismissed_choice_returns_none(self) -> None:
        settings = ConnectionSettings(
            sonarqube=[SonarQubeConnection(server_url="https://a"), SonarQubeConnection(server_url="https://b")]
        )
        self.assertIsNone(ConnectionResolver(settings, FakePresenter(picks=[None])).resolve_target_connection())

    def test_zero_connections_offers_empty_choice(self) -> None:
        presenter = FakePresenter()
        self.assertIsNone(ConnectionResolver(ConnectionSettings(), presenter).resolve_target_connection())
        self.assertEqual([], presenter.pick_calls[0][0])

    def test_is_sonarcloud_connection(self) -> None:
        settings = ConnectionSettings(
            sonarqube=[SonarQubeConnection(server_url="https://sq", connection_id="qube")],
            sonarcloud=[SonarCloudConnection(organization_key="acme", connection_id="cloud")],
        )
        resolver = ConnectionResolver(settings, FakePresenter())
        self.assertTrue(resolver.is_sonarcloud_connection("cloud"))
        self.assertFalse(resolver.is_sonarcloud_connection("qube"))
        self.assertFalse(resolver.is_sonarcloud_connection("missing"))
        self.assertTrue(resolver.is_connection_configured())
        self.assertFalse(ConnectionResolver(ConnectionSettings(), FakePresenter()).is_connection_configured())


class TestLoadConnectionSettings(unittest.TestCase):
    def test_yaml_file_with_env_expansion_and_token_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "connections.yaml"
            p.write_text(
                "sonarqube:\n"
                "  - serverUrl: https://sonar.example.com\n"
                "    connectionId: corp\n"
                "    token: ${CORP_TOKEN}\n"
                "sonarcloud:\n"
                "  - organizationKey: acme\n",
                encoding="utf-8",
            )
            settings = load_connection_settings(p, env={"CORP_TOKEN": "t-corp", "SONAR_TOKEN": "t-default"})

        self.assertEqual(
            [SonarQubeConnection(server_url="https://sonar.example.com", connection_id="corp", token="t-corp")],
            settings.sonarqube_connections(),
        )
        self.assertEqual(
            [SonarCloudConnection(organization_key="acme", token="t-default")],
            settings.sonarcloud_connections(),
        )

    def test_missing_required_field_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "connections.yaml"
            p.write_text("sonarcloud:\n  - connectionId: x\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_connection_settings(p, env={})

    def test_non_mapping_yaml_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "connections.yaml"
            p.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_connection_settings(p, env={})

    def test_environment_fallback(self) -> None:
        cloud = load_connection_settings(None, env={"SONAR_ORG": "acme", "SONAR_TOKEN": "t"})
        self.assertEqual([SonarCloudConnection(organization_key="acme", token="t")], cloud.sonarcloud)
        self.assertEqual([], cloud.sonarqube)

        qube = load_connection_settings(Path("/nonexistent/connections.yaml"), env={"SONAR_HOST": "https://sq"})
        self.assertEqual([SonarQubeConnection(server_url="https://sq")], qube.sonarqube)

        self.assertEqual([], load_connection_settings(None, env={}).all_connections())

    def test_find_connection_by_effective_id_and_kind(self) -> None:
        settings = ConnectionSettings(
            sonarqube=[SonarQubeConnection(server_url="https://sq")],
            sonarcloud=[SonarCloudConnection(organization_key="acme", connection_id="cloud")],
        )
        self.assertEqual("https://sq", settings.find_connection(DEFAULT_CONNECTION_ID).server_url)
        self.assertIsNone(settings.find_connection("cloud", ServerKind.SONARQUBE))
        self.assertEqual("acme", settings.find_connection("cloud", ServerKind.SONARCLOUD).organization_key)


if __name__ == "__main__":
    unittest.main()
