"""sonar_autobind.connections

Configured SonarQube / SonarCloud connections and the resolver that picks one
for a manual binding.

Configuration
-------------
Connections come from an optional YAML file::

    sonarqube:
      - serverUrl: https://sonar.example.com
        connectionId: corp
        token: ${SONAR_TOKEN}
    sonarcloud:
      - organizationKey: my-org

``${VAR}`` references are expanded from the environment. A connection without
a token falls back to ``SONAR_TOKEN``.

Without a file, the same environment variables the scan scripts use describe a
single connection: ``SONAR_ORG`` (+ optional ``SONAR_HOST``) means SonarCloud,
``SONAR_HOST`` alone means SonarQube.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from sonar_autobind.models import (
    SONARCLOUD_HOST_DEFAULT,
    Connection,
    ServerKind,
    SonarCloudConnection,
    SonarQubeConnection,
    TargetConnection,
    effective_connection_id,
)
from sonar_autobind.presenter import PickItem, Presenter

logger = logging.getLogger(__name__)

SELECT_CONNECTION_TITLE = "Select Connection to Create Binding for"
SELECT_CONNECTION_PLACEHOLDER = "For which connection do you want to create project binding?"


# ----------------------------
# Connection store
# ----------------------------

@dataclass(frozen=True)
class ConnectionSettings:
    """The two disjoint connection lists."""

    sonarqube: List[SonarQubeConnection] = field(default_factory=list)
    sonarcloud: List[SonarCloudConnection] = field(default_factory=list)

    def sonarqube_connections(self) -> List[SonarQubeConnection]:
        return list(self.sonarqube)

    def sonarcloud_connections(self) -> List[SonarCloudConnection]:
        return list(self.sonarcloud)

    def all_connections(self) -> List[Connection]:
        return [*self.sonarqube, *self.sonarcloud]

    def find_connection(self, connection_id: str, kind: Optional[ServerKind] = None) -> Optional[Connection]:
        for c in self.all_connections():
            if kind is not None and c.kind != kind:
                continue
            if effective_connection_id(c) == connection_id:
                return c
        return None

    @staticmethod
    def from_dict(raw: Mapping[str, Any], *, env: Mapping[str, str]) -> "ConnectionSettings":
        raw = raw or {}
        default_token = env.get("SONAR_TOKEN") or None

        def _str(entry: Mapping[str, Any], key: str) -> Optional[str]:
            val = entry.get(key)
            if val is None:
                return None
            s = _expand(str(val), env).strip()
            return s or None

        sonarqube: List[SonarQubeConnection] = []
        for entry in _entries(raw, "sonarqube"):
            server_url = _str(entry, "serverUrl")
            if not server_url:
                raise ValueError(f"SonarQube connection is missing 'serverUrl': {dict(entry)!r}")
            sonarqube.append(
                SonarQubeConnection(
                    server_url=server_url,
                    connection_id=_str(entry, "connectionId"),
                    token=_str(entry, "token") or default_token,
                )
            )

        sonarcloud: List[SonarCloudConnection] = []
        for entry in _entries(raw, "sonarcloud"):
            org = _str(entry, "organizationKey")
            if not org:
                raise ValueError(f"SonarCloud connection is missing 'organizationKey': {dict(entry)!r}")
            sonarcloud.append(
                SonarCloudConnection(
                    organization_key=org,
                    connection_id=_str(entry, "connectionId"),
                    token=_str(entry, "token") or default_token,
                    host_url=_str(entry, "hostUrl") or SONARCLOUD_HOST_DEFAULT,
                )
            )

        return ConnectionSettings(sonarqube=sonarqube, sonarcloud=sonarcloud)

    @staticmethod
    def from_env(env: Mapping[str, str]) -> "ConnectionSettings":
        token = env.get("SONAR_TOKEN") or None
        org = env.get("SONAR_ORG")
        host = env.get("SONAR_HOST")
        if org:
            return ConnectionSettings(
                sonarcloud=[
                    SonarCloudConnection(
                        organization_key=org,
                        token=token,
                        host_url=host or SONARCLOUD_HOST_DEFAULT,
                    )
                ]
            )
        if host:
            return ConnectionSettings(sonarqube=[SonarQubeConnection(server_url=host, token=token)])
        return ConnectionSettings()


def _expand(value: str, env: Mapping[str, str]) -> str:
    if "$" not in value:
        return value
    out = value
    for k, v in env.items():
        out = out.replace("${" + k + "}", v)
    return out


def _entries(raw: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    items = raw.get(key) or []
    if not isinstance(items, list):
        raise ValueError(f"'{key}' must be a list of connections")
    out = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"Each '{key}' connection must be a mapping, got {item!r}")
        out.append(item)
    return out


def load_connection_settings(
    path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> ConnectionSettings:
    """Load connections from YAML, or from the environment when no file exists."""

    env = os.environ if env is None else env
    if path is None or not Path(path).exists():
        settings = ConnectionSettings.from_env(env)
        logger.debug(
            "No connections file at %s; %d connection(s) from environment",
            path,
            len(settings.all_connections()),
        )
        return settings

    p = Path(path).expanduser().resolve()
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Connections YAML must be a mapping/object at top level: {p}")
    settings = ConnectionSettings.from_dict(raw, env=env)
    logger.debug(
        "Loaded %d SonarQube and %d SonarCloud connection(s) from %s",
        len(settings.sonarqube),
        len(settings.sonarcloud),
        p,
    )
    return settings


# ----------------------------
# Resolver
# ----------------------------

class ConnectionResolver:
    def __init__(self, settings: ConnectionSettings, presenter: Presenter) -> None:
        self._settings = settings
        self._presenter = presenter

    def is_connection_configured(self) -> bool:
        return bool(self._settings.sonarcloud_connections() or self._settings.sonarqube_connections())

    def is_sonarcloud_connection(self, connection_id: str) -> bool:
        return any(effective_connection_id(c) == connection_id for c in self._settings.sonarcloud_connections())

    def connection_choices(self) -> List[TargetConnection]:
        """SonarQube connections first, then SonarCloud."""
        connections: Sequence[Connection] = [
            *self._settings.sonarqube_connections(),
            *self._settings.sonarcloud_connections(),
        ]
        return [TargetConnection.from_connection(c) for c in connections]

    def resolve_target_connection(self) -> Optional[TargetConnection]:
        """Return the only connection, or ask the user to pick one.

        ``None`` means the user dismissed the choice; callers must abort.
        """

        choices = self.connection_choices()
        if len(choices) == 1:
            return choices[0]

        items = [PickItem(label=c.label, description=c.description, value=c) for c in choices]
        picked = self._presenter.pick(
            items,
            title=SELECT_CONNECTION_TITLE,
            placeholder=SELECT_CONNECTION_PLACEHOLDER,
        )
        if picked is None:
            return None
        return picked.value


def connections_summary(settings: ConnectionSettings) -> Dict[str, List[str]]:
    return {
        ServerKind.SONARQUBE.value: [c.connection_id or c.server_url for c in settings.sonarqube],
        ServerKind.SONARCLOUD.value: [c.connection_id or c.organization_key for c in settings.sonarcloud],
    }
