"""sonar_autobind.models

Lightweight data structures shared by the scanner, the connection resolver
and the binding decision engine.

Why this exists
---------------
Connections used to be told apart only by which list they came from, with a
"SonarQube"/"SonarCloud" string invented wherever a label was needed. Here the
kind lives on the record itself (:class:`ServerKind`), so every consumer reads
the same fact instead of re-deriving it.

Everything here is immutable; records are produced once and consumed once.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

# Connection id used when a connection was configured without an explicit one.
DEFAULT_CONNECTION_ID = "<default>"

SONAR_SCANNER_CONFIG_FILENAME = "sonar-project.properties"
AUTOSCAN_CONFIG_FILENAME = ".sonarcloud.properties"
MARKER_FILENAMES = frozenset({SONAR_SCANNER_CONFIG_FILENAME, AUTOSCAN_CONFIG_FILENAME})

SONARCLOUD_HOST_DEFAULT = "https://sonarcloud.io"


class ServerKind(str, Enum):
    SONARQUBE = "SonarQube"
    SONARCLOUD = "SonarCloud"

    @property
    def context_value(self) -> str:
        """Kind tag handed to the binding service (``sonarqubeConnection`` ...)."""
        return f"{self.value.lower()}Connection"

    @classmethod
    def from_context_value(cls, value: str) -> "ServerKind":
        for kind in cls:
            if kind.context_value == value:
                return kind
        raise ValueError(f"Unknown connection kind tag: {value!r}")


@dataclass(frozen=True)
class BindingSuggestion:
    """One candidate remote project a folder could be bound to."""

    sonar_project_key: str
    connection_id: str


# folder URI -> candidate bindings for that folder
SuggestionMap = Dict[str, List[BindingSuggestion]]


@dataclass(frozen=True)
class WorkspaceFolder:
    """A folder open in the workspace. Identity is the canonical ``uri``."""

    uri: str
    name: str
    index: int = 0


@dataclass(frozen=True)
class SonarQubeConnection:
    server_url: str
    connection_id: Optional[str] = None
    token: Optional[str] = None

    @property
    def kind(self) -> ServerKind:
        return ServerKind.SONARQUBE

    @property
    def natural_key(self) -> str:
        return self.server_url

    @property
    def host(self) -> str:
        return self.server_url.rstrip("/")


@dataclass(frozen=True)
class SonarCloudConnection:
    organization_key: str
    connection_id: Optional[str] = None
    token: Optional[str] = None
    host_url: str = SONARCLOUD_HOST_DEFAULT

    @property
    def kind(self) -> ServerKind:
        return ServerKind.SONARCLOUD

    @property
    def natural_key(self) -> str:
        return self.organization_key

    @property
    def host(self) -> str:
        return self.host_url.rstrip("/")


Connection = Union[SonarQubeConnection, SonarCloudConnection]


def connection_label(connection: Connection) -> str:
    """Explicit connection id if present, else server URL / organization key."""
    return connection.connection_id or connection.natural_key


def effective_connection_id(connection: Connection) -> str:
    return connection.connection_id or DEFAULT_CONNECTION_ID


@dataclass(frozen=True)
class TargetConnection:
    """Connection chosen for a manual binding.

    Recomputed every time a manual-bind path is taken; never cached.
    """

    connection_id: str
    label: str
    kind: ServerKind

    @property
    def description(self) -> str:
        return self.kind.value

    @property
    def context_value(self) -> str:
        return self.kind.context_value

    @classmethod
    def from_connection(cls, connection: Connection) -> "TargetConnection":
        return cls(
            connection_id=effective_connection_id(connection),
            label=connection_label(connection),
            kind=connection.kind,
        )


@dataclass(frozen=True)
class FoundFile:
    """A file seen by the scanner.

    ``content`` is only populated for the two marker filenames.
    """

    file_name: str
    file_path: str
    content: Optional[str] = None
