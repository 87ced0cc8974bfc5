"""sonar_autobind.wiring

This module is the **composition root** for the runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables
- configure logging
- choose real vs stub implementations (useful for testing)
- build the decision engine with its collaborators

Nothing else constructs an :class:`AutoBindingService`; entrypoints call
:func:`build_app` and pass the result along.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from sonar_autobind.autobinding import AutoBindingService
from sonar_autobind.bindings import FileBindingService
from sonar_autobind.connections import ConnectionResolver, ConnectionSettings, load_connection_settings
from sonar_autobind.presenter import Presenter
from sonar_autobind.state import JsonFileState
from sonar_autobind.suppression import SuppressionStore
from sonar_autobind.workspace import Workspace


ROOT_DIR = Path(__file__).resolve().parents[1]
ENV_PATH: Path = ROOT_DIR / ".env"

HOME_ENV_VAR = "SONAR_AUTOBIND_HOME"
LOG_LEVEL_ENV_VAR = "SONAR_AUTOBIND_LOG_LEVEL"
DEFAULT_HOME = Path("~/.sonar-autobind")

STATE_FILENAME = "workspace_state.json"
BINDINGS_FILENAME = "bindings.json"
CONNECTIONS_FILENAME = "connections.yaml"


@dataclass(frozen=True)
class AppPaths:
    home: Path
    state: Path
    bindings: Path
    connections: Path


def resolve_paths(home: Optional[Path] = None, connections: Optional[Path] = None) -> AppPaths:
    base = Path(home or os.environ.get(HOME_ENV_VAR) or DEFAULT_HOME).expanduser().resolve()
    return AppPaths(
        home=base,
        state=base / STATE_FILENAME,
        bindings=base / BINDINGS_FILENAME,
        connections=Path(connections).expanduser() if connections else base / CONNECTIONS_FILENAME,
    )


def configure_logging(verbose: bool = False) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    level = getattr(logging, str(level_name).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@dataclass
class App:
    paths: AppPaths
    settings: ConnectionSettings
    workspace: Workspace
    suppression: SuppressionStore
    bindings: FileBindingService
    autobinding: AutoBindingService


def build_app(
    *,
    presenter: Presenter,
    folders: Sequence[Path] = (),
    home: Optional[Path] = None,
    connections: Optional[Path] = None,
    env_file: Optional[Path] = None,
    load_env: bool = True,
) -> App:
    """Assemble the engine and its collaborators from disk + environment."""

    if load_env:
        load_dotenv(env_file or ENV_PATH, override=False)

    paths = resolve_paths(home, connections)
    settings = load_connection_settings(paths.connections)
    workspace = Workspace.from_paths(list(folders))
    suppression = SuppressionStore(JsonFileState(paths.state))
    bindings = FileBindingService(paths.bindings, settings=settings, workspace=workspace, presenter=presenter)
    autobinding = AutoBindingService(
        binding_service=bindings,
        suppression=suppression,
        resolver=ConnectionResolver(settings, presenter),
        workspace=workspace,
        presenter=presenter,
    )
    return App(
        paths=paths,
        settings=settings,
        workspace=workspace,
        suppression=suppression,
        bindings=bindings,
        autobinding=autobinding,
    )
