from __future__ import annotations

import argparse
from pathlib import Path

from cli.commands.list_files import run_list_files
from cli.commands.status import run_status
from cli.commands.suggest import load_params, run_suggest, workspace_folders
from cli.ui import ConsolePresenter, choose_from_menu
from sonar_autobind.wiring import build_app


def _path_or_none(raw):
    return Path(raw) if raw else None


def dispatch(args: argparse.Namespace) -> int:
    mode = args.mode
    if mode is None:
        if args.folder_uri:
            mode = "list-files"
        elif args.params:
            mode = "suggest"
        else:
            mode = choose_from_menu(
                "Choose an action:",
                {
                    "list-files": "List files (and Sonar config files) in a folder",
                    "suggest": "Process binding suggestions",
                    "status": "Show connections, bindings and opt-outs",
                },
            )
            if mode is None:
                return 0

    if mode == "list-files":
        return run_list_files(args)

    params = load_params(args) if mode == "suggest" else None
    folders = workspace_folders(args, params) if params is not None else []

    try:
        app = build_app(
            presenter=ConsolePresenter(),
            folders=folders,
            home=_path_or_none(args.home),
            connections=_path_or_none(args.connections),
            env_file=_path_or_none(args.env_file),
        )
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(f"ERROR: {e}")

    if mode == "status":
        return run_status(app)

    try:
        return run_suggest(app, params)
    except ValueError as e:
        raise SystemExit(f"ERROR: {e}")
