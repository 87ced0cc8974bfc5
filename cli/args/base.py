from __future__ import annotations

import argparse

MODES = ("list-files", "suggest", "status")


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags shared by every mode.

    This includes:
    - mode selection
    - where state / bindings / connections live
    - .env loading and verbosity
    """

    parser.add_argument(
        "--mode",
        choices=list(MODES),
        help=(
            "list-files = scan a folder for Sonar configuration files, "
            "suggest = run binding suggestions through the prompt flow, "
            "status = show connections, bindings and opt-outs"
        ),
    )
    parser.add_argument(
        "--home",
        default=None,
        help="Directory holding workspace_state.json / bindings.json (default: $SONAR_AUTOBIND_HOME or ~/.sonar-autobind)",
    )
    parser.add_argument(
        "--connections",
        default=None,
        help="Connections YAML (default: <home>/connections.yaml; falls back to SONAR_HOST/SONAR_ORG)",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: project root .env)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    # list-files
    parser.add_argument("--folder-uri", help="(list-files) file:// URI of the folder to scan")

    # suggest
    parser.add_argument(
        "--params",
        help="(suggest) JSON file with a suggestBinding payload: {\"suggestions\": {folderUri: [...]}}",
    )
    parser.add_argument(
        "--folder",
        action="append",
        default=[],
        help="(suggest) Workspace folder path; repeat for multi-root workspaces. "
        "Defaults to the folders named in the payload.",
    )
