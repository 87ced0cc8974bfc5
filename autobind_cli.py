#!/usr/bin/env python3
"""
Command-line front end for connected-mode binding suggestions.

Modes:
  1) list-files - list a folder's files, with the content of Sonar config files
  2) suggest    - run a suggestBinding payload through the prompt flow
  3) status     - show connections, saved bindings and "don't ask again" flags

Usage:
  python autobind_cli.py
  python autobind_cli.py --mode list-files --folder-uri file:///home/me/project
  python autobind_cli.py --mode suggest --params suggestions.json --folder ~/project
  python autobind_cli.py --mode status
"""

from __future__ import annotations

import argparse

from cli.args.base import add_base_args
from cli.dispatch import dispatch
from sonar_autobind.wiring import configure_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bind workspace folders to SonarQube / SonarCloud projects.")
    add_base_args(parser)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.verbose)
    raise SystemExit(dispatch(args))


if __name__ == "__main__":
    main()
