from __future__ import annotations

from sonar_autobind.connections import connections_summary
from sonar_autobind.wiring import App


def run_status(app: App) -> int:
    print("\nConnections")
    for kind, names in connections_summary(app.settings).items():
        print(f"  {kind:<10}: {', '.join(names) if names else '-'}")

    print("\nBindings")
    bindings = app.bindings.bindings()
    if not bindings:
        print("  -")
    for uri, b in sorted(bindings.items()):
        print(f"  {uri} -> {b.get('projectKey')} ({b.get('connectionId')})")

    print("\nBinding prompts")
    print(f"  Workspace disabled : {app.suppression.is_workspace_suppressed()}")
    folders = app.suppression.suppressed_folders()
    print(f"  Folders disabled   : {', '.join(folders) if folders else '-'}")
    print(f"\n  State file : {app.paths.state}")
    return 0
