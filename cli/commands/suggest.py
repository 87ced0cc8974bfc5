from __future__ import annotations

from pathlib import Path

from cli.common import folders_from_uris, read_json_arg
from sonar_autobind.autobinding import summarize_outcomes
from sonar_autobind.protocol import SuggestBindingParams
from sonar_autobind.wiring import App


def load_params(args) -> SuggestBindingParams:
    raw = read_json_arg(args.params, flag="--params")
    try:
        return SuggestBindingParams.from_dict(raw)
    except ValueError as e:
        raise SystemExit(f"ERROR: invalid suggestBinding payload: {e}")


def workspace_folders(args, params: SuggestBindingParams) -> list[Path]:
    if args.folder:
        return [Path(f) for f in args.folder]
    return folders_from_uris(list(params.suggestions.keys()))


def run_suggest(app: App, params: SuggestBindingParams) -> int:
    if not app.workspace.folders:
        print("⚠️ No workspace folders; pass --folder for each open folder.")

    outcomes = app.autobinding.check_conditions_and_attempt_autobinding(params)
    if not outcomes:
        print("ℹ️ Nothing to do (no connection configured, or binding prompts are disabled).")
        return 0

    print("\n✅ Binding suggestions processed.")
    for o in outcomes:
        detail = f" ({o.detail})" if o.detail else ""
        print(f"  {o.scope}: {o.outcome.value}{detail}")
    counts = summarize_outcomes(outcomes)
    print("  Summary : " + ", ".join(f"{k}={v}" for k, v in sorted(counts.items())))
    return 0
