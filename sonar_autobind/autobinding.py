"""sonar_autobind.autobinding

Binding decision engine.

Given the candidate bindings the language server found for each workspace
folder, decide per folder whether to offer the single best match, ask the user
to bind manually, or stay quiet, and remember when the user opted out.

Decision rules
--------------
1. No connection configured, or the workspace opted out: do nothing.
2. Two or more folders carry suggestions: one workspace-wide "configure
   binding?" prompt replaces every per-folder prompt.
3. Otherwise each open, non-suppressed folder gets exactly one prompt:

   - one suggestion   -> offer that project (bind / choose manually / opt out)
   - several          -> generic prompt (bind manually / opt out)
   - none             -> same generic prompt

A dismissed prompt never changes state. If the user dismisses the connection
choice that a manual binding needs, the binding service is not called.

All prompts are shown one after another; nothing here is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Protocol, Union

from sonar_autobind.connections import ConnectionResolver
from sonar_autobind.models import BindingSuggestion, SuggestionMap, WorkspaceFolder
from sonar_autobind.presenter import Presenter
from sonar_autobind.protocol import SuggestBindingParams
from sonar_autobind.suppression import SuppressionStore
from sonar_autobind.workspace import Workspace

logger = logging.getLogger(__name__)

AUTOBINDING_THRESHOLD = 1

CONNECTED_MODE_DOCS_URL = "https://docs.sonarsource.com/sonarlint/vs-code/team-features/connected-mode/"

BIND_ACTION = "Configure Binding"
CHOOSE_MANUALLY_ACTION = "Choose Manually"
DONT_ASK_AGAIN_ACTION = "Don't Ask Again"

CONFIGURE_BINDING_PROMPT_MESSAGE = (
    "There are folders in your workspace that are not bound to any SonarQube/SonarCloud projects.\n"
    "Do you want to configure binding?\n"
    f"[Learn More]({CONNECTED_MODE_DOCS_URL})"
)


class BindingService(Protocol):
    def save_binding(self, project_key: str, connection_id: str, folder: WorkspaceFolder) -> None:
        ...

    def create_or_edit_binding(self, connection_id: str, context_value: str) -> None:
        ...


class Outcome(str, Enum):
    BOUND = "bound"            # save_binding called with a suggestion
    MANUAL = "manual"          # create_or_edit_binding called
    SUPPRESSED = "suppressed"  # user opted out
    DISMISSED = "dismissed"    # prompt closed without an answer
    ABORTED = "aborted"        # connection choice dismissed
    SKIPPED = "skipped"        # no prompt shown


WORKSPACE_SCOPE = "<workspace>"


@dataclass(frozen=True)
class AutoBindingOutcome:
    """What happened to one folder (or to the whole workspace) in one check."""

    scope: str
    outcome: Outcome
    detail: str = ""


class AutoBindingService:
    def __init__(
        self,
        *,
        binding_service: BindingService,
        suppression: SuppressionStore,
        resolver: ConnectionResolver,
        workspace: Workspace,
        presenter: Presenter,
    ) -> None:
        self._bindings = binding_service
        self._suppression = suppression
        self._resolver = resolver
        self._workspace = workspace
        self._presenter = presenter

    def check_conditions_and_attempt_autobinding(
        self, params: Union[SuggestBindingParams, SuggestionMap]
    ) -> List[AutoBindingOutcome]:
        suggestions = params.suggestions if isinstance(params, SuggestBindingParams) else params

        if not self._resolver.is_connection_configured():
            logger.debug("No SonarQube/SonarCloud connection configured; ignoring binding suggestions")
            return []
        if self._suppression.is_workspace_suppressed():
            logger.debug("Binding prompts are disabled for this workspace")
            return []

        if len(suggestions) > AUTOBINDING_THRESHOLD:
            return [self.ask_user_before_auto_binding()]
        return self._auto_bind_all_folders(suggestions)

    def _auto_bind_all_folders(self, suggestions: SuggestionMap) -> List[AutoBindingOutcome]:
        outcomes: List[AutoBindingOutcome] = []
        for folder_uri, folder_suggestions in suggestions.items():
            folder = self._workspace.get_workspace_folder(folder_uri)
            if folder is None:
                logger.debug("Ignoring suggestions for %s: not an open workspace folder", folder_uri)
                outcomes.append(AutoBindingOutcome(folder_uri, Outcome.SKIPPED, "not in workspace"))
                continue
            if self._suppression.is_folder_suppressed(folder.uri):
                logger.debug("Ignoring suggestions for %s: folder opted out", folder.uri)
                outcomes.append(AutoBindingOutcome(folder.uri, Outcome.SKIPPED, "suppressed"))
                continue
            outcomes.append(self._prompt_to_auto_bind(folder_suggestions, folder))
        return outcomes

    def ask_user_before_auto_binding(self) -> AutoBindingOutcome:
        action = self._presenter.show_message(CONFIGURE_BINDING_PROMPT_MESSAGE, BIND_ACTION, DONT_ASK_AGAIN_ACTION)
        if action == DONT_ASK_AGAIN_ACTION:
            self._suppression.suppress_workspace()
            return AutoBindingOutcome(WORKSPACE_SCOPE, Outcome.SUPPRESSED)
        if action == BIND_ACTION:
            return self._bind_manually(WORKSPACE_SCOPE)
        return AutoBindingOutcome(WORKSPACE_SCOPE, Outcome.DISMISSED)

    def _prompt_to_auto_bind(
        self, suggestions: List[BindingSuggestion], folder: WorkspaceFolder
    ) -> AutoBindingOutcome:
        if len(suggestions) == 1:
            return self._prompt_to_auto_bind_single_option(suggestions[0], folder)
        # Several candidates and none at all get the same prompt.
        return self._prompt_to_bind_manually(folder)

    def single_option_message(self, suggestion: BindingSuggestion, folder: WorkspaceFolder) -> str:
        common = f"Do you want to bind folder '{folder.name}' to project '{suggestion.sonar_project_key}'"
        if self._resolver.is_sonarcloud_connection(suggestion.connection_id):
            message = f"{common} of SonarCloud organization '{suggestion.connection_id}'?"
        else:
            message = f"{common} of SonarQube server '{suggestion.connection_id}'?"
        return f"{message}\n[Learn More]({CONNECTED_MODE_DOCS_URL})"

    def _prompt_to_auto_bind_single_option(
        self, suggestion: BindingSuggestion, folder: WorkspaceFolder
    ) -> AutoBindingOutcome:
        action = self._presenter.show_message(
            self.single_option_message(suggestion, folder),
            BIND_ACTION,
            CHOOSE_MANUALLY_ACTION,
            DONT_ASK_AGAIN_ACTION,
        )
        if action == BIND_ACTION:
            self._bindings.save_binding(suggestion.sonar_project_key, suggestion.connection_id, folder)
            logger.info(
                "Bound %s to project %s (connection %s)",
                folder.uri,
                suggestion.sonar_project_key,
                suggestion.connection_id,
            )
            return AutoBindingOutcome(folder.uri, Outcome.BOUND, suggestion.sonar_project_key)
        if action == CHOOSE_MANUALLY_ACTION:
            return self._bind_manually(folder.uri)
        if action == DONT_ASK_AGAIN_ACTION:
            self._suppression.suppress_folder(folder.uri)
            return AutoBindingOutcome(folder.uri, Outcome.SUPPRESSED)
        return AutoBindingOutcome(folder.uri, Outcome.DISMISSED)

    def _prompt_to_bind_manually(self, folder: WorkspaceFolder) -> AutoBindingOutcome:
        action = self._presenter.show_message(CONFIGURE_BINDING_PROMPT_MESSAGE, BIND_ACTION, DONT_ASK_AGAIN_ACTION)
        if action == BIND_ACTION:
            return self._bind_manually(folder.uri)
        if action == DONT_ASK_AGAIN_ACTION:
            self._suppression.suppress_folder(folder.uri)
            return AutoBindingOutcome(folder.uri, Outcome.SUPPRESSED)
        return AutoBindingOutcome(folder.uri, Outcome.DISMISSED)

    def _bind_manually(self, scope: str) -> AutoBindingOutcome:
        target = self._resolver.resolve_target_connection()
        if target is None:
            logger.debug("No connection selected; binding for %s aborted", scope)
            return AutoBindingOutcome(scope, Outcome.ABORTED)
        self._bindings.create_or_edit_binding(target.connection_id, target.context_value)
        return AutoBindingOutcome(scope, Outcome.MANUAL, target.connection_id)


def summarize_outcomes(outcomes: List[AutoBindingOutcome]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for o in outcomes:
        counts[o.outcome.value] = counts.get(o.outcome.value, 0) + 1
    return counts
