"""sonar_autobind.protocol

Wire format for the two messages exchanged with the language server:

- ``suggestBinding`` notification   -> :class:`SuggestBindingParams`
- ``listFilesInFolder`` request      -> :class:`FolderUriParams`
  and its response                   -> :class:`ListFilesInScopeResponse`

Payloads use the server's camelCase keys; the Python side uses the
snake_case records from :mod:`sonar_autobind.models`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from sonar_autobind.models import BindingSuggestion, FoundFile, SuggestionMap


def _suggestion_from_dict(raw: Any, *, folder_uri: str) -> BindingSuggestion:
    if not isinstance(raw, dict):
        raise ValueError(f"Binding suggestion for {folder_uri} must be an object, got {type(raw).__name__}")
    project_key = raw.get("sonarProjectKey")
    connection_id = raw.get("connectionId")
    if not project_key or not connection_id:
        raise ValueError(
            f"Binding suggestion for {folder_uri} needs both sonarProjectKey and connectionId: {raw!r}"
        )
    return BindingSuggestion(sonar_project_key=str(project_key), connection_id=str(connection_id))


@dataclass(frozen=True)
class SuggestBindingParams:
    suggestions: SuggestionMap = field(default_factory=dict)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "SuggestBindingParams":
        raw = raw or {}
        suggestions_raw = raw.get("suggestions", {})
        if not isinstance(suggestions_raw, dict):
            raise ValueError("'suggestions' must map folder URIs to lists of suggestions")

        suggestions: SuggestionMap = {}
        for folder_uri, items in suggestions_raw.items():
            if not isinstance(items, list):
                raise ValueError(f"Suggestions for {folder_uri} must be a list")
            suggestions[str(folder_uri)] = [_suggestion_from_dict(i, folder_uri=folder_uri) for i in items]
        return SuggestBindingParams(suggestions=suggestions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": {
                uri: [
                    {"sonarProjectKey": s.sonar_project_key, "connectionId": s.connection_id}
                    for s in items
                ]
                for uri, items in self.suggestions.items()
            }
        }


@dataclass(frozen=True)
class FolderUriParams:
    folder_uri: str

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "FolderUriParams":
        folder_uri = (raw or {}).get("folderUri")
        if not isinstance(folder_uri, str) or not folder_uri.strip():
            raise ValueError("'folderUri' is required")
        return FolderUriParams(folder_uri=folder_uri.strip())


@dataclass(frozen=True)
class ListFilesInScopeResponse:
    found_files: List[FoundFile] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "foundFiles": [
                {"fileName": f.file_name, "filePath": f.file_path, "content": f.content}
                for f in self.found_files
            ]
        }
