"""sonar_autobind.state

Generic keyed persistence surface (the editor's "workspace state").

Callers only ever ``get`` a key with a default and ``update`` it with a new
JSON-serializable value. Two implementations:

- :class:`MemoryState`   : process-local dict, used by tests and dry runs
- :class:`JsonFileState` : one JSON object on disk, survives restarts
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from sonar_autobind.fs import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class WorkspaceState(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def update(self, key: str, value: Any) -> None:
        ...


class MemoryState:
    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def update(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileState:
    """Workspace state stored as a single JSON object.

    The file is re-read on every ``get`` so two processes sharing one state
    file see each other's opt-outs. Writes are atomic.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = read_json(self.path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable workspace state %s: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring workspace state %s: top level is not an object", self.path)
            return {}
        return raw

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def update(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            write_json_atomic(self.path, data)
        logger.debug("Workspace state %s: %s updated", self.path, key)

    def keys(self) -> list[str]:
        return list(self._load().keys())
