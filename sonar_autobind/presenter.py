"""sonar_autobind.presenter

What the decision engine needs from a user interface.

The engine and the connection resolver never talk to a terminal or an editor
directly; they are handed a :class:`Presenter`. A missing answer (``None``)
always means the user dismissed the prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence


@dataclass(frozen=True)
class PickItem:
    label: str
    description: str = ""
    value: Any = None


class Presenter(Protocol):
    def show_message(self, message: str, *actions: str) -> Optional[str]:
        """Show ``message`` with one button per action; return the chosen action."""
        ...

    def pick(self, items: Sequence[PickItem], *, title: str, placeholder: str) -> Optional[PickItem]:
        """Let the user choose one of ``items``."""
        ...
