from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from sonar_autobind.presenter import PickItem

DISMISS_KEY = "Z"


def choose_from_menu(
    title: str,
    options: Dict[str, object],
    *,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
) -> Optional[str]:
    """Show a 1..N menu of keys in 'options' and return the chosen key.

    'Z' (or end of input) dismisses the menu and returns None.
    """
    keys = list(options.keys())
    print_fn("\n" + title)
    if not keys:
        print_fn("(nothing to choose from)")
        return None
    for idx, key in enumerate(keys, start=1):
        val = options[key]
        if isinstance(val, dict) and "label" in val:
            label = str(val["label"])
        else:
            label = str(val)
        print_fn(f"[{idx}] {label}")

    while True:
        try:
            choice = input_fn(f"Enter number (1-{len(keys)}) or {DISMISS_KEY} to dismiss: ").strip()
        except EOFError:
            return None
        if not choice:
            print_fn(f"Please enter a number or {DISMISS_KEY} to dismiss.")
            continue
        if choice.upper() == DISMISS_KEY:
            return None
        if choice.isdigit():
            n = int(choice)
            if 1 <= n <= len(keys):
                return keys[n - 1]
        print_fn(f"Invalid choice. Please enter 1-{len(keys)} or {DISMISS_KEY}.")


class ConsolePresenter:
    """Terminal rendition of editor notifications and quick picks."""

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
    ) -> None:
        self._input = input_fn
        self._print = print_fn

    def show_message(self, message: str, *actions: str) -> Optional[str]:
        return choose_from_menu(
            message,
            {a: a for a in actions},
            input_fn=self._input,
            print_fn=self._print,
        )

    def pick(self, items: Sequence[PickItem], *, title: str, placeholder: str) -> Optional[PickItem]:
        options: Dict[str, object] = {}
        for idx, item in enumerate(items):
            label = f"{item.label} ({item.description})" if item.description else item.label
            options[str(idx)] = label
        key = choose_from_menu(
            f"{title}\n{placeholder}",
            options,
            input_fn=self._input,
            print_fn=self._print,
        )
        return None if key is None else items[int(key)]
