"""CLI console helpers with optional Rich support.

Rich is imported lazily so that ``--help`` and ``--version`` keep
working even when the UI extras are not installed.  All output goes to
stderr; stdout stays free for the child processes.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from create_airfoil_app.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"(?<!\\)\[/?[a-z ]+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, highlight=False)


def strip_markup(text: str) -> str:
    """Remove simple ``[bold]``-style Rich tags for plain output.

    Tags escaped with :func:`escape_markup` are kept as literal text.
    """
    return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
    """``print``-compatible proxy that renders with Rich when available."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
            print(*plain, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def escape_markup(text: str) -> str:
    """Escape ``[`` in external text (git / npm output) before Rich renders it."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return _MARKUP_TAG.sub(lambda match: "\\" + match.group(0), text)
    return escape(text)
