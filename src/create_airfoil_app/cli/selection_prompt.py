"""Interactive package-manager / styling selection for the CLI layer.

This module is responsible for:

* Prompting for a package manager and a CSS styling option via
  questionary arrow-key selects.
* Rendering a Rich summary table of the resulting choice.
* Returning a :class:`~create_airfoil_app.core.models.UserSelection`.

No installation logic lives here.
"""

from __future__ import annotations

import sys
from typing import Any

from create_airfoil_app.cli.console import console
from create_airfoil_app.core.models import (
    CssStyling,
    PackageManager,
    ProjectRequest,
    UserSelection,
)
from create_airfoil_app.exceptions import EnvironmentError, PromptCancelledError

PACKAGE_MANAGER_LABELS: dict[PackageManager, str] = {
    PackageManager.PNPM: "PNPM",
    PackageManager.NPM: "NPM",
    PackageManager.YARN: "Yarn",
}

CSS_STYLING_LABELS: dict[CssStyling, str] = {
    CssStyling.NONE: "None",
    CssStyling.CHAKRA_UI: "Chakra UI",
    CssStyling.TAILWIND_CSS: "Tailwind CSS",
}

DEFAULT_PACKAGE_MANAGER = PackageManager.PNPM
DEFAULT_CSS_STYLING = CssStyling.NONE


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for the summary."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Single prompts
# ---------------------------------------------------------------------------

def _ask_select(questionary: Any, message: str, labels: dict[Any, str], default: Any) -> Any:
    """Run one arrow-key select and return the chosen enum member."""
    choices = [
        questionary.Choice(title=label, value=member)
        for member, label in labels.items()
    ]
    default_choice = next(choice for choice in choices if choice.value is default)

    selected = questionary.select(
        message,
        choices=choices,
        default=default_choice,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # None on Ctrl+C / Esc

    if selected is None:
        raise PromptCancelledError(
            "Project configuration was cancelled.",
            hint="Use arrow keys to pick an option, then press Enter.",
        )
    return selected


def _print_plain_summary(rows: list[tuple[str, str]]) -> None:
    """Render the summary without Rich."""
    print("\nProject setup", file=sys.stderr)
    for label, value in rows:
        print(f"  {label:<16} {value}", file=sys.stderr)
    print(file=sys.stderr)


def _display_summary(request: ProjectRequest, selection: UserSelection) -> None:
    rows = [
        ("Name", request.name),
        ("Location", str(request.target_path)),
        ("Package manager", PACKAGE_MANAGER_LABELS[selection.package_manager]),
        ("CSS styling", CSS_STYLING_LABELS[selection.css_styling]),
    ]
    try:
        table_class = _import_rich_table()
    except EnvironmentError:
        _print_plain_summary(rows)
        return

    table = table_class(show_header=False, border_style="dim", title="Project setup")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, value)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public prompt function / configurator
# ---------------------------------------------------------------------------

def prompt_user_selection(
    request: ProjectRequest,
    *,
    package_manager: PackageManager | None = None,
    css_styling: CssStyling | None = None,
) -> UserSelection:
    """Ask for whichever choices were not supplied on the command line.

    Raises
    ------
    PromptCancelledError
        If the user cancels either prompt.
    """
    if package_manager is None or css_styling is None:
        questionary = _import_questionary()
        if package_manager is None:
            package_manager = _ask_select(
                questionary,
                "Choose a package manager",
                PACKAGE_MANAGER_LABELS,
                DEFAULT_PACKAGE_MANAGER,
            )
        if css_styling is None:
            css_styling = _ask_select(
                questionary,
                "Choose CSS styling",
                CSS_STYLING_LABELS,
                DEFAULT_CSS_STYLING,
            )

    selection = UserSelection(package_manager=package_manager, css_styling=css_styling)
    _display_summary(request, selection)
    return selection


class QuestionaryConfigurator:
    """:class:`~create_airfoil_app.core.protocols.Configurator` backed by questionary.

    Values given up front (``--package-manager`` / ``--css``) skip the
    matching prompt.
    """

    def __init__(
        self,
        *,
        package_manager: PackageManager | None = None,
        css_styling: CssStyling | None = None,
    ) -> None:
        self._package_manager = package_manager
        self._css_styling = css_styling

    def configure(self, request: ProjectRequest) -> UserSelection:
        return prompt_user_selection(
            request,
            package_manager=self._package_manager,
            css_styling=self._css_styling,
        )
