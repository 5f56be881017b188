"""Core install service — turns a :class:`UserSelection` into installs.

This service delegates the actual process execution to a
:class:`~create_airfoil_app.core.protocols.CommandRunner` injected at
construction time.  It is responsible for:

* Looking up the pinned dependency set for the chosen styling option.
* Building the package-manager command lines.
* Interpreting exit statuses and raising :class:`InstallError`.

Guarantees
----------
* Exactly one base ``install`` per run.
* At most one extra install, and only when styling is not ``none``.
* No retries.
"""

from __future__ import annotations

from pathlib import Path

from create_airfoil_app.core.models import CssStyling, PackageManager, UserSelection
from create_airfoil_app.core.protocols import CommandResult, CommandRunner
from create_airfoil_app.exceptions import InstallError

STYLING_DEPENDENCIES: dict[CssStyling, tuple[str, ...]] = {
    CssStyling.NONE: (),
    CssStyling.CHAKRA_UI: (
        "@chakra-ui/react",
        "@emotion/react@^11",
        "@emotion/styled@^11",
        "framer-motion@^6",
    ),
    CssStyling.TAILWIND_CSS: (
        "tailwindcss",
        "postcss",
        "autoprefixer",
    ),
}
"""Pinned packages added on top of the template's own manifest."""

ADD_VERBS: dict[PackageManager, str] = {
    PackageManager.NPM: "install",
    PackageManager.PNPM: "add",
    PackageManager.YARN: "add",
}
"""Sub-command each manager uses to add new packages to the manifest."""


class InstallService:
    """Stateless service that drives dependency installation.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self._runner: CommandRunner = runner

    # ------------------------------------------------------------------
    # Command construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def styling_dependencies(css_styling: CssStyling) -> tuple[str, ...]:
        """Return the pinned package set for *css_styling*."""
        return STYLING_DEPENDENCIES[css_styling]

    @staticmethod
    def build_commands(selection: UserSelection) -> list[tuple[str, ...]]:
        """Return every command line the install step will run, in order."""
        manager = selection.package_manager.value
        commands: list[tuple[str, ...]] = [(manager, "install")]

        extra = InstallService.styling_dependencies(selection.css_styling)
        if extra:
            verb = ADD_VERBS[selection.package_manager]
            commands.append((manager, verb, *extra))
        return commands

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def install(self, selection: UserSelection, project_dir: Path) -> None:
        """Install base and styling dependencies inside *project_dir*.

        Raises
        ------
        InstallError
            On the first command that exits non-zero.  Later commands
            are not attempted.
        """
        for command in self.build_commands(selection):
            result = self._runner.run(command, cwd=project_dir)
            if not result.ok:
                raise _install_error(result)


def _install_error(result: CommandResult) -> InstallError:
    detail = (result.stderr or result.stdout).strip()
    message = f"`{result.command_line}` exited with status {result.returncode}."
    if detail:
        message = f"{message}\n{detail}"
    return InstallError(
        message,
        hint=f"Make sure `{result.args[0]}` is installed and the network is reachable.",
    )
