"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and CLI
collaborators must satisfy.  Core code depends ONLY on these protocols
— never on concrete implementations — so the pipeline can be driven
entirely by fakes in tests.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from create_airfoil_app.core.models import ProjectRequest, StepEvent, UserSelection

StepCallback = Callable[[StepEvent], None]
"""Receives progress notifications from the pipeline runner."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one blocking external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)


class CommandRunner(Protocol):
    """Contract for running an external command to completion."""

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        """Run *args* in *cwd* and return its exit status and output.

        Implementations must never raise for a non-zero exit status or
        a missing executable; both are reported through the returned
        :class:`CommandResult`.
        """
        ...  # pragma: no cover


class TemplateFetcher(Protocol):
    """Contract for retrieving the template into a fresh directory."""

    def fetch(self, source: str, target: Path) -> None:
        """Shallow-copy *source* into *target*.

        Raises
        ------
        FetchError
            When retrieval fails for any reason.
        """
        ...  # pragma: no cover


class Configurator(Protocol):
    """Contract for collecting the user's package-manager / styling choice."""

    def configure(self, request: ProjectRequest) -> UserSelection:
        """Return the selection for *request*.

        Raises
        ------
        PromptCancelledError
            When the user aborts the prompt.
        """
        ...  # pragma: no cover


class ProjectFilesystem(Protocol):
    """Contract for the filesystem operations the pipeline performs."""

    def cwd(self) -> Path:
        ...  # pragma: no cover

    def change_directory(self, path: Path) -> None:
        ...  # pragma: no cover

    def exists(self, path: Path) -> bool:
        ...  # pragma: no cover

    def merge_tree(self, source: Path, destination: Path) -> None:
        """Copy every file under *source* into *destination*, overwriting.

        Raises
        ------
        PostProcessError
            When *source* is missing or a copy fails.
        """
        ...  # pragma: no cover

    def remove_tree(self, path: Path) -> None:
        """Recursively delete *path*; a missing path is not an error.

        Raises
        ------
        CleanupError
            When deletion fails.
        """
        ...  # pragma: no cover
