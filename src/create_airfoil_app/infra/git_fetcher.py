"""Template retrieval through ``git clone --depth 1``."""

from __future__ import annotations

from pathlib import Path

from create_airfoil_app.core.protocols import CommandRunner
from create_airfoil_app.exceptions import FetchError


class GitTemplateFetcher:
    """Concrete :class:`~create_airfoil_app.core.protocols.TemplateFetcher`.

    Performs a single shallow clone.  Failures are raised as
    :class:`FetchError` and never retried.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    @staticmethod
    def build_command(source: str, target: Path) -> tuple[str, ...]:
        return ("git", "clone", "--depth", "1", source, str(target))

    def fetch(self, source: str, target: Path) -> None:
        result = self._runner.run(self.build_command(source, target))
        if result.ok:
            return

        detail = result.stderr.strip() or result.stdout.strip()
        message = f"Could not clone template from {source}."
        if detail:
            message = f"{message}\n{detail}"
        raise FetchError(
            message,
            hint="Check your network connection and that git can reach the repository.",
        )
