"""``subprocess``-backed implementation of :class:`CommandRunner`.

This module is the **only** place in the codebase that spawns external
processes.  Every invocation blocks until the child exits; the exit
status is reported back instead of raised so that callers decide which
typed error a failure maps to.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from create_airfoil_app.core.protocols import CommandResult

COMMAND_NOT_FOUND: int = 127
"""Exit status reported when the executable is missing (POSIX shell convention)."""


class SubprocessRunner:
    """Concrete :class:`~create_airfoil_app.core.protocols.CommandRunner`.

    Parameters
    ----------
    echo:
        Optional callable receiving each command line before it runs.
        Used by ``--verbose``.
    """

    def __init__(self, echo: Callable[[str], None] | None = None) -> None:
        self._echo = echo

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        """Run *args* to completion and capture its output."""
        argv = tuple(args)
        if self._echo is not None:
            self._echo(" ".join(argv))

        # Resolves npm.cmd / yarn.cmd style shims on Windows.
        executable = shutil.which(argv[0]) or argv[0]

        try:
            completed = subprocess.run(
                [executable, *argv[1:]],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(
                args=argv,
                returncode=COMMAND_NOT_FOUND,
                stderr=f"{argv[0]}: command not found",
            )
        except OSError as exc:
            return CommandResult(args=argv, returncode=COMMAND_NOT_FOUND, stderr=str(exc))

        return CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
