"""Rich-based progress display driven by pipeline step events.

:class:`RichStepReporter` is the ``on_event`` callback handed to the
:class:`~create_airfoil_app.core.pipeline.ScaffoldPipeline`.  It shows a
spinner while a long-running step (clone, install) is in flight and a
check mark or cross once it ends.

Design
------
* The configure step never gets a spinner; it would fight with the
  interactive prompt for the terminal.
* Shutdown-safe: stopping an already stopped spinner is a no-op.
* Falls back to plain stderr lines when Rich is missing.
"""

from __future__ import annotations

import sys
from typing import Any

from create_airfoil_app.cli.console import get_rich_console
from create_airfoil_app.core.models import Step, StepEvent, StepStatus
from create_airfoil_app.exceptions import EnvironmentError

STEP_LABELS: dict[Step, str] = {
    Step.FETCH: "Cloning template",
    Step.CONFIGURE: "Configuring project",
    Step.INSTALL: "Installing dependencies",
    Step.POST_PROCESS: "Adding styling boilerplate",
    Step.CLEANUP: "Cleaning up",
    Step.ROLLBACK: "Removing project",
}

_SPINNER_STEPS: frozenset[Step] = frozenset({Step.FETCH, Step.INSTALL, Step.CLEANUP})


class RichStepReporter:
    """Callable step-event adapter for Rich.

    Usage::

        with RichStepReporter() as reporter:
            ScaffoldPipeline(..., on_event=reporter).run(request)
    """

    def __init__(self, *, verbose: bool = False) -> None:
        try:
            self._console: Any = get_rich_console()
        except EnvironmentError:
            self._console = None
        self._verbose = verbose
        self._status: Any = None

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichStepReporter:
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Stop the active spinner (idempotent)."""
        if self._status is not None:
            self._status.stop()
            self._status = None

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def __call__(self, event: StepEvent) -> None:
        label = STEP_LABELS[event.step]

        if event.status is StepStatus.STARTED:
            self._started(event.step, label)
        elif event.status is StepStatus.FINISHED:
            self.stop()
            self._line(f"[green]✓[/green] {label}", f"OK    {label}")
        elif event.status is StepStatus.FAILED:
            self.stop()
            self._line(f"[red]✗[/red] {label}", f"FAIL  {label}")

    def echo_command(self, command_line: str) -> None:
        """Print an external command before it runs (``--verbose`` only)."""
        if self._verbose:
            self._line(f"[dim]$ {command_line}[/dim]", f"$ {command_line}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _started(self, step: Step, label: str) -> None:
        self.stop()
        if self._console is None:
            print(f"{label}...", file=sys.stderr)
            return
        if step in _SPINNER_STEPS:
            self._status = self._console.status(f"[bold blue]{label}…[/bold blue]")
            self._status.start()
        else:
            self._console.print(f"[bold blue]{label}…[/bold blue]")

    def _line(self, rich_text: str, plain_text: str) -> None:
        if self._console is None:
            print(plain_text, file=sys.stderr)
        else:
            self._console.print(rich_text)
