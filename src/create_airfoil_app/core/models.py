"""Domain models for create-airfoil-app.

All records are **frozen** dataclasses — immutable value objects
threaded through the pipeline as arguments and return values.  No
module-level mutable state holds the project name, path or the user's
choices.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from create_airfoil_app.exceptions import AirfoilError


# ---------------------------------------------------------------------------
# Enumerated user choices
# ---------------------------------------------------------------------------

class PackageManager(str, Enum):
    """Supported JavaScript package managers."""

    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"


class CssStyling(str, Enum):
    """Supported CSS styling options."""

    NONE = "none"
    CHAKRA_UI = "chakraui"
    TAILWIND_CSS = "tailwindcss"


# ---------------------------------------------------------------------------
# Request / selection
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProjectRequest:
    """The project to create, fixed once the path has been resolved."""

    name: str
    """Validated npm package name."""

    target_path: Path
    """Absolute directory the template is cloned into."""


@dataclass(frozen=True, slots=True)
class UserSelection:
    """Answers collected by the interactive configurator."""

    package_manager: PackageManager
    css_styling: CssStyling


@dataclass(frozen=True, slots=True)
class NameValidation:
    """Outcome of checking a name against npm naming rules."""

    errors: tuple[str, ...]
    warnings: tuple[str, ...]

    @property
    def valid_for_new_packages(self) -> bool:
        return not self.errors and not self.warnings

    @property
    def valid_for_old_packages(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Pipeline bookkeeping
# ---------------------------------------------------------------------------

class Step(str, Enum):
    """Pipeline stages that run after the target directory is created."""

    FETCH = "fetch"
    CONFIGURE = "configure"
    INSTALL = "install"
    POST_PROCESS = "post_process"
    CLEANUP = "cleanup"
    ROLLBACK = "rollback"


class StepStatus(str, Enum):
    STARTED = "started"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class StepEvent:
    """Progress notification emitted to the reporter callback."""

    step: Step
    status: StepStatus
    detail: str = ""


@dataclass(frozen=True, slots=True)
class StepResult:
    """Explicit success / failure value returned by each pipeline step."""

    step: Step
    error: AirfoilError | None = None
    selection: UserSelection | None = None
    """Only set by the configure step."""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, step: Step, *, selection: UserSelection | None = None) -> StepResult:
        return cls(step=step, selection=selection)

    @classmethod
    def failure(cls, step: Step, error: AirfoilError) -> StepResult:
        return cls(step=step, error=error)


@dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Final state of one scaffold run.

    ``error`` is the first failure that triggered rollback.
    ``rollback_error`` is set only when deleting the target directory
    itself failed afterwards.
    """

    request: ProjectRequest
    completed_steps: tuple[Step, ...]
    selection: UserSelection | None = None
    error: AirfoilError | None = None
    rolled_back: bool = False
    rollback_error: AirfoilError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
