"""Custom exception hierarchy for create-airfoil-app.

All exceptions that cross layer boundaries must inherit from
:class:`AirfoilError`.  Raw ``subprocess`` / ``OSError`` failures must
NEVER propagate beyond the infrastructure layer — they must be caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
AirfoilError
├── UnsupportedRuntimeError
├── InvalidNameError
├── DirectoryExistsError
├── FetchError
├── PromptCancelledError
├── InstallError
├── PostProcessError
├── CleanupError
└── EnvironmentError

The first three are raised before the target directory exists and end
the process directly.  The remaining pipeline errors are raised after
the template has been cloned and always lead to a full rollback.
"""

from __future__ import annotations

from collections.abc import Iterable


class AirfoilError(Exception):
    """Base exception for all create-airfoil-app errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Preflight -------------------------------------------------------------

class UnsupportedRuntimeError(AirfoilError):
    """Raised when Node.js is missing or older than the supported floor."""


class InvalidNameError(AirfoilError):
    """Raised when the project name is missing or breaks npm naming rules.

    Every individual violation is kept so the CLI can list them one per
    line instead of only showing the first.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: Iterable[str] = (),
        warnings: Iterable[str] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.errors: tuple[str, ...] = tuple(errors)
        self.warnings: tuple[str, ...] = tuple(warnings)


class DirectoryExistsError(AirfoilError):
    """Raised when the target project directory already exists."""


# --- Pipeline (trigger rollback) -------------------------------------------

class FetchError(AirfoilError):
    """Raised when the template repository cannot be cloned."""


class PromptCancelledError(AirfoilError):
    """Raised when the user aborts the interactive configuration."""


class InstallError(AirfoilError):
    """Raised when a package-manager invocation exits non-zero."""


class PostProcessError(AirfoilError):
    """Raised when boilerplate files cannot be merged into the project."""


class CleanupError(AirfoilError):
    """Raised when final cleanup or rollback deletion fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(AirfoilError):
    """Raised when a required Python UI dependency is not available."""
