"""Preflight validation, path resolution and the directory guard.

Everything here runs *before* the target directory is created, so every
failure ends the process directly — there is nothing to roll back.

Guarantees
----------
* No filesystem writes.
* No ``print()`` — the CLI layer renders the raised errors.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from create_airfoil_app.config import DEFAULT_NODE_FLOOR
from create_airfoil_app.core.models import ProjectRequest
from create_airfoil_app.core.naming import validate_package_name
from create_airfoil_app.exceptions import (
    DirectoryExistsError,
    InvalidNameError,
    UnsupportedRuntimeError,
)

_USAGE_HINT = "For example:\n    create-airfoil-app my-app"


def parse_major_version(version: str) -> int:
    """Return the major component of a ``v18.17.0`` style version string.

    Raises
    ------
    ValueError
        If the leading component is not an integer.
    """
    cleaned = version.strip().lstrip("vV")
    return int(cleaned.split(".", 1)[0])


def check_runtime_version(version: str, floor: int = DEFAULT_NODE_FLOOR) -> int:
    """Ensure the Node.js *version* meets *floor*; return its major number.

    Raises
    ------
    UnsupportedRuntimeError
        If the version cannot be parsed or is below *floor*.
    """
    try:
        major = parse_major_version(version)
    except ValueError as exc:
        raise UnsupportedRuntimeError(
            f"Could not determine the Node.js version from {version!r}.",
            hint=f"create-airfoil-app requires Node {floor} or higher.",
        ) from exc

    if major < floor:
        raise UnsupportedRuntimeError(
            f"You are running Node {version.strip()}. "
            f"create-airfoil-app requires Node {floor} or higher.",
            hint="Please update your version of Node.",
        )
    return major


def validate_project_name(args: Sequence[str]) -> str:
    """Pick the project name from positional *args* and validate it.

    Raises
    ------
    InvalidNameError
        If no name is given, or the name is not valid for a new npm
        package.  Every error and warning is attached to the exception.
    """
    if not args or args[0] is None:
        raise InvalidNameError(
            "You have to provide a name for your app.",
            hint=_USAGE_HINT,
        )

    name = args[0]
    result = validate_package_name(name)
    if not result.valid_for_new_packages:
        raise InvalidNameError(
            f"Cannot create a project named {name!r} because of npm naming restrictions.",
            errors=result.errors,
            warnings=result.warnings,
            hint="Please fix the problems listed above.",
        )
    return name


def resolve_target_path(cwd: Path | str, name: str) -> Path:
    """Join *cwd* and *name* into the absolute project directory."""
    return Path(os.path.abspath(os.path.join(cwd, name)))


def resolve_project_request(cwd: Path | str, name: str) -> ProjectRequest:
    """Build the immutable :class:`ProjectRequest` for *name*."""
    return ProjectRequest(name=name, target_path=resolve_target_path(cwd, name))


def ensure_target_absent(path: Path) -> None:
    """Refuse to continue when *path* already exists.

    Must run before any fetch; it is the only guard against cloning
    into (and later deleting) a directory the user already owns.

    Raises
    ------
    DirectoryExistsError
        If anything already exists at *path*.
    """
    if path.exists() or path.is_symlink():
        raise DirectoryExistsError(
            f"Directory already exists: {path}",
            hint="Choose a different project name or remove the existing directory.",
        )
