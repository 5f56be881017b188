"""Infrastructure: external tool detection and platform guidance.

Locates ``node``, ``git`` and the package managers on PATH, reads their
versions, and provides platform-specific installation guidance when a
tool is missing.

Rules
-----
* Detection via :func:`shutil.which`; versions via ``<tool> --version``.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from create_airfoil_app.core.protocols import CommandRunner
from create_airfoil_app.exceptions import UnsupportedRuntimeError
from create_airfoil_app.infra.process_runner import SubprocessRunner


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of probing for one executable.

    Attributes
    ----------
    name : str
        Executable name (e.g. ``"node"``).
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the executable, or ``None``.
    version : str | None
        First line of ``--version`` output, or ``None`` when unknown.
    install_commands : tuple[str, ...]
        Suggested commands for installing the tool on this platform.
        Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    version: str | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str, runner: CommandRunner | None = None) -> ToolStatus:
    """Probe the system for *name* and read its version.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    located = shutil.which(name)
    if located is None:
        return ToolStatus(
            name=name,
            found=False,
            path=None,
            version=None,
            install_commands=platform_install_commands(name),
        )

    result = (runner or SubprocessRunner()).run((name, "--version"))
    version: str | None = None
    if result.ok:
        lines = result.stdout.strip().splitlines()
        version = lines[0].strip() if lines else None

    return ToolStatus(
        name=name,
        found=True,
        path=Path(located).resolve(),
        version=version,
        install_commands=(),
    )


def node_version(runner: CommandRunner | None = None) -> str:
    """Return the installed Node.js version string (e.g. ``"v18.17.0"``).

    Raises
    ------
    UnsupportedRuntimeError
        If ``node`` is not on PATH or does not report a version.
    """
    status = detect_tool("node", runner)
    if not status.found or not status.version:
        hint_lines = ["Install Node.js using one of:"]
        hint_lines.extend(f"  {cmd}" for cmd in platform_install_commands("node"))
        raise UnsupportedRuntimeError(
            "Node.js is not installed or not on PATH.",
            hint="\n".join(hint_lines),
        )
    return status.version


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_NPM_GLOBAL_INSTALLS: dict[str, tuple[str, ...]] = {
    "pnpm": ("npm install -g pnpm", "corepack enable pnpm"),
    "yarn": ("npm install -g yarn", "corepack enable yarn"),
}


def platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    if name in _NPM_GLOBAL_INSTALLS:
        return _NPM_GLOBAL_INSTALLS[name]

    # npm ships with Node.js.
    package = "node" if name in ("node", "npm") else name
    system = platform.system().lower()
    if system == "windows":
        winget_ids = {"node": "OpenJS.NodeJS.LTS", "git": "Git.Git"}
        if package in winget_ids:
            return (f"winget install {winget_ids[package]}",)
    if system == "linux":
        apt_name = "nodejs" if package == "node" else package
        return (
            f"sudo apt install {apt_name}",
            f"sudo dnf install {apt_name}",
            f"sudo pacman -S {apt_name}",
        )
    if system == "darwin":
        return (f"brew install {package}",)
    if package == "node":
        return ("Download Node.js from https://nodejs.org/",)
    return (f"Please install {package} manually.",)
