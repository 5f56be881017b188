"""``create-airfoil-app --doctor`` — environment diagnostics.

Reports whether Node.js, git and the supported package managers are
available before the user tries to scaffold a project.  Node below the
supported floor or a missing git is a failure; a missing package
manager is only a warning since any one of the three is enough.
"""

from __future__ import annotations

import platform
import sys

from create_airfoil_app.cli import exit_codes
from create_airfoil_app.cli.console import console
from create_airfoil_app.config import ScaffoldSettings
from create_airfoil_app.core.models import PackageManager
from create_airfoil_app.core.preflight import parse_major_version
from create_airfoil_app.infra.toolchain import ToolStatus, detect_tool
from create_airfoil_app.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _node_check(status: ToolStatus, floor: int) -> Check:
    """Return (label, value, status) for the Node.js row."""
    if not status.found or not status.version:
        return "Node.js", "not found", "[red]FAIL[/red]"
    try:
        major = parse_major_version(status.version)
    except ValueError:
        return "Node.js", status.version, "[yellow]WARN[/yellow]"
    if major < floor:
        return "Node.js", status.version, f"[red]FAIL (>={floor} required)[/red]"
    return "Node.js", status.version, "[green]OK[/green]"


def _git_check(status: ToolStatus) -> Check:
    if not status.found:
        return "git", "not found", "[red]FAIL[/red]"
    return "git", status.version or "unknown", "[green]OK[/green]"


def _package_manager_check(status: ToolStatus) -> Check:
    if not status.found:
        return status.name, "not found", "[yellow]WARN[/yellow]"
    return status.name, status.version or "unknown", "[green]OK[/green]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _python_check() -> Check:
    return "Python", platform.python_version(), "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\ncreate-airfoil-app doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<20} {'Value':<30} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<20} {value:<30} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: ScaffoldSettings | None = None) -> int:
    """Run every diagnostic check and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    settings = settings or ScaffoldSettings()

    node = detect_tool("node")
    git = detect_tool("git")
    managers = [detect_tool(manager.value) for manager in PackageManager]

    checks: list[Check] = [
        ("create-airfoil-app", __version__, "[green]OK[/green]"),
        _python_check(),
        _node_check(node, settings.node_floor),
        _git_check(git),
        *(_package_manager_check(status) for status in managers),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(checks)
    else:
        table = Table(
            title="create-airfoil-app doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print()
        console.print(table)
        console.print()

    missing = [status for status in (node, git, *managers) if not status.found]
    for status in missing:
        console.print(f"[yellow]{status.name} is not installed.[/yellow] Try one of:")
        for cmd in status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if all(not status.found for status in managers):
        console.print("[bold red]No supported package manager found.[/bold red]")
        has_failure = True

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
