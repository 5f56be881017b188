"""CLI application entry point and command routing for create-airfoil-app.

This module is the **sole error boundary** for the entire application.
It catches :class:`~create_airfoil_app.exceptions.AirfoilError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Flow for ``create-airfoil-app <name>``
--------------------------------------
1. Preflight: Node.js version floor, npm name rules.
2. Resolve ``<cwd>/<name>`` and refuse an existing directory.
3. Hand over to :class:`~create_airfoil_app.core.pipeline.ScaffoldPipeline`
   which clones, prompts, installs, merges boilerplate and cleans up,
   rolling back the whole directory on the first failure.

Errors from steps 1-2 propagate straight to :func:`cli`; nothing has
been created yet.  Pipeline errors come back inside the outcome.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from create_airfoil_app.cli import exit_codes
from create_airfoil_app.cli.console import console, escape_markup
from create_airfoil_app.config import ScaffoldSettings
from create_airfoil_app.core.models import CssStyling, PackageManager
from create_airfoil_app.exceptions import AirfoilError, InvalidNameError
from create_airfoil_app.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-airfoil-app",
        description="Scaffold a new Next.js app from the Airfoil template.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "project",
        nargs="?",
        default=None,
        help="Name of the new project directory (must be a valid npm package name).",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check that Node.js, git and a package manager are available.",
    )
    parser.add_argument(
        "--template",
        default=None,
        metavar="URL",
        help="Git URL of the template repository to clone.",
    )
    parser.add_argument(
        "--package-manager",
        choices=[manager.value for manager in PackageManager],
        default=None,
        help="Skip the package manager prompt.",
    )
    parser.add_argument(
        "--css",
        choices=[styling.value for styling in CssStyling],
        default=None,
        help="Skip the CSS styling prompt.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print every external command before it runs.",
    )
    return parser


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------

def _render_error(exc: AirfoilError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    if isinstance(exc, InvalidNameError):
        for problem in exc.errors:
            console.print(f"  [red]✗[/red] {escape_markup(problem)}")
        for problem in exc.warnings:
            console.print(f"  [yellow]![/yellow] {escape_markup(problem)}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace, settings: ScaffoldSettings) -> int:
    """Validate the request, then run the scaffold pipeline."""
    from create_airfoil_app.cli.progress import RichStepReporter
    from create_airfoil_app.cli.selection_prompt import QuestionaryConfigurator
    from create_airfoil_app.core.install_service import InstallService
    from create_airfoil_app.core.pipeline import ScaffoldPipeline
    from create_airfoil_app.core.preflight import (
        check_runtime_version,
        ensure_target_absent,
        resolve_project_request,
        validate_project_name,
    )
    from create_airfoil_app.infra.filesystem import LocalFilesystem
    from create_airfoil_app.infra.git_fetcher import GitTemplateFetcher
    from create_airfoil_app.infra.process_runner import SubprocessRunner
    from create_airfoil_app.infra.toolchain import node_version

    console.print("\n[bold magenta]Create Airfoil Next.js App[/bold magenta]\n")

    check_runtime_version(node_version(), settings.node_floor)
    name = validate_project_name([args.project] if args.project is not None else [])
    request = resolve_project_request(Path.cwd(), name)
    ensure_target_absent(request.target_path)

    configurator = QuestionaryConfigurator(
        package_manager=PackageManager(args.package_manager) if args.package_manager else None,
        css_styling=CssStyling(args.css) if args.css else None,
    )

    with RichStepReporter(verbose=args.verbose) as reporter:
        runner = SubprocessRunner(echo=reporter.echo_command)
        pipeline = ScaffoldPipeline(
            settings=settings,
            fetcher=GitTemplateFetcher(runner),
            configurator=configurator,
            installer=InstallService(runner),
            filesystem=LocalFilesystem(),
            on_event=reporter,
        )
        outcome = pipeline.run(request)

    if outcome.error is not None:
        _render_error(outcome.error)
        if outcome.rollback_error is not None:
            _render_error(outcome.rollback_error)
        else:
            console.print(f"[dim]Removed {request.target_path}[/dim]")
        return exit_codes.GENERAL_ERROR

    console.print("\n[bold green]SUCCESS![/bold green]")
    console.print(f"Airfoil Next.js app created! [bold]cd {request.name}[/bold] to start!")
    return exit_codes.SUCCESS


def _handle_doctor(settings: ScaffoldSettings) -> int:
    from create_airfoil_app.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the create-airfoil-app CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    AirfoilError
        For preflight failures (runtime, name, existing directory).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = ScaffoldSettings.from_env().with_template(args.template)

    if args.doctor:
        return _handle_doctor(settings)

    return _handle_create(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AirfoilError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
