"""Allow ``python -m create_airfoil_app`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m create_airfoil_app`` behaves identically to the
``create-airfoil-app`` console script.
"""

from __future__ import annotations

from create_airfoil_app.cli.app import cli

if __name__ == "__main__":
    cli()
