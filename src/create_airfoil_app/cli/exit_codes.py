"""Exit-code constants used by the CLI layer.

Every exit path of ``create-airfoil-app`` maps to one of these values.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Project created (or diagnostics passed)."""

GENERAL_ERROR: int = 1
"""Validation failure, directory conflict, or pipeline error after rollback."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An exception outside the AirfoilError hierarchy escaped."""
