"""Local filesystem operations used by the scaffold pipeline.

Rules
-----
* Every ``OSError`` is re-raised as a typed error.
* Deleting a path that does not exist is a no-op.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import shutil
import stat
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from create_airfoil_app.exceptions import CleanupError, PostProcessError


def _clear_readonly_and_retry(func: Callable[..., Any], path: str, _exc: object) -> None:
    """Retry a failed removal after making *path* writable.

    git marks its pack files read-only, which blocks deletion on Windows.
    """
    os.chmod(path, stat.S_IWRITE)
    func(path)


class LocalFilesystem:
    """Concrete :class:`~create_airfoil_app.core.protocols.ProjectFilesystem`."""

    def cwd(self) -> Path:
        return Path.cwd()

    def change_directory(self, path: Path) -> None:
        os.chdir(path)

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def merge_tree(self, source: Path, destination: Path) -> None:
        """Copy the contents of *source* over *destination*.

        Raises
        ------
        PostProcessError
            When *source* is not a directory or any copy fails.
        """
        if not source.is_dir():
            raise PostProcessError(
                f"Boilerplate directory not found: {source}",
                hint="The template does not ship files for the selected styling option.",
            )
        try:
            shutil.copytree(source, destination, dirs_exist_ok=True)
        except (OSError, shutil.Error) as exc:
            raise PostProcessError(
                f"Could not copy boilerplate files from {source}: {exc}",
            ) from exc

    def remove_tree(self, path: Path) -> None:
        """Recursively delete *path*.

        Raises
        ------
        CleanupError
            When the path exists but cannot be removed.
        """
        if not self.exists(path):
            return
        try:
            if path.is_dir() and not path.is_symlink():
                if sys.version_info >= (3, 12):
                    shutil.rmtree(path, onexc=_clear_readonly_and_retry)
                else:
                    shutil.rmtree(path, onerror=_clear_readonly_and_retry)
            else:
                path.unlink()
        except OSError as exc:
            raise CleanupError(
                f"Could not remove {path}: {exc}",
                hint="Delete it manually.",
            ) from exc
