"""Infrastructure layer — external system integration.

This layer wraps all interaction with git, the package managers and
the local filesystem.  Every raw ``subprocess`` / ``OSError`` failure
must be caught here and re-raised as an
:class:`~create_airfoil_app.exceptions.AirfoilError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from create_airfoil_app.infra.filesystem import LocalFilesystem
from create_airfoil_app.infra.git_fetcher import GitTemplateFetcher
from create_airfoil_app.infra.process_runner import SubprocessRunner
from create_airfoil_app.infra.toolchain import ToolStatus, detect_tool, node_version

__all__: list[str] = [
    "GitTemplateFetcher",
    "LocalFilesystem",
    "SubprocessRunner",
    "ToolStatus",
    "detect_tool",
    "node_version",
]
