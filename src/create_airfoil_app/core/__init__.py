"""Core / service layer — validation, dependency sets and the pipeline.

Rules
-----
* No ``print()`` calls.
* No process spawning and no filesystem writes; those go through the
  protocols in :mod:`create_airfoil_app.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from create_airfoil_app.core.install_service import InstallService
from create_airfoil_app.core.models import (
    CssStyling,
    PackageManager,
    PipelineOutcome,
    ProjectRequest,
    Step,
    UserSelection,
)
from create_airfoil_app.core.pipeline import ScaffoldPipeline
from create_airfoil_app.core.protocols import (
    CommandRunner,
    Configurator,
    ProjectFilesystem,
    TemplateFetcher,
)

__all__: list[str] = [
    "CommandRunner",
    "Configurator",
    "CssStyling",
    "InstallService",
    "PackageManager",
    "PipelineOutcome",
    "ProjectFilesystem",
    "ProjectRequest",
    "ScaffoldPipeline",
    "Step",
    "TemplateFetcher",
    "UserSelection",
]
