"""Scaffold pipeline — fetch, configure, install, post-process, clean up.

The runner executes each step in strict order.  Every step returns an
explicit :class:`~create_airfoil_app.core.models.StepResult`; the runner
inspects it and, on the first failure, deletes the whole target
directory.  Rollback is all-or-nothing: a successful clone is never kept
when a later step fails.

Collaborators (fetcher, configurator, installer, filesystem) are
injected, so the pipeline itself performs no direct I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from create_airfoil_app.config import ScaffoldSettings
from create_airfoil_app.core.install_service import InstallService
from create_airfoil_app.core.models import (
    CssStyling,
    PipelineOutcome,
    ProjectRequest,
    Step,
    StepEvent,
    StepResult,
    StepStatus,
    UserSelection,
)
from create_airfoil_app.core.protocols import (
    Configurator,
    ProjectFilesystem,
    StepCallback,
    TemplateFetcher,
)
from create_airfoil_app.exceptions import (
    AirfoilError,
    CleanupError,
    FetchError,
    InstallError,
    PostProcessError,
    PromptCancelledError,
)

PIPELINE_STEPS: tuple[Step, ...] = (
    Step.FETCH,
    Step.CONFIGURE,
    Step.INSTALL,
    Step.POST_PROCESS,
    Step.CLEANUP,
)

# Error type used when a collaborator raises something outside the hierarchy.
_UNEXPECTED_ERROR_TYPES: dict[Step, type[AirfoilError]] = {
    Step.FETCH: FetchError,
    Step.CONFIGURE: AirfoilError,
    Step.INSTALL: InstallError,
    Step.POST_PROCESS: PostProcessError,
    Step.CLEANUP: CleanupError,
}


def _ignore_event(_event: StepEvent) -> None:
    return None


class ScaffoldPipeline:
    """Runs the post-preflight steps for a single :class:`ProjectRequest`.

    Parameters
    ----------
    settings:
        Template URL and directory names.
    fetcher:
        Clones the template into the target directory.
    configurator:
        Collects the :class:`UserSelection`.
    installer:
        Runs the package-manager commands.
    filesystem:
        Working-directory changes, boilerplate merge and deletions.
    on_event:
        Optional progress callback.
    """

    def __init__(
        self,
        *,
        settings: ScaffoldSettings,
        fetcher: TemplateFetcher,
        configurator: Configurator,
        installer: InstallService,
        filesystem: ProjectFilesystem,
        on_event: StepCallback | None = None,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher
        self._configurator = configurator
        self._installer = installer
        self._fs = filesystem
        self._emit: StepCallback = on_event or _ignore_event

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, request: ProjectRequest) -> PipelineOutcome:
        """Scaffold *request* and return the outcome.

        Pipeline failures never raise; they are reported in the returned
        :class:`PipelineOutcome`.  ``KeyboardInterrupt`` rolls back and
        is then re-raised.
        """
        original_cwd = self._fs.cwd()
        created_parents = self._missing_parents(request.target_path)
        completed: list[Step] = []
        selection: UserSelection | None = None

        try:
            for step in PIPELINE_STEPS:
                result = self._attempt(step, request, selection)
                if result.error is not None:
                    return self._rollback(
                        request,
                        completed,
                        selection,
                        result.error,
                        original_cwd,
                        created_parents,
                    )
                if result.selection is not None:
                    selection = result.selection
                completed.append(step)
        except KeyboardInterrupt:
            self._rollback(
                request,
                completed,
                selection,
                AirfoilError("Aborted by user."),
                original_cwd,
                created_parents,
            )
            raise

        self._fs.change_directory(original_cwd)
        return PipelineOutcome(
            request=request,
            completed_steps=tuple(completed),
            selection=selection,
        )

    # ------------------------------------------------------------------
    # Step execution
    # ------------------------------------------------------------------

    def _attempt(
        self,
        step: Step,
        request: ProjectRequest,
        selection: UserSelection | None,
    ) -> StepResult:
        """Run one step, converting any raised error into a failed result."""
        handlers: dict[Step, Callable[[ProjectRequest, UserSelection | None], UserSelection | None]] = {
            Step.FETCH: self._fetch,
            Step.CONFIGURE: self._configure,
            Step.INSTALL: self._install,
            Step.POST_PROCESS: self._post_process,
            Step.CLEANUP: self._cleanup,
        }

        self._emit(StepEvent(step, StepStatus.STARTED))
        try:
            produced = handlers[step](request, selection)
        except AirfoilError as exc:
            self._emit(StepEvent(step, StepStatus.FAILED, str(exc)))
            return StepResult.failure(step, exc)
        except Exception as exc:
            error = _UNEXPECTED_ERROR_TYPES[step](
                f"Unexpected error during {step.value.replace('_', ' ')}: {exc}",
            )
            error.__cause__ = exc
            self._emit(StepEvent(step, StepStatus.FAILED, str(error)))
            return StepResult.failure(step, error)

        self._emit(StepEvent(step, StepStatus.FINISHED))
        return StepResult.success(step, selection=produced)

    def _fetch(self, request: ProjectRequest, _selection: UserSelection | None) -> None:
        self._fetcher.fetch(self._settings.template_url, request.target_path)
        return None

    def _configure(
        self, request: ProjectRequest, _selection: UserSelection | None,
    ) -> UserSelection:
        # Installer invocations are directory-relative.
        self._fs.change_directory(request.target_path)
        return self._configurator.configure(request)

    def _install(self, request: ProjectRequest, selection: UserSelection | None) -> None:
        self._installer.install(_require(selection), request.target_path)
        return None

    def _post_process(
        self, request: ProjectRequest, selection: UserSelection | None,
    ) -> None:
        styling = _require(selection).css_styling
        if styling is CssStyling.NONE:
            return None
        source = request.target_path / self._settings.boilerplate_dir / styling.value
        self._fs.merge_tree(source, request.target_path)
        return None

    def _cleanup(self, request: ProjectRequest, _selection: UserSelection | None) -> None:
        self._fs.remove_tree(request.target_path / self._settings.git_dir)
        self._fs.remove_tree(request.target_path / self._settings.boilerplate_dir)
        return None

    # ------------------------------------------------------------------
    # Rollback
    # ------------------------------------------------------------------

    def _missing_parents(self, target: Path) -> tuple[Path, ...]:
        """Ancestors of *target* that the fetch will create, innermost first."""
        missing: list[Path] = []
        for parent in target.parents:
            if self._fs.exists(parent):
                break
            missing.append(parent)
        return tuple(missing)

    def _rollback(
        self,
        request: ProjectRequest,
        completed: list[Step],
        selection: UserSelection | None,
        error: AirfoilError,
        original_cwd: Path,
        created_parents: tuple[Path, ...],
    ) -> PipelineOutcome:
        """Delete the target directory and build the failed outcome.

        Parent directories that did not exist before the fetch (the
        ``@scope`` level of a scoped name) are removed as well.
        """
        self._emit(StepEvent(Step.ROLLBACK, StepStatus.STARTED, str(error)))
        rollback_error: AirfoilError | None = None
        try:
            # Leave the directory before deleting it.
            self._fs.change_directory(original_cwd)
            self._fs.remove_tree(request.target_path)
            for parent in created_parents:
                self._fs.remove_tree(parent)
        except AirfoilError as exc:
            rollback_error = exc
        except Exception as exc:
            rollback_error = CleanupError(
                f"Could not remove {request.target_path}: {exc}",
                hint="Delete the directory manually before retrying.",
            )
            rollback_error.__cause__ = exc

        if rollback_error is None:
            self._emit(StepEvent(Step.ROLLBACK, StepStatus.FINISHED))
        else:
            self._emit(StepEvent(Step.ROLLBACK, StepStatus.FAILED, str(rollback_error)))

        return PipelineOutcome(
            request=request,
            completed_steps=tuple(completed),
            selection=selection,
            error=error,
            rolled_back=rollback_error is None,
            rollback_error=rollback_error,
        )


def _require(selection: UserSelection | None) -> UserSelection:
    if selection is None:
        raise PromptCancelledError("No configuration was selected.")
    return selection
