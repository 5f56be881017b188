"""Tests for the scaffold pipeline (core/pipeline.py).

Fetch, configure and install are faked; the real
:class:`LocalFilesystem` runs inside ``tmp_path`` so rollback and
cleanup are verified against the actual directory tree.

Coverage:
* Happy paths for no styling, Tailwind CSS and Chakra UI.
* Rollback after a failure in every step.
* Rollback deletion failure.
* ``KeyboardInterrupt`` rolls back and re-raises.
* Step event sequence.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeConfigurator, FakeFetcher, RecordingRunner, selection
from create_airfoil_app.config import ScaffoldSettings
from create_airfoil_app.core.install_service import InstallService
from create_airfoil_app.core.models import (
    CssStyling,
    PackageManager,
    ProjectRequest,
    Step,
    StepEvent,
    StepStatus,
)
from create_airfoil_app.core.pipeline import ScaffoldPipeline
from create_airfoil_app.core.preflight import resolve_project_request, validate_project_name
from create_airfoil_app.exceptions import (
    CleanupError,
    FetchError,
    InstallError,
    PostProcessError,
    PromptCancelledError,
)
from create_airfoil_app.infra.filesystem import LocalFilesystem


def _pipeline(
    settings: ScaffoldSettings,
    *,
    fetcher: FakeFetcher | None = None,
    configurator: FakeConfigurator | None = None,
    runner: RecordingRunner | None = None,
    filesystem: LocalFilesystem | None = None,
    events: list[StepEvent] | None = None,
) -> ScaffoldPipeline:
    return ScaffoldPipeline(
        settings=settings,
        fetcher=fetcher or FakeFetcher(),
        configurator=configurator or FakeConfigurator(selection()),
        installer=InstallService(runner or RecordingRunner()),
        filesystem=filesystem or LocalFilesystem(),
        on_event=events.append if events is not None else None,
    )


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------

class TestSuccess:
    def test_npm_without_styling(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        runner = RecordingRunner()
        outcome = _pipeline(
            settings,
            configurator=FakeConfigurator(selection(PackageManager.NPM, CssStyling.NONE)),
            runner=runner,
        ).run(request_in)

        target = request_in.target_path
        assert outcome.ok
        assert outcome.completed_steps == (
            Step.FETCH, Step.CONFIGURE, Step.INSTALL, Step.POST_PROCESS, Step.CLEANUP,
        )
        assert target.is_dir()
        assert (target / "package.json").is_file()
        assert not (target / ".git").exists()
        assert not (target / "boilerplate").exists()
        assert not (target / "tailwind.config.js").exists()
        assert runner.commands == [("npm", "install")]

    def test_pnpm_with_tailwind(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        runner = RecordingRunner()
        outcome = _pipeline(
            settings,
            configurator=FakeConfigurator(
                selection(PackageManager.PNPM, CssStyling.TAILWIND_CSS),
            ),
            runner=runner,
        ).run(request_in)

        target = request_in.target_path
        assert outcome.ok
        assert runner.commands == [
            ("pnpm", "install"),
            ("pnpm", "add", "tailwindcss", "postcss", "autoprefixer"),
        ]
        assert (target / "tailwind.config.js").is_file()
        assert (target / "postcss.config.js").is_file()
        assert (target / "styles" / "globals.css").read_text() == "@tailwind base;\n"
        assert not (target / "theme.ts").exists()
        assert not (target / "boilerplate").exists()
        assert not (target / ".git").exists()

    def test_chakra_overwrites_existing_files(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        outcome = _pipeline(
            settings,
            configurator=FakeConfigurator(
                selection(PackageManager.YARN, CssStyling.CHAKRA_UI),
            ),
        ).run(request_in)

        target = request_in.target_path
        assert outcome.ok
        assert (target / "pages" / "_app.tsx").read_text() == "// chakra provider\n"
        # Untouched template files survive the merge.
        assert (target / "pages" / "index.tsx").is_file()
        assert (target / "theme.ts").is_file()

    def test_installs_run_inside_target(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        runner = RecordingRunner()
        configurator = FakeConfigurator(selection())
        _pipeline(settings, configurator=configurator, runner=runner).run(request_in)

        assert configurator.cwd_when_called == request_in.target_path
        assert all(cwd == request_in.target_path for _, cwd in runner.calls)

    def test_restores_working_directory(
        self, request_in: ProjectRequest, settings: ScaffoldSettings, workdir: Path,
    ) -> None:
        _pipeline(settings).run(request_in)
        assert Path.cwd() == workdir

    def test_fetches_configured_template(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        fetcher = FakeFetcher()
        _pipeline(settings, fetcher=fetcher).run(request_in)
        assert fetcher.sources == ["https://example.invalid/template.git"]

    def test_selection_recorded(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        chosen = selection(PackageManager.YARN, CssStyling.NONE)
        outcome = _pipeline(settings, configurator=FakeConfigurator(chosen)).run(request_in)
        assert outcome.selection == chosen


# ---------------------------------------------------------------------------
# Rollback
# ---------------------------------------------------------------------------

class TestRollback:
    def test_fetch_failure_removes_partial_clone(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        outcome = _pipeline(settings, fetcher=FakeFetcher(fail=True)).run(request_in)

        assert not outcome.ok
        assert isinstance(outcome.error, FetchError)
        assert outcome.rolled_back
        assert outcome.completed_steps == ()
        assert not request_in.target_path.exists()

    def test_prompt_cancel_removes_project(
        self, request_in: ProjectRequest, settings: ScaffoldSettings, workdir: Path,
    ) -> None:
        configurator = FakeConfigurator(error=PromptCancelledError("cancelled"))
        outcome = _pipeline(settings, configurator=configurator).run(request_in)

        assert isinstance(outcome.error, PromptCancelledError)
        assert outcome.completed_steps == (Step.FETCH,)
        assert not request_in.target_path.exists()
        assert Path.cwd() == workdir

    def test_base_install_failure_removes_project(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        runner = RecordingRunner(fail_on=lambda argv: argv == ("npm", "install"))
        outcome = _pipeline(settings, runner=runner).run(request_in)

        assert isinstance(outcome.error, InstallError)
        assert "npm install" in str(outcome.error)
        assert outcome.completed_steps == (Step.FETCH, Step.CONFIGURE)
        assert not request_in.target_path.exists()

    def test_styling_install_failure_removes_project(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        runner = RecordingRunner(fail_on=lambda argv: argv[:2] == ("pnpm", "add"))
        outcome = _pipeline(
            settings,
            configurator=FakeConfigurator(
                selection(PackageManager.PNPM, CssStyling.CHAKRA_UI),
            ),
            runner=runner,
        ).run(request_in)

        assert isinstance(outcome.error, InstallError)
        assert len(runner.calls) == 2
        assert not request_in.target_path.exists()

    def test_missing_boilerplate_removes_project(
        self, request_in: ProjectRequest,
    ) -> None:
        settings = ScaffoldSettings(
            template_url="https://example.invalid/template.git",
            boilerplate_dir="does-not-exist",
        )
        outcome = _pipeline(
            settings,
            configurator=FakeConfigurator(
                selection(PackageManager.NPM, CssStyling.TAILWIND_CSS),
            ),
        ).run(request_in)

        assert isinstance(outcome.error, PostProcessError)
        assert outcome.completed_steps == (Step.FETCH, Step.CONFIGURE, Step.INSTALL)
        assert not request_in.target_path.exists()

    def test_scoped_name_leaves_no_scope_directory(
        self, settings: ScaffoldSettings, workdir: Path,
    ) -> None:
        name = validate_project_name(["@acme/my-app"])
        request = resolve_project_request(workdir, name)
        runner = RecordingRunner(fail_on=lambda argv: argv[1] == "install")

        outcome = _pipeline(settings, runner=runner).run(request)

        assert isinstance(outcome.error, InstallError)
        assert outcome.rolled_back
        assert list(workdir.iterdir()) == []

    def test_existing_scope_directory_is_kept(
        self, settings: ScaffoldSettings, workdir: Path,
    ) -> None:
        scope = workdir / "@acme"
        (scope / "other-app").mkdir(parents=True)
        request = resolve_project_request(workdir, "@acme/my-app")

        outcome = _pipeline(settings, fetcher=FakeFetcher(fail=True)).run(request)

        assert not outcome.ok
        assert not request.target_path.exists()
        assert (scope / "other-app").is_dir()

    def test_cleanup_failure_removes_project(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        class GitRemovalDenied(LocalFilesystem):
            def remove_tree(self, path: Path) -> None:
                if path.name == ".git":
                    raise CleanupError("permission denied")
                super().remove_tree(path)

        outcome = _pipeline(settings, filesystem=GitRemovalDenied()).run(request_in)

        assert isinstance(outcome.error, CleanupError)
        assert outcome.rolled_back
        assert not request_in.target_path.exists()

    def test_unexpected_error_is_wrapped(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        original = RuntimeError("disk on fire")

        class ExplodingFetcher(FakeFetcher):
            def fetch(self, source: str, target: Path) -> None:
                raise original

        outcome = _pipeline(settings, fetcher=ExplodingFetcher()).run(request_in)

        assert isinstance(outcome.error, FetchError)
        assert "disk on fire" in str(outcome.error)
        assert outcome.error.__cause__ is original

    def test_rollback_deletion_failure_is_reported(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        class Undeletable(LocalFilesystem):
            def remove_tree(self, path: Path) -> None:
                if path == request_in.target_path:
                    raise CleanupError("locked")
                super().remove_tree(path)

        runner = RecordingRunner(fail_on=lambda argv: True)
        outcome = _pipeline(settings, runner=runner, filesystem=Undeletable()).run(request_in)

        assert isinstance(outcome.error, InstallError)
        assert isinstance(outcome.rollback_error, CleanupError)
        assert not outcome.rolled_back

    def test_keyboard_interrupt_rolls_back_and_reraises(
        self, request_in: ProjectRequest, settings: ScaffoldSettings,
    ) -> None:
        configurator = FakeConfigurator(error=KeyboardInterrupt())

        with pytest.raises(KeyboardInterrupt):
            _pipeline(settings, configurator=configurator).run(request_in)
        assert not request_in.target_path.exists()

    @pytest.mark.parametrize("failing", ["fetch", "configure", "install", "post_process"])
    def test_target_never_survives_a_failure(
        self,
        failing: str,
        request_in: ProjectRequest,
        settings: ScaffoldSettings,
    ) -> None:
        fetcher = FakeFetcher(fail=failing == "fetch")
        configurator = FakeConfigurator(
            selection(PackageManager.NPM, CssStyling.TAILWIND_CSS),
            error=PromptCancelledError("x") if failing == "configure" else None,
        )
        runner = RecordingRunner(fail_on=lambda argv: failing == "install")
        if failing == "post_process":
            settings = ScaffoldSettings(
                template_url=settings.template_url, boilerplate_dir="missing",
            )

        outcome = _pipeline(
            settings, fetcher=fetcher, configurator=configurator, runner=runner,
        ).run(request_in)

        assert not outcome.ok
        assert not request_in.target_path.exists()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEvents:
    def test_success_sequence(
        self,
        request_in: ProjectRequest,
        settings: ScaffoldSettings,
        events: list[StepEvent],
    ) -> None:
        _pipeline(settings, events=events).run(request_in)

        assert [(e.step, e.status) for e in events] == [
            (Step.FETCH, StepStatus.STARTED),
            (Step.FETCH, StepStatus.FINISHED),
            (Step.CONFIGURE, StepStatus.STARTED),
            (Step.CONFIGURE, StepStatus.FINISHED),
            (Step.INSTALL, StepStatus.STARTED),
            (Step.INSTALL, StepStatus.FINISHED),
            (Step.POST_PROCESS, StepStatus.STARTED),
            (Step.POST_PROCESS, StepStatus.FINISHED),
            (Step.CLEANUP, StepStatus.STARTED),
            (Step.CLEANUP, StepStatus.FINISHED),
        ]

    def test_failure_sequence_ends_with_rollback(
        self,
        request_in: ProjectRequest,
        settings: ScaffoldSettings,
        events: list[StepEvent],
    ) -> None:
        _pipeline(settings, fetcher=FakeFetcher(fail=True), events=events).run(request_in)

        assert [(e.step, e.status) for e in events] == [
            (Step.FETCH, StepStatus.STARTED),
            (Step.FETCH, StepStatus.FAILED),
            (Step.ROLLBACK, StepStatus.STARTED),
            (Step.ROLLBACK, StepStatus.FINISHED),
        ]
        assert "Could not clone" in events[1].detail
