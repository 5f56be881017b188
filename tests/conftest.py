"""Shared pytest fixtures and fakes for the create-airfoil-app test suite.

Guidelines
----------
* No network access and no real git / npm / pnpm / yarn processes.
* External commands are faked at the infra boundary.
* Filesystem effects happen only inside ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from create_airfoil_app.config import ScaffoldSettings
from create_airfoil_app.core.models import (
    CssStyling,
    PackageManager,
    ProjectRequest,
    StepEvent,
    UserSelection,
)
from create_airfoil_app.core.protocols import CommandResult
from create_airfoil_app.exceptions import FetchError

TEMPLATE_FILES: dict[str, str] = {
    "package.json": '{"name": "template", "private": true}\n',
    "pages/index.tsx": "export default function Home() { return null }\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    "boilerplate/tailwindcss/tailwind.config.js": "module.exports = {}\n",
    "boilerplate/tailwindcss/postcss.config.js": "module.exports = {}\n",
    "boilerplate/tailwindcss/styles/globals.css": "@tailwind base;\n",
    "boilerplate/chakraui/pages/_app.tsx": "// chakra provider\n",
    "boilerplate/chakraui/theme.ts": "export const theme = {}\n",
}


def write_template(target: Path) -> None:
    """Populate *target* the way a cloned template looks on disk."""
    for relative, content in TEMPLATE_FILES.items():
        path = target / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


class RecordingRunner:
    """CommandRunner fake that records calls and fails on demand."""

    def __init__(
        self,
        fail_on: Callable[[tuple[str, ...]], bool] | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []
        self._fail_on = fail_on
        self._echo = echo

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        argv = tuple(args)
        self.calls.append((argv, cwd))
        if self._fail_on is not None and self._fail_on(argv):
            return CommandResult(args=argv, returncode=1, stderr="ERR! simulated failure")
        return CommandResult(args=argv, returncode=0, stdout="ok")

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]


class FakeFetcher:
    """TemplateFetcher fake that writes a template tree instead of cloning."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sources: list[str] = []

    def fetch(self, source: str, target: Path) -> None:
        self.sources.append(source)
        if self.fail:
            # git leaves a partial directory behind when a clone dies.
            (target / ".git").mkdir(parents=True)
            raise FetchError(f"Could not clone template from {source}.")
        write_template(target)


class FakeConfigurator:
    """Configurator fake returning a fixed selection or raising."""

    def __init__(
        self,
        selection: UserSelection | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.selection = selection
        self.error = error
        self.cwd_when_called: Path | None = None

    def configure(self, request: ProjectRequest) -> UserSelection:
        self.cwd_when_called = Path.cwd()
        if self.error is not None:
            raise self.error
        assert self.selection is not None
        return self.selection


def selection(
    package_manager: PackageManager = PackageManager.NPM,
    css_styling: CssStyling = CssStyling.NONE,
) -> UserSelection:
    return UserSelection(package_manager=package_manager, css_styling=css_styling)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A clean current working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def request_in(workdir: Path) -> ProjectRequest:
    return ProjectRequest(name="my-app", target_path=workdir / "my-app")


@pytest.fixture
def settings() -> ScaffoldSettings:
    return ScaffoldSettings(template_url="https://example.invalid/template.git")


@pytest.fixture
def events() -> list[StepEvent]:
    return []
