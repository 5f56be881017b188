"""Runtime settings for create-airfoil-app.

Settings are an immutable value object built once at start-up.  The
defaults reproduce the tool's stock behaviour; a small set of
environment variables can override them, and the ``--template`` CLI
flag takes precedence over both.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

DEFAULT_TEMPLATE_URL: str = "https://github.com/Aztriltus/nextjs-ts-tailwind-template.git"
"""Starter repository cloned into every new project."""

DEFAULT_NODE_FLOOR: int = 14
"""Lowest supported Node.js major version."""

DEFAULT_BOILERPLATE_DIR: str = "boilerplate"
"""Staging directory inside the template holding per-framework files."""

TEMPLATE_ENV_VAR: str = "CREATE_AIRFOIL_APP_TEMPLATE"
NODE_FLOOR_ENV_VAR: str = "CREATE_AIRFOIL_APP_NODE_FLOOR"


@dataclass(frozen=True, slots=True)
class ScaffoldSettings:
    """Configuration consumed by preflight and the scaffold pipeline."""

    template_url: str = DEFAULT_TEMPLATE_URL
    """Git URL of the template repository."""

    node_floor: int = DEFAULT_NODE_FLOOR
    """Minimum Node.js major version."""

    boilerplate_dir: str = DEFAULT_BOILERPLATE_DIR
    """Name of the boilerplate staging directory at the template root."""

    git_dir: str = ".git"
    """Version-control metadata directory removed after a successful run."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ScaffoldSettings:
        """Build settings from defaults overlaid with environment variables.

        Blank values are ignored.  A non-integer Node floor raises
        :class:`ValueError` since it can only come from a broken shell
        configuration.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        template = env.get(TEMPLATE_ENV_VAR, "").strip()
        if template:
            settings = replace(settings, template_url=template)

        floor = env.get(NODE_FLOOR_ENV_VAR, "").strip()
        if floor:
            settings = replace(settings, node_floor=int(floor))

        return settings

    def with_template(self, template_url: str | None) -> ScaffoldSettings:
        """Return a copy using *template_url* when one is given."""
        if not template_url:
            return self
        return replace(self, template_url=template_url)
