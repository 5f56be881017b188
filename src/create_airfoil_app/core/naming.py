"""npm package-name validation.

Implements the rules the npm registry enforces for new package names.
Problems are split into *errors* (never publishable) and *warnings*
(accepted for legacy packages only).  A project name is acceptable only
when both lists are empty.

Pure functions — no I/O.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from create_airfoil_app.core.models import NameValidation

MAX_NAME_LENGTH: int = 214

BLACKLISTED_NAMES: frozenset[str] = frozenset({"node_modules", "favicon.ico"})

NODE_BUILTIN_MODULES: frozenset[str] = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster",
    "console", "constants", "crypto", "dgram", "diagnostics_channel",
    "dns", "domain", "events", "fs", "http", "http2", "https",
    "inspector", "module", "net", "os", "path", "perf_hooks", "process",
    "punycode", "querystring", "readline", "repl", "stream",
    "string_decoder", "sys", "timers", "tls", "trace_events", "tty",
    "url", "util", "v8", "vm", "wasi", "worker_threads", "zlib",
})

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"


def _is_url_safe(value: str) -> bool:
    return quote(value, safe=_URI_COMPONENT_SAFE) == value


def validate_package_name(name: str) -> NameValidation:
    """Check *name* against npm naming rules and collect every problem."""
    errors: list[str] = []
    warnings: list[str] = []

    if not name:
        errors.append("name length must be greater than zero")

    if name.startswith("."):
        errors.append("name cannot start with a period")

    if name.startswith("_"):
        errors.append("name cannot start with an underscore")

    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    if name.lower() in BLACKLISTED_NAMES:
        errors.append(f"{name} is a blacklisted name")

    if name.lower() in NODE_BUILTIN_MODULES:
        warnings.append(f"{name} is a core module name")

    if len(name) > MAX_NAME_LENGTH:
        warnings.append(
            f"name can no longer contain more than {MAX_NAME_LENGTH} characters"
        )

    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")

    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        warnings.append('name can no longer contain special characters ("~\'!()*")')

    if not _is_url_safe(name):
        match = _SCOPED_NAME.match(name)
        scoped_ok = (
            match is not None
            and match.group(1) is not None
            and _is_url_safe(match.group(1))
            and _is_url_safe(match.group(2))
        )
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return NameValidation(errors=tuple(errors), warnings=tuple(warnings))
