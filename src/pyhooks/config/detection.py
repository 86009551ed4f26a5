# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime environment and project-type detection."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

from ..constants import CI_ENV, GITHUB_ACTIONS_ENV, MANIFEST_DEPENDENCY_KEYS, PACKAGE_MANIFEST, TARGET_ENV, TRUTHY
from .models import COMMON_PROJECT_TYPE, Environment

DebugSink = Callable[[str], None]

PROJECT_MARKERS: Final[tuple[tuple[str, re.Pattern[str]], ...]] = (
    ("nextjs", re.compile(r"^next\.config\.(js|ts|mjs|cjs)$")),
    ("vite", re.compile(r"^vite\.config\.(js|ts|mjs|cjs)$")),
)
# Checked in order; ``react`` only applies when no framework matched first.
DEPENDENCY_MARKERS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("nextjs", ("next", "nextjs")),
    ("vite", ("vite",)),
    ("react", ("react",)),
)


def is_ci(env: Mapping[str, str]) -> bool:
    """Return whether ``env`` carries a CI signal."""

    return env.get(CI_ENV) == TRUTHY or env.get(GITHUB_ACTIONS_ENV) == TRUTHY


def detect_environment(env: Mapping[str, str]) -> Environment:
    """Infer the runtime environment from ``env``.

    Args:
        env: Environment variables of the current process.

    Returns:
        Environment: ``ci`` when a CI signal is present, otherwise the
        ``PYHOOKS_ENV`` value when it names ``production`` or ``test``,
        falling back to ``development``.
    """

    if is_ci(env):
        return Environment.CI
    target = env.get(TARGET_ENV)
    if target == Environment.PRODUCTION.value:
        return Environment.PRODUCTION
    if target == Environment.TEST.value:
        return Environment.TEST
    return Environment.DEVELOPMENT


def _manifest_dependencies(root: Path, debug: DebugSink | None) -> set[str]:
    manifest = root / PACKAGE_MANIFEST
    if not manifest.is_file():
        return set()
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        if debug is not None:
            debug(f"Unable to read {PACKAGE_MANIFEST}: {exc}")
        return set()
    if not isinstance(payload, Mapping):
        return set()
    names: set[str] = set()
    for key in MANIFEST_DEPENDENCY_KEYS:
        section = payload.get(key)
        if isinstance(section, Mapping):
            names.update(str(name) for name in section)
    return names


def detect_project_type(root: Path, *, debug: DebugSink | None = None) -> str:
    """Infer the project type of the repository at ``root``.

    Framework config files win over manifest dependencies. Detection never
    raises; unreadable directories or manifests yield ``"common"``.

    Args:
        root: Project root directory.
        debug: Optional sink receiving diagnostics about unreadable inputs.

    Returns:
        str: ``nextjs``, ``vite``, ``react`` or ``common``.
    """

    try:
        entries = [entry.name for entry in root.iterdir()]
    except OSError as exc:
        if debug is not None:
            debug(f"Unable to list {root}: {exc}")
        entries = []
    for project_type, marker in PROJECT_MARKERS:
        if any(marker.match(name) for name in entries):
            return project_type

    dependencies = _manifest_dependencies(root, debug)
    for project_type, names in DEPENDENCY_MARKERS:
        if dependencies.intersection(names):
            return project_type
    return COMMON_PROJECT_TYPE


__all__ = [
    "DEPENDENCY_MARKERS",
    "PROJECT_MARKERS",
    "detect_environment",
    "detect_project_type",
    "is_ci",
]
