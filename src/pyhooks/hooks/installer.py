# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Installation of the shell shims that dispatch git hooks to pyhooks."""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

from ..config.models import HookKind
from ..constants import LINT_STAGED_VERSION_ENV, PROJECT_CONFIG_FILENAME, TYPESCRIPT_VERSION_ENV
from ..logging import HookLogger
from .models import InstallResult
from .registry import normalise_hook_order

SHIM_MARKER: Final[str] = "# managed by pyhooks"
DEFAULT_TOOL_VERSIONS: Final[dict[str, tuple[str, str]]] = {
    "lint-staged": (LINT_STAGED_VERSION_ENV, "13.3.0"),
    "typescript": (TYPESCRIPT_VERSION_ENV, "5.4.5"),
}
STARTER_CONFIG: Final[str] = """\
# pyhooks project configuration; keys mirror the resolved configuration tree.

[pre_commit]
# timeout = 20000

# [[pre_commit.checks]]
# name = "typescript"
# critical = false

[commit_msg]
# types = ["feat", "fix", "docs", "chore"]
# require_scope = false
"""


@dataclass(frozen=True, slots=True)
class HookDirectories:
    """Filesystem locations used during hook installation."""

    project_root: Path
    target_dir: Path


def clean_version(value: str) -> str:
    """Strip a leading ``^`` or ``~`` range marker from ``value``."""

    return value[1:] if value[:1] in {"^", "~"} else value


def pinned_tool_versions(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the tool versions the installer recommends, honouring env overrides.

    Args:
        env: Environment variables; defaults to ``os.environ``.

    Returns:
        dict[str, str]: Package name to exact version.
    """

    source = os.environ if env is None else env
    return {
        package: clean_version(source.get(variable) or default)
        for package, (variable, default) in DEFAULT_TOOL_VERSIONS.items()
    }


def render_shim(kind: HookKind, *, python: str | None = None) -> str:
    """Return the shell script installed as the git hook for ``kind``."""

    interpreter = shlex.quote(python or sys.executable or "python3")
    return f'#!/bin/sh\n{SHIM_MARKER}\nexec {interpreter} -m pyhooks {kind.value} "$@"\n'


def install_hooks(
    root: Path,
    *,
    logger: HookLogger,
    hooks_dir: Path | None = None,
    hooks: Iterable[str] | None = None,
    dry_run: bool = False,
    force: bool = False,
    write_config: bool = True,
    env: Mapping[str, str] | None = None,
) -> InstallResult:
    """Install pyhooks shims into the repository's hooks directory.

    Existing hooks not written by pyhooks are renamed with a timestamped
    ``.backup`` suffix. Shims that are already up to date are skipped unless
    ``force`` is set.

    Args:
        root: Repository root whose hooks should be installed.
        logger: Destination for progress lines.
        hooks_dir: Optional override for the target hooks directory.
        hooks: Optional hook names restricting what is installed.
        dry_run: Report actions without touching the filesystem.
        force: Rewrite shims even when they are already current.
        write_config: Create a starter ``.pyhooks.toml`` when none exists.
        env: Environment consulted for tool version pins.

    Returns:
        InstallResult: Installed, skipped and backed-up paths plus version pins.

    Raises:
        FileNotFoundError: Raised when ``root`` is not a git repository.
        ValueError: Raised when ``hooks`` names an unsupported hook.
    """

    directories = _prepare_directories(root, hooks_dir, dry_run=dry_run)
    result = InstallResult(versions=pinned_tool_versions(env))

    for kind in normalise_hook_order(hooks):
        _install_single_hook(kind, directories, result, logger=logger, dry_run=dry_run, force=force)

    if write_config:
        _write_starter_config(directories.project_root, logger=logger, dry_run=dry_run)

    pins = " ".join(f"{package}@{version}" for package, version in result.versions.items())
    logger.info(f"Recommended tool versions: npm install --save-dev {pins}")
    if dry_run:
        logger.success(f"Dry run complete: would install {len(result.installed)} hook(s)")
    else:
        logger.success(f"Installed {len(result.installed)} hook(s)")
    return result


def _prepare_directories(root: Path, hooks_dir: Path | None, *, dry_run: bool) -> HookDirectories:
    project_root = root.resolve()
    git_dir = project_root / ".git"
    if not git_dir.is_dir():
        raise FileNotFoundError("Not a git repository (missing .git directory)")
    target_dir = hooks_dir or git_dir / "hooks"
    if not dry_run:
        target_dir.mkdir(parents=True, exist_ok=True)
    return HookDirectories(project_root=project_root, target_dir=target_dir)


def _is_shim(path: Path) -> bool:
    try:
        return SHIM_MARKER in path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False


def _install_single_hook(
    kind: HookKind,
    directories: HookDirectories,
    result: InstallResult,
    *,
    logger: HookLogger,
    dry_run: bool,
    force: bool,
) -> None:
    destination = directories.target_dir / kind.value
    content = render_shim(kind)

    if destination.is_file() and not destination.is_symlink() and _is_shim(destination):
        if not force and destination.read_text(encoding="utf-8") == content:
            logger.info(f"{kind.value} hook is already up to date")
            result.skipped.append(destination)
            return
    elif destination.exists() or destination.is_symlink():
        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        backup_path = destination.with_name(f"{destination.name}.backup.{timestamp}")
        logger.info(f"Backing up existing {kind.value} hook to {backup_path}")
        if not dry_run:
            destination.rename(backup_path)
        result.backups.append(backup_path)

    logger.info(f"Installing {kind.value} hook")
    result.installed.append(destination)
    if dry_run:
        return
    destination.write_text(content, encoding="utf-8")
    destination.chmod(0o755)


def _write_starter_config(project_root: Path, *, logger: HookLogger, dry_run: bool) -> None:
    config_path = project_root / PROJECT_CONFIG_FILENAME
    if config_path.exists():
        return
    logger.info(f"Creating starter configuration {config_path.name}")
    if not dry_run:
        config_path.write_text(STARTER_CONFIG, encoding="utf-8")


__all__ = [
    "DEFAULT_TOOL_VERSIONS",
    "SHIM_MARKER",
    "clean_version",
    "install_hooks",
    "pinned_tool_versions",
    "render_shim",
]
