# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git queries supplying the context hook runs are evaluated against."""

from __future__ import annotations

from pathlib import Path

from ..config.models import HookKind
from ..process import CommandOptions, SubprocessExecutionError, run_command
from .models import HookContext


def _git_output(root: Path, *args: str) -> str | None:
    options = CommandOptions(cwd=root, capture_output=True)
    try:
        completed = run_command(["git", *args], options=options)
    except (FileNotFoundError, SubprocessExecutionError):
        return None
    return completed.stdout


def current_branch(root: Path) -> str | None:
    """Return the checked-out branch name, or ``None`` when detached or unknown."""

    output = _git_output(root, "rev-parse", "--abbrev-ref", "HEAD")
    if output is None:
        return None
    branch = output.strip()
    return branch if branch and branch != "HEAD" else None


def last_commit_message(root: Path) -> str:
    """Return the message of ``HEAD``; empty when the repository has no commits."""

    output = _git_output(root, "log", "-1", "--pretty=%B")
    return (output or "").strip()


def collect_context(kind: HookKind, root: Path) -> HookContext:
    """Return the :class:`HookContext` needed by ``kind``.

    Only the value consulted by the hook's skip predicate is queried.
    """

    if kind is HookKind.PRE_PUSH:
        return HookContext(branch=current_branch(root))
    if kind is HookKind.PRE_COMMIT:
        return HookContext(commit_message=last_commit_message(root))
    return HookContext()


__all__ = ["collect_context", "current_branch", "last_commit_message"]
