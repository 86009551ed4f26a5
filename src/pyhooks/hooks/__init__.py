# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hook execution, commit message validation and hook installation."""

from __future__ import annotations

from .commit_msg import (
    CommitMessageValidator,
    ErrorKind,
    FailureKind,
    MessageReadError,
    ParsedCommitMessage,
    ValidationOutcome,
    read_commit_message,
)
from .git import collect_context
from .installer import install_hooks
from .models import CheckResult, HookContext, HookRunReport, InstallResult
from .registry import available_hooks, normalise_hook_order, parse_hook
from .runner import HookRunner, branch_matches

HOOK_NAMES: tuple[str, ...] = available_hooks()

__all__ = [
    "HOOK_NAMES",
    "CheckResult",
    "CommitMessageValidator",
    "ErrorKind",
    "FailureKind",
    "HookContext",
    "HookRunReport",
    "HookRunner",
    "InstallResult",
    "MessageReadError",
    "ParsedCommitMessage",
    "ValidationOutcome",
    "available_hooks",
    "branch_matches",
    "collect_context",
    "install_hooks",
    "normalise_hook_order",
    "parse_hook",
    "read_commit_message",
]
