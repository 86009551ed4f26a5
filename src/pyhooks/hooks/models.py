# SPDX-License-Identifier: MIT
"""Dataclasses describing hook runs and installation outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..config.models import HookKind


@dataclass(frozen=True, slots=True)
class HookContext:
    """Repository state a hook run is evaluated against."""

    branch: str | None = None
    commit_message: str = ""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a single check invocation."""

    name: str
    passed: bool
    critical: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class HookRunReport:
    """Aggregate outcome of a hook run."""

    hook: HookKind
    results: tuple[CheckResult, ...] = ()
    passed: bool = True
    timed_out: bool = False
    skipped_reason: str | None = None

    @property
    def failures(self) -> tuple[CheckResult, ...]:
        """Return the results of checks that failed."""

        return tuple(result for result in self.results if not result.passed)


@dataclass(slots=True)
class InstallResult:
    """Aggregate outcome from attempting to install git hooks."""

    installed: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    backups: list[Path] = field(default_factory=list)
    versions: dict[str, str] = field(default_factory=dict)


__all__ = ["CheckResult", "HookContext", "HookRunReport", "InstallResult"]
