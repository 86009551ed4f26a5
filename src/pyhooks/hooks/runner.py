# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution of the checks configured for the pre-commit and pre-push hooks."""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Sequence
from typing import Final, TypeAlias

from ..checks.registry import Check, CheckRegistry, CheckRequest
from ..config.models import CheckDescriptor, EffectiveConfig, HookKind, PreCommitConfig, PrePushConfig
from ..logging import HookLogger
from ..patterns import compile_pattern
from .models import CheckResult, HookContext, HookRunReport

HookSection: TypeAlias = PreCommitConfig | PrePushConfig
ResolvedCheck: TypeAlias = tuple[CheckDescriptor, Check]

_WILDCARD: Final[str] = "*"
_RUNNABLE_HOOKS: Final[frozenset[HookKind]] = frozenset({HookKind.PRE_COMMIT, HookKind.PRE_PUSH})


def branch_matches(branch: str, patterns: Iterable[str]) -> bool:
    """Return whether ``branch`` matches any entry of ``patterns``.

    Entries without ``*`` must equal the branch name. In other entries each
    ``*`` matches any run of characters and the whole name must match, so
    ``release/*`` matches ``release/1.2`` but not ``release``.
    """

    for pattern in patterns:
        if _WILDCARD not in pattern:
            if pattern == branch:
                return True
            continue
        regex = ".*".join(re.escape(part) for part in pattern.split(_WILDCARD))
        if re.fullmatch(regex, branch):
            return True
    return False


class HookRunner:
    """Run the checks configured for one hook kind.

    Checks always run one after another in configured order; the section's
    ``parallel`` flag is accepted but does not change scheduling.

    Args:
        kind: Hook whose section of the configuration drives the run.
        registry: Registry resolving check names to callables.
        logger: Destination for progress and result lines.

    Raises:
        ValueError: Raised when ``kind`` has no check list (``commit-msg``).
    """

    def __init__(self, kind: HookKind, registry: CheckRegistry, logger: HookLogger) -> None:
        if kind not in _RUNNABLE_HOOKS:
            raise ValueError(f"{kind.value} does not run checks")
        self._kind = kind
        self._registry = registry
        self._logger = logger

    @property
    def kind(self) -> HookKind:
        """Return the hook kind driven by this runner."""

        return self._kind

    def run(self, config: EffectiveConfig, context: HookContext) -> bool:
        """Run the hook and return whether it passed."""

        return self.execute(config, context).passed

    def execute(self, config: EffectiveConfig, context: HookContext) -> HookRunReport:
        """Run the hook and return the full report.

        Args:
            config: Resolved configuration.
            context: Repository state consulted by the skip predicate.

        Returns:
            HookRunReport: Per-check results and the overall verdict.

        Raises:
            UnknownCheckError: Raised before any check runs when an enabled
                check is not registered.
        """

        section: HookSection = getattr(config, self._kind.section)
        label = self._kind.label
        if not section.enabled:
            self._logger.info(f"{label} hook is disabled")
            return HookRunReport(hook=self._kind, skipped_reason="disabled")

        reason = self._skip_reason(section, config, context)
        if reason is not None:
            self._logger.info(f"Skipping {label} hook: {reason}")
            return HookRunReport(hook=self._kind, skipped_reason=reason)

        checks = [
            (descriptor, self._registry.resolve(descriptor.name))
            for descriptor in section.checks
            if descriptor.enabled
        ]
        if not checks:
            self._logger.info(f"No enabled checks for the {label} hook")
            return HookRunReport(hook=self._kind)

        self._logger.info(f"Running {len(checks)} {label} check(s)")
        return self._run_with_timeout(checks, section, config)

    def _skip_reason(
        self,
        section: HookSection,
        config: EffectiveConfig,
        context: HookContext,
    ) -> str | None:
        if isinstance(section, PreCommitConfig):
            if config.advanced.env.is_ci and not section.run_in_ci:
                return "disabled in CI"
            if section.skip_pattern is None or not context.commit_message:
                return None
            if compile_pattern(section.skip_pattern).search(context.commit_message):
                return "commit message matches the skip pattern"
            return None
        if context.branch and branch_matches(context.branch, section.skip_branches):
            return f"branch '{context.branch}' is in the skip list"
        return None

    def _run_with_timeout(
        self,
        checks: Sequence[ResolvedCheck],
        section: HookSection,
        config: EffectiveConfig,
    ) -> HookRunReport:
        results: list[CheckResult] = []
        verdict: list[bool] = []
        errors: list[BaseException] = []

        def work() -> None:
            try:
                verdict.append(self._run_sequential(checks, config, results))
            except BaseException as exc:  # re-raised on the calling thread
                errors.append(exc)

        # Daemon worker: an abandoned run must not keep the process alive.
        worker = threading.Thread(target=work, name=f"pyhooks-{self._kind.value}", daemon=True)
        worker.start()
        worker.join(section.timeout / 1000)
        if worker.is_alive():
            self._logger.error(f"{self._kind.label} hook timed out after {section.timeout}ms")
            return HookRunReport(hook=self._kind, results=tuple(results), passed=False, timed_out=True)
        if errors:
            raise errors[0]

        passed = verdict[0]
        self._summarise(results, passed)
        return HookRunReport(hook=self._kind, results=tuple(results), passed=passed)

    def _run_sequential(
        self,
        checks: Sequence[ResolvedCheck],
        config: EffectiveConfig,
        results: list[CheckResult],
    ) -> bool:
        for descriptor, check in checks:
            result = self._invoke(descriptor, check, config)
            results.append(result)
            if not result.passed and result.critical:
                remaining = len(checks) - len(results)
                self._logger.error(
                    f"Critical check '{result.name}' failed; skipping {remaining} remaining check(s)",
                )
                return False
        return True

    def _invoke(self, descriptor: CheckDescriptor, check: Check, config: EffectiveConfig) -> CheckResult:
        name = descriptor.name
        self._logger.debug(f"check={name} critical={descriptor.critical}")
        try:
            check(CheckRequest(descriptor=descriptor, config=config, logger=self._logger))
        except Exception as exc:  # any check exception is a check failure
            message = str(exc) or type(exc).__name__
            if descriptor.critical:
                self._logger.error(f"{name} failed: {message}")
            else:
                self._logger.warn(f"{name} failed (non-critical): {message}")
            return CheckResult(name=name, passed=False, critical=descriptor.critical, error=message)
        self._logger.success(f"{name} passed")
        return CheckResult(name=name, passed=True, critical=descriptor.critical)

    def _summarise(self, results: Sequence[CheckResult], passed: bool) -> None:
        failed = [result for result in results if not result.passed]
        summary = f"{len(results) - len(failed)} passed, {len(failed)} failed"
        label = self._kind.label
        if passed and failed:
            self._logger.warn(f"{label} hook passed with non-critical failures ({summary})")
        elif passed:
            self._logger.success(f"{label} hook passed ({summary})")
        else:
            self._logger.error(f"{label} hook failed ({summary})")


__all__ = ["HookRunner", "branch_matches"]
