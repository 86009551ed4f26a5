# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the pre-commit and pre-push hook runner."""

from __future__ import annotations

import re
from pathlib import Path

import pytest
from hook_doubles import FIXED_NOW, RecordingLogger

from pyhooks.checks import UnknownCheckError
from pyhooks.config import ConfigResolver
from pyhooks.config.models import HookKind
from pyhooks.hooks import HookContext, HookRunner, branch_matches


def _check(name: str, *, critical: bool = True, enabled: bool = True) -> dict[str, object]:
    return {"name": name, "critical": critical, "enabled": enabled}


def test_disabled_hook_runs_nothing(make_config, make_registry, calls, logger: RecordingLogger) -> None:
    config = make_config(pre_commit={"enabled": False, "checks": [_check("a")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    report = runner.execute(config, HookContext())

    assert report.passed is True
    assert report.skipped_reason == "disabled"
    assert calls == []


def test_critical_failure_aborts_remaining_checks(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a"), _check("b")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={"fails": True}, b={}), logger)

    report = runner.execute(config, HookContext())

    assert calls == ["a"]
    assert report.passed is False
    assert [result.name for result in report.results] == ["a"]
    assert report.results[0].error == "a exploded"
    assert any("Critical check 'a' failed" in message for message in logger.messages("error"))


def test_non_critical_failure_continues(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a", critical=False), _check("b")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={"fails": True}, b={}), logger)

    report = runner.execute(config, HookContext())

    assert calls == ["a", "b"]
    assert report.passed is True
    assert [result.name for result in report.failures] == ["a"]
    assert any("non-critical" in message for message in logger.messages("warn"))


def test_all_checks_passing(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a"), _check("b"), _check("c", enabled=False)]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}, b={}, c={}), logger)

    assert runner.run(config, HookContext()) is True
    assert calls == ["a", "b"]
    assert "Pre-commit hook passed (2 passed, 0 failed)" in logger.messages("success")


def test_unexpected_exceptions_count_as_failures(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={"fails": True, "error": ValueError}), logger)

    report = runner.execute(config, HookContext())

    assert report.passed is False
    assert report.results[0].error == "a exploded"


@pytest.mark.parametrize("pattern", ["/^wip:|^draft:/i", re.compile(r"^wip:", re.IGNORECASE)])
def test_skip_pattern_matches_commit_message(make_config, make_registry, calls, logger, pattern) -> None:
    config = make_config(pre_commit={"checks": [_check("a")], "skip_pattern": pattern})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    report = runner.execute(config, HookContext(commit_message="WIP: half done"))

    assert report.passed is True
    assert report.skipped_reason == "commit message matches the skip pattern"
    assert calls == []


def test_skip_pattern_without_match_runs_checks(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a")], "skip_pattern": "/^wip:/i"})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    report = runner.execute(config, HookContext(commit_message="wip"))

    assert report.skipped_reason is None
    assert calls == ["a"]


def test_pre_commit_disabled_in_ci(make_config, make_registry, calls, logger) -> None:
    config = make_config(is_ci=True, pre_commit={"checks": [_check("a")], "run_in_ci": False})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    report = runner.execute(config, HookContext())

    assert report.skipped_reason == "disabled in CI"
    assert calls == []


@pytest.mark.parametrize(
    ("branch", "skipped"),
    [("release/1.2", True), ("release", False), ("main", True), ("feature/main", False), (None, False)],
)
def test_pre_push_branch_skip_list(make_config, make_registry, calls, logger, branch, skipped) -> None:
    config = make_config(pre_push={"checks": [_check("a")], "skip_branches": ["main", "release/*"]})
    runner = HookRunner(HookKind.PRE_PUSH, make_registry(a={}), logger)

    report = runner.execute(config, HookContext(branch=branch))

    assert report.passed is True
    assert (report.skipped_reason is not None) is skipped
    assert calls == ([] if skipped else ["a"])


def test_branch_matches_wildcards() -> None:
    assert branch_matches("release/1.2", ["release/*"])
    assert not branch_matches("release", ["release/*"])
    assert branch_matches("hotfix/x-1", ["*/x-*"])
    assert branch_matches("release.1", ["release.1"])
    assert not branch_matches("releasex1", ["release.1"])
    assert not branch_matches("main", [])


def test_unknown_check_fails_before_any_check_runs(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a"), _check("missing")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    with pytest.raises(UnknownCheckError, match="missing"):
        runner.execute(config, HookContext())
    assert calls == []


def test_disabled_unknown_check_is_ignored(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"checks": [_check("a"), _check("missing", enabled=False)]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={}), logger)

    assert runner.run(config, HookContext()) is True


def test_timeout_fails_the_run(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_push={"checks": [_check("slow")], "timeout": 50})
    runner = HookRunner(HookKind.PRE_PUSH, make_registry(slow={"delay": 1.0}), logger)

    report = runner.execute(config, HookContext(branch="feature/x"))

    assert report.timed_out is True
    assert report.passed is False
    assert "Pre-push hook timed out after 50ms" in logger.messages("error")


def test_parallel_flag_keeps_sequential_abort(make_config, make_registry, calls, logger) -> None:
    config = make_config(pre_commit={"parallel": True, "checks": [_check("a"), _check("b")]})
    runner = HookRunner(HookKind.PRE_COMMIT, make_registry(a={"fails": True}, b={}), logger)

    report = runner.execute(config, HookContext())

    assert calls == ["a"]
    assert report.passed is False


def test_ci_pre_commit_stops_after_critical_failure(tmp_path: Path, make_registry, calls, logger) -> None:
    resolver = ConfigResolver(project_root=tmp_path, env={"CI": "true"}, logger=logger, clock=lambda: FIXED_NOW)
    config = resolver.resolve()
    registry = make_registry(**{"lint-staged": {"fails": True}, "typescript": {}})

    report = HookRunner(HookKind.PRE_COMMIT, registry, logger).execute(config, HookContext())

    assert config.pre_commit.parallel is True
    assert calls == ["lint-staged"]
    assert report.passed is False

def test_commit_msg_has_no_runner(make_registry, logger) -> None:
    with pytest.raises(ValueError):
        HookRunner(HookKind.COMMIT_MSG, make_registry(), logger)
