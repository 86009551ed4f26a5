# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the hook entry points and helper commands."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest
from hook_doubles import FakeCheck
from typer.testing import CliRunner

from pyhooks.checks import CheckRegistry
from pyhooks.cli.app import app
from pyhooks.hooks import HookContext

runner = CliRunner()
# ``pyhooks.cli`` re-exports ``app``, which shadows the submodule for dotted-string targets.
cli_app_module = importlib.import_module("pyhooks.cli.app")


def _write_message(root: Path, text: str) -> Path:
    path = root / "COMMIT_EDITMSG"
    path.write_text(text, encoding="utf-8")
    return path


def _invoke(*args: str, env: dict[str, str] | None = None):
    return runner.invoke(app, list(args), env=env)


@pytest.fixture
def fake_checks(monkeypatch: pytest.MonkeyPatch) -> dict[str, FakeCheck]:
    calls: list[str] = []
    checks = {"lint-staged": FakeCheck(calls=calls), "typescript": FakeCheck(calls=calls)}
    monkeypatch.setattr(cli_app_module, "default_registry", lambda: CheckRegistry(checks))
    monkeypatch.setattr(cli_app_module, "collect_context", lambda kind, root: HookContext())
    return checks


def test_commit_msg_accepts_conventional_message(tmp_path: Path) -> None:
    message = _write_message(tmp_path, "feat(button): add variant\n# comment\n")

    result = _invoke("commit-msg", str(message), "--root", str(tmp_path), "--no-emoji")

    assert result.exit_code == 0
    assert "Commit message is valid: feat(button):" in result.output
    assert "✅" not in result.output


def test_commit_msg_rejects_malformed_message(tmp_path: Path) -> None:
    message = _write_message(tmp_path, "updated some files\n")

    result = _invoke("commit-msg", str(message), "--root", str(tmp_path))

    assert result.exit_code == 1
    assert "does not match the required format" in result.output
    assert "feat(button): add a new variant" in result.output


def test_commit_msg_without_file_argument(tmp_path: Path) -> None:
    result = _invoke("commit-msg", "--root", str(tmp_path))

    assert result.exit_code == 1
    assert "No commit message file was passed" in result.output


def test_commit_msg_with_missing_file(tmp_path: Path) -> None:
    result = _invoke("commit-msg", str(tmp_path / "absent"), "--root", str(tmp_path))

    assert result.exit_code == 1
    assert "Commit message file not found" in result.output


def test_commit_msg_disabled_by_project_config(tmp_path: Path) -> None:
    (tmp_path / ".pyhooks.toml").write_text("[commit_msg]\nenabled = false\n", encoding="utf-8")

    result = _invoke("commit-msg", "--root", str(tmp_path))

    assert result.exit_code == 0
    assert "Commit message validation is disabled" in result.output


def test_pre_commit_runs_registered_checks(tmp_path: Path, fake_checks: dict[str, FakeCheck]) -> None:
    result = _invoke("pre-commit", "--root", str(tmp_path))

    assert result.exit_code == 0
    assert fake_checks["lint-staged"].calls == ["lint-staged", "typescript"]
    assert "Pre-commit hook passed" in result.output


def test_pre_commit_failure_exits_non_zero(tmp_path: Path, fake_checks: dict[str, FakeCheck]) -> None:
    fake_checks["lint-staged"].fails = True

    result = _invoke("pre-commit", "--root", str(tmp_path))

    assert result.exit_code == 1
    assert fake_checks["lint-staged"].calls == ["lint-staged"]


def test_pre_commit_unknown_check(tmp_path: Path, fake_checks: dict[str, FakeCheck]) -> None:
    (tmp_path / ".pyhooks.toml").write_text('[[pre_commit.checks]]\nname = "eslint"\n', encoding="utf-8")

    result = _invoke("pre-commit", "--root", str(tmp_path))

    assert result.exit_code == 1
    assert "Unknown check 'eslint'" in result.output
    assert fake_checks["lint-staged"].calls == []


def test_debug_lines_follow_verbose_env_only(tmp_path: Path, fake_checks: dict[str, FakeCheck]) -> None:
    quiet = _invoke("pre-commit", "--root", str(tmp_path))
    verbose = _invoke("pre-commit", "--root", str(tmp_path), env={"PYHOOKS_VERBOSE": "true"})

    assert quiet.exit_code == verbose.exit_code == 0
    assert "[debug]" not in quiet.output
    assert "[debug] check=lint-staged" in verbose.output


def test_pre_push_disabled_in_development(tmp_path: Path, fake_checks: dict[str, FakeCheck]) -> None:
    result = _invoke("pre-push", "--root", str(tmp_path))

    assert result.exit_code == 0
    assert "Pre-push hook is disabled" in result.output


def test_unexpected_errors_exit_one_with_debug_traceback(
    tmp_path: Path,
    fake_checks: dict[str, FakeCheck],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def explode(self, config, context):
        raise RuntimeError("runner blew up")

    monkeypatch.setattr(cli_app_module.HookRunner, "execute", explode)

    quiet = _invoke("pre-commit", "--root", str(tmp_path))
    noisy = _invoke("pre-commit", "--root", str(tmp_path), env={"PYHOOKS_DEBUG": "true"})

    assert quiet.exit_code == 1
    assert "Unexpected error: runner blew up" in quiet.output
    assert "Traceback" not in quiet.output
    assert noisy.exit_code == 1
    assert "Traceback" in noisy.output


def test_install_dry_run(tmp_path: Path) -> None:
    (tmp_path / ".git" / "hooks").mkdir(parents=True)

    result = _invoke("install", "--root", str(tmp_path), "--dry-run")

    assert result.exit_code == 0
    assert "Dry run complete" in result.output
    assert "DRY RUN: would install" in result.output
    assert not (tmp_path / ".git" / "hooks" / "pre-commit").exists()


def test_install_outside_repository(tmp_path: Path) -> None:
    result = _invoke("install", "--root", str(tmp_path))

    assert result.exit_code == 1
    assert "Not a git repository" in result.output


def test_show_config_json(tmp_path: Path) -> None:
    (tmp_path / "vite.config.ts").write_text("export default {}\n", encoding="utf-8")

    result = _invoke("show-config", "--root", str(tmp_path), "--json", env={"CI": "true"})

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["projectType"] == "vite"
    assert payload["environment"] == "ci"
    assert payload["hooks"] == {"preCommit": True, "prePush": True, "commitMsg": True}


def test_show_config_table(tmp_path: Path) -> None:
    result = _invoke("show-config", "--root", str(tmp_path))

    assert result.exit_code == 0
    assert "Project type: common" in result.output
    assert "pre-commit" in result.output
    assert "lint-staged" in result.output
