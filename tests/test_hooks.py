# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for hook installation, the hook registry and git context helpers."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest
from hook_doubles import RecordingLogger

from pyhooks.config.models import HookKind
from pyhooks.hooks import HOOK_NAMES, collect_context, install_hooks, normalise_hook_order, parse_hook
from pyhooks.hooks.git import current_branch, last_commit_message
from pyhooks.hooks.installer import SHIM_MARKER, clean_version, pinned_tool_versions, render_shim
from pyhooks.process import SubprocessExecutionError


def _make_repo(root: Path) -> Path:
    hooks_dir = root / ".git" / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)
    return hooks_dir


def test_install_hooks_writes_executable_shims(tmp_path: Path, logger: RecordingLogger) -> None:
    hooks_dir = _make_repo(tmp_path)

    result = install_hooks(tmp_path, logger=logger, env={})

    assert result.installed == [hooks_dir.resolve() / name for name in HOOK_NAMES]
    for name in HOOK_NAMES:
        script = (hooks_dir / name).read_text(encoding="utf-8")
        assert script.startswith("#!/bin/sh\n")
        assert SHIM_MARKER in script
        assert f'-m pyhooks {name} "$@"' in script
        assert os.access(hooks_dir / name, os.X_OK)
    assert (tmp_path / ".pyhooks.toml").is_file()
    assert result.versions == {"lint-staged": "13.3.0", "typescript": "5.4.5"}
    assert "Installed 3 hook(s)" in logger.messages("success")


def test_reinstall_skips_current_shims_unless_forced(tmp_path: Path, logger: RecordingLogger) -> None:
    _make_repo(tmp_path)
    install_hooks(tmp_path, logger=logger, env={})

    again = install_hooks(tmp_path, logger=logger, env={})
    forced = install_hooks(tmp_path, logger=logger, env={}, force=True)

    assert again.installed == [] and len(again.skipped) == 3
    assert len(forced.installed) == 3
    assert forced.backups == []


def test_foreign_hooks_are_backed_up(tmp_path: Path, logger: RecordingLogger) -> None:
    hooks_dir = _make_repo(tmp_path)
    (hooks_dir / "pre-commit").write_text("#!/bin/sh\necho legacy\n", encoding="utf-8")

    result = install_hooks(tmp_path, logger=logger, env={})

    assert len(result.backups) == 1
    backup = result.backups[0]
    assert backup.name.startswith("pre-commit.backup.")
    assert backup.read_text(encoding="utf-8") == "#!/bin/sh\necho legacy\n"
    assert SHIM_MARKER in (hooks_dir / "pre-commit").read_text(encoding="utf-8")


def test_dry_run_leaves_the_repository_untouched(tmp_path: Path, logger: RecordingLogger) -> None:
    hooks_dir = _make_repo(tmp_path)
    legacy = hooks_dir / "commit-msg"
    legacy.write_text("legacy\n", encoding="utf-8")

    result = install_hooks(tmp_path, logger=logger, env={}, dry_run=True)

    assert len(result.installed) == 3
    assert len(result.backups) == 1
    assert legacy.read_text(encoding="utf-8") == "legacy\n"
    assert not (hooks_dir / "pre-commit").exists()
    assert not (tmp_path / ".pyhooks.toml").exists()
    assert "Dry run complete: would install 3 hook(s)" in logger.messages("success")


def test_install_selected_hooks_into_custom_directory(tmp_path: Path, logger: RecordingLogger) -> None:
    _make_repo(tmp_path)
    target = tmp_path / "custom-hooks"

    result = install_hooks(tmp_path, logger=logger, env={}, hooks_dir=target, hooks=["commit-msg"])

    assert result.installed == [target / "commit-msg"]
    assert (target / "commit-msg").is_file()


def test_existing_project_config_is_preserved(tmp_path: Path, logger: RecordingLogger) -> None:
    _make_repo(tmp_path)
    (tmp_path / ".pyhooks.toml").write_text("[pre_commit]\nenabled = false\n", encoding="utf-8")

    install_hooks(tmp_path, logger=logger, env={})

    assert (tmp_path / ".pyhooks.toml").read_text(encoding="utf-8") == "[pre_commit]\nenabled = false\n"


def test_install_requires_git_repository(tmp_path: Path, logger: RecordingLogger) -> None:
    with pytest.raises(FileNotFoundError, match="Not a git repository"):
        install_hooks(tmp_path, logger=logger, env={})


def test_version_pins_strip_range_markers() -> None:
    env = {"PYHOOKS_LINT_STAGED_VERSION": "^14.0.1", "PYHOOKS_TYPESCRIPT_VERSION": "~5.3.3"}
    assert pinned_tool_versions(env) == {"lint-staged": "14.0.1", "typescript": "5.3.3"}
    assert clean_version("1.2.3") == "1.2.3"


def test_render_shim_quotes_interpreter() -> None:
    shim = render_shim(HookKind.PRE_PUSH, python="/opt/my env/bin/python")
    assert "exec '/opt/my env/bin/python' -m pyhooks pre-push \"$@\"" in shim


def test_hook_registry() -> None:
    assert HOOK_NAMES == ("pre-commit", "pre-push", "commit-msg")
    assert parse_hook("pre-push") is HookKind.PRE_PUSH
    assert normalise_hook_order(["commit-msg", "pre-commit", "commit-msg"]) == (
        HookKind.PRE_COMMIT,
        HookKind.COMMIT_MSG,
    )
    with pytest.raises(ValueError, match="post-merge"):
        normalise_hook_order(["post-merge"])


@pytest.fixture
def git_outputs(monkeypatch: pytest.MonkeyPatch) -> dict[str, str | None]:
    outputs: dict[str, str | None] = {}

    def fake_run(args, *, options=None):
        output = outputs.get(args[1])
        if output is None:
            raise SubprocessExecutionError(args, 128, None, "fatal: not a git repository")
        return subprocess.CompletedProcess(args, 0, stdout=output, stderr="")

    monkeypatch.setattr("pyhooks.hooks.git.run_command", fake_run)
    return outputs


def test_git_context(tmp_path: Path, git_outputs: dict[str, str | None]) -> None:
    git_outputs["rev-parse"] = "release/1.2\n"
    git_outputs["log"] = "wip: halfway\n\n"

    assert current_branch(tmp_path) == "release/1.2"
    assert last_commit_message(tmp_path) == "wip: halfway"
    assert collect_context(HookKind.PRE_PUSH, tmp_path).branch == "release/1.2"
    assert collect_context(HookKind.PRE_COMMIT, tmp_path).commit_message == "wip: halfway"


def test_git_context_degrades_outside_a_repository(tmp_path: Path, git_outputs: dict[str, str | None]) -> None:
    assert current_branch(tmp_path) is None
    assert last_commit_message(tmp_path) == ""
    git_outputs["rev-parse"] = "HEAD\n"
    assert current_branch(tmp_path) is None
