# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point invoked by the installed git hook shims."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.table import Table

from ..checks import UnknownCheckError, default_registry
from ..config import ConfigResolver, EffectiveConfig, HookKind
from ..config.snapshot import build_snapshot
from ..hooks import (
    CommitMessageValidator,
    ErrorKind,
    HookRunner,
    MessageReadError,
    collect_context,
    install_hooks,
    read_commit_message,
)
from ..logging import ConsoleHookLogger, section
from .shared import CLIError, build_cli_logger, command_boundary

DEFAULT_HOOKS_DIR: Final[Path] = Path(".git/hooks")

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Repository root.", file_okay=False),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
MESSAGE_FILE_ARGUMENT = Annotated[
    str,
    typer.Argument(help="File holding the commit message (passed by git).", show_default=False),
]
HOOKS_DIR_OPTION = Annotated[
    Path,
    typer.Option("--hooks-dir", help="Overrides the hooks directory."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Show actions without modifying files."),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option("--force", help="Rewrite hook shims even when they are up to date."),
]
JSON_OPTION = Annotated[
    bool,
    typer.Option("--json", help="Emit the configuration summary as JSON."),
]

app = typer.Typer(
    name="pyhooks",
    help="Git hook orchestration with layered configuration.",
    no_args_is_help=True,
    add_completion=False,
)


def _environment() -> Mapping[str, str]:
    return dict(os.environ)


def _resolve(root: Path, env: Mapping[str, str], logger: ConsoleHookLogger) -> EffectiveConfig:
    # Debug lines follow PYHOOKS_VERBOSE only; ``general.verbose`` stays a config value.
    return ConfigResolver(project_root=root, env=env, logger=logger).resolve()


def _run_hook(kind: HookKind, root: Path, *, emoji: bool) -> None:
    env = _environment()
    logger = build_cli_logger(env, emoji=emoji)
    with command_boundary(logger, env):
        config = _resolve(root, env, logger)
        runner = HookRunner(kind, default_registry(), logger)
        try:
            report = runner.execute(config, collect_context(kind, config.general.project_root))
        except UnknownCheckError as exc:
            raise CLIError(str(exc)) from exc
        if not report.passed:
            raise CLIError(exit_code=1)


@app.command("pre-commit")
def pre_commit(root: ROOT_OPTION = Path("."), emoji: EMOJI_OPTION = True) -> None:
    """Run the checks configured for the pre-commit hook."""

    _run_hook(HookKind.PRE_COMMIT, root, emoji=emoji)


@app.command("pre-push")
def pre_push(root: ROOT_OPTION = Path("."), emoji: EMOJI_OPTION = True) -> None:
    """Run the checks configured for the pre-push hook."""

    _run_hook(HookKind.PRE_PUSH, root, emoji=emoji)


@app.command("commit-msg")
def commit_msg(
    message_file: MESSAGE_FILE_ARGUMENT = "",
    root: ROOT_OPTION = Path("."),
    emoji: EMOJI_OPTION = True,
) -> None:
    """Validate the commit message stored in MESSAGE_FILE."""

    env = _environment()
    logger = build_cli_logger(env, emoji=emoji)
    with command_boundary(logger, env):
        config = _resolve(root, env, logger)
        if not config.commit_msg.enabled:
            logger.info("Commit message validation is disabled")
            return
        try:
            text = read_commit_message(message_file)
        except MessageReadError as exc:
            logger.error(str(exc))
            if exc.kind is ErrorKind.MISSING_ARGUMENT:
                logger.info('Make sure the commit-msg hook forwards its argument: pyhooks commit-msg "$1"')
            raise CLIError(exit_code=1) from exc
        if not CommitMessageValidator(config, logger).is_valid(text):
            raise CLIError(exit_code=1)


@app.command("install")
def install(
    root: ROOT_OPTION = Path("."),
    hooks_dir: HOOKS_DIR_OPTION = DEFAULT_HOOKS_DIR,
    dry_run: DRY_RUN_OPTION = False,
    force: FORCE_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Install pyhooks git hook shims into the repository."""

    env = _environment()
    logger = build_cli_logger(env, emoji=emoji)
    resolved_root = root.resolve()
    override = None if hooks_dir == DEFAULT_HOOKS_DIR else hooks_dir.resolve()
    with command_boundary(logger, env):
        try:
            result = install_hooks(
                resolved_root,
                logger=logger,
                hooks_dir=override,
                dry_run=dry_run,
                force=force,
                env=env,
            )
        except FileNotFoundError as exc:
            raise CLIError(str(exc)) from exc
        if result.backups:
            backup_paths = ", ".join(str(path) for path in result.backups)
            logger.warn(f"Backed up existing hooks: {backup_paths}")
        if dry_run and result.installed:
            planned = ", ".join(str(path) for path in result.installed)
            logger.warn(f"DRY RUN: would install {planned}")


def _summary_table(config: EffectiveConfig) -> Table:
    table = Table(title="Hooks", show_lines=False)
    table.add_column("Hook")
    table.add_column("Enabled")
    table.add_column("Checks")
    for kind in HookKind:
        hook_section = getattr(config, kind.section)
        checks = getattr(hook_section, "checks", ())
        names = ", ".join(
            check.name if check.critical else f"{check.name} (non-critical)" for check in checks if check.enabled
        )
        table.add_row(kind.value, "yes" if hook_section.enabled else "no", names or "-")
    return table


@app.command("show-config")
def show_config(
    root: ROOT_OPTION = Path("."),
    as_json: JSON_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Show the resolved project type, environment and hook settings."""

    env = _environment()
    logger = build_cli_logger(env, emoji=emoji)
    with command_boundary(logger, env):
        config = _resolve(root, env, logger)
        if as_json:
            typer.echo(json.dumps(build_snapshot(config), indent=2))
            return
        section("pyhooks configuration", use_color=logger.use_color)
        logger.echo(f"Project type: {config.meta.project_type}")
        logger.echo(f"Environment:  {config.meta.environment.value}")
        logger.echo(f"Config type:  {'default' if config.meta.is_default else 'custom'}")
        logger.show(_summary_table(config))


__all__ = ["app"]
