# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in checks backed by external JavaScript tooling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from ..process import CommandOptions, SubprocessExecutionError, run_command
from .registry import CheckFailedError, CheckRegistry, CheckRequest

CommandBuilder = Callable[[CheckRequest], list[str]]

DEFAULT_TSCONFIG: Final[str] = "tsconfig.json"


@dataclass(frozen=True, slots=True)
class CommandCheck:
    """Check that passes when an external command exits with status zero."""

    name: str
    description: str
    build_command: CommandBuilder
    capture_output: bool = False

    def __call__(self, request: CheckRequest) -> None:
        command = self.build_command(request)
        request.logger.info(f"{self.description}...")
        request.logger.debug(f"check={self.name} command=\"{' '.join(command)}\"")
        options = CommandOptions(capture_output=self.capture_output).with_overrides(
            cwd=request.config.general.project_root,
        )
        try:
            run_command(command, options=options)
        except FileNotFoundError as exc:
            raise CheckFailedError(str(exc)) from exc
        except SubprocessExecutionError as exc:
            if self.capture_output and exc.stdout:
                request.logger.error(exc.stdout.rstrip())
            raise CheckFailedError(f"{self.description} failed: {exc}") from exc


def _lint_staged(request: CheckRequest) -> list[str]:
    command = ["npx", "lint-staged"]
    if request.options.get("allow_empty"):
        command.append("--allow-empty")
    return command


def _typescript(request: CheckRequest) -> list[str]:
    command = ["npx", "tsc"]
    if request.options.get("no_emit", True):
        command.append("--noEmit")
    if request.options.get("skip_lib_check", True):
        command.append("--skipLibCheck")
    return command


def _vite_type_check(request: CheckRequest) -> list[str]:
    project = str(request.options.get("project", DEFAULT_TSCONFIG))
    return ["npx", "tsc", "--noEmit", "--skipLibCheck", "--project", project]


def _build(request: CheckRequest) -> list[str]:
    project_type = request.config.general.project_type
    if project_type == "nextjs":
        command = ["npx", "next", "build"]
        if request.options.get("no_lint", True):
            command.append("--no-lint")
        return command
    if project_type == "vite":
        command = ["npx", "vite", "build"]
        if request.options.get("production"):
            command.extend(["--mode", "production"])
        if request.options.get("source_map"):
            command.append("--sourcemap")
        return command
    return ["npm", "run", "build", "--if-present"]


def _test(request: CheckRequest) -> list[str]:
    command = ["npm", "test", "--silent"]
    if request.options.get("coverage"):
        command.extend(["--", "--coverage"])
    return command


def _next_lint(request: CheckRequest) -> list[str]:
    command = ["npx", "next", "lint", "--quiet"]
    if request.config.general.auto_fix:
        command.append("--fix")
    return command


def _next_security(request: CheckRequest) -> list[str]:
    level = str(request.options.get("audit_level", "high"))
    return ["npm", "audit", f"--audit-level={level}"]


BUILTIN_CHECKS: Final[tuple[CommandCheck, ...]] = (
    CommandCheck("lint-staged", "Running lint-staged", _lint_staged),
    CommandCheck("typescript", "Type-checking with tsc", _typescript, capture_output=True),
    CommandCheck("vite-type-check", "Type-checking the Vite project", _vite_type_check, capture_output=True),
    CommandCheck("build", "Building the project", _build),
    CommandCheck("test", "Running the test suite", _test),
    CommandCheck("next-lint", "Running next lint", _next_lint),
    CommandCheck("next-security", "Auditing dependencies", _next_security, capture_output=True),
)


def default_registry() -> CheckRegistry:
    """Return a registry populated with every built-in check."""

    registry = CheckRegistry()
    for check in BUILTIN_CHECKS:
        registry.register(check.name, check)
    return registry


__all__ = ["BUILTIN_CHECKS", "CommandCheck", "default_registry"]
