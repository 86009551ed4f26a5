# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI helpers: errors, logger construction and the command boundary."""

from __future__ import annotations

import traceback
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

import typer

from ..config.defaults import debug_enabled, env_flag
from ..constants import VERBOSE_ENV
from ..logging import ConsoleHookLogger


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str = "", *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message; empty when already reported.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def build_cli_logger(env: Mapping[str, str], *, emoji: bool = True) -> ConsoleHookLogger:
    """Return a console logger honouring ``PYHOOKS_VERBOSE`` from ``env``."""

    return ConsoleHookLogger(use_emoji=emoji, verbose=env_flag(env, VERBOSE_ENV))


@contextmanager
def command_boundary(logger: ConsoleHookLogger, env: Mapping[str, str]) -> Iterator[None]:
    """Translate failures raised inside a command into exit statuses.

    :class:`CLIError` exits with its own code. Any other exception is logged,
    with a traceback when debugging is enabled, and exits with status 1.

    Args:
        logger: Logger receiving the failure message.
        env: Environment consulted for the debug flag.

    Raises:
        typer.Exit: Always raised when the wrapped block fails.
    """

    try:
        yield
    except typer.Exit:
        raise
    except CLIError as exc:
        message = str(exc)
        if message:
            logger.error(message)
        raise typer.Exit(code=exc.exit_code) from exc
    except Exception as exc:  # process boundary: git must only ever see an exit status
        logger.error(f"Unexpected error: {exc}")
        if debug_enabled(env):
            logger.echo(traceback.format_exc().rstrip())
        raise typer.Exit(code=1) from exc


__all__ = ["CLIError", "build_cli_logger", "command_boundary"]
