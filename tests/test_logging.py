# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console hook logging."""

from __future__ import annotations

import pytest
from rich.table import Table

from pyhooks.logging import ConsoleHookLogger, hook_console, stdout_is_tty


def test_consoles_are_shared_per_effective_settings() -> None:
    assert hook_console(use_color=None, use_emoji=True) is hook_console(use_color=None, use_emoji=True)
    assert hook_console(use_color=None, use_emoji=True) is not hook_console(use_color=None, use_emoji=False)


def test_colour_requires_a_terminal(capsys: pytest.CaptureFixture[str]) -> None:
    assert stdout_is_tty() is False
    assert hook_console(use_color=True, use_emoji=True).no_color is True


def test_logger_lines_and_debug_gate(capsys: pytest.CaptureFixture[str]) -> None:
    logger = ConsoleHookLogger(use_emoji=False, use_color=False)

    logger.info("plain [bold]text[/bold]")
    logger.debug("check=build critical=True")
    logger.verbose = True
    logger.debug("check=test critical=False")

    output = capsys.readouterr().out
    assert "plain [bold]text[/bold]" in output
    assert "check=build" not in output
    assert "[debug] check=test critical=False" in output


def test_show_prints_renderables(capsys: pytest.CaptureFixture[str]) -> None:
    table = Table(title="Hooks")
    table.add_column("Hook")
    table.add_row("pre-push")

    ConsoleHookLogger(use_emoji=False, use_color=False).show(table)

    assert "pre-push" in capsys.readouterr().out
