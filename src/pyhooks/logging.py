# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing hook logging with optional colour and emoji support.

Hook output goes to whatever ``sys.stdout`` is when a line is printed, so
the consoles below are built without an explicit ``file``.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from functools import cache
from typing import Final, Protocol, runtime_checkable

from rich.console import Console, RenderableType
from rich.rule import Rule
from rich.text import Text

_PREFIXES: Final[dict[str, str]] = {
    "info": "ℹ️ ",
    "success": "✅ ",
    "warn": "⚠️ ",
    "error": "❌ ",
}
_STYLES: Final[dict[str, str]] = {
    "info": "cyan",
    "success": "green",
    "warn": "yellow",
    "error": "red",
}
_KEY_VALUE_RE: Final[re.Pattern[str]] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")


def stdout_is_tty() -> bool:
    """Return whether the current ``sys.stdout`` is an interactive terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _color_enabled(use_color: bool | None) -> bool:
    # Colour needs a terminal even when requested explicitly.
    return stdout_is_tty() if use_color is None else use_color and stdout_is_tty()


@cache
def _hook_console(color: bool, emoji: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=color,
        no_color=not color,
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


def hook_console(*, use_color: bool | None, use_emoji: bool) -> Console:
    """Return the shared console for a logger's colour and emoji settings.

    Args:
        use_color: Explicit colour flag; ``None`` follows TTY detection.
        use_emoji: Whether rich should render emoji codes.

    Returns:
        Console: Console reused by every logger with the same effective settings.
    """

    return _hook_console(_color_enabled(use_color), use_emoji)


@runtime_checkable
class HookLogger(Protocol):
    """Logging surface consumed by hook runners and the commit message validator."""

    def info(self, message: str) -> None:
        """Emit an informational line."""

    def success(self, message: str) -> None:
        """Emit a success line."""

    def warn(self, message: str) -> None:
        """Emit a warning line."""

    def error(self, message: str) -> None:
        """Emit an error line."""

    def debug(self, message: str) -> None:
        """Emit a debug line when verbose output is enabled."""


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    level: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` with the prefix and style registered for ``level``.

    Args:
        msg: Message text to print to the console.
        level: Logging level key selecting prefix and style, ``None`` for plain lines.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = _color_enabled(use_color)
    console = hook_console(use_color=color_enabled, use_emoji=use_emoji)
    prefix = emoji(_PREFIXES[level], use_emoji) if level else ""
    text = Text(f"{prefix}{msg}")
    if level and color_enabled:
        text.stylize(_STYLES[level])
    console.print(text)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Render a section header to delineate console output blocks.

    Args:
        title: Section title displayed to the user.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = _color_enabled(use_color)
    console = hook_console(use_color=color_enabled, use_emoji=True)
    if color_enabled:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def plain(msg: str, *, use_color: bool | None = None) -> None:
    """Emit ``msg`` without a prefix, used for summary and example lines."""

    _print_line(msg, level=None, use_emoji=True, use_color=use_color)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(msg, level="info", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(msg, level="success", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(msg, level="warn", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(msg, level="error", use_emoji=use_emoji, use_color=use_color)


@dataclass(slots=True)
class ConsoleHookLogger:
    """:class:`HookLogger` implementation printing through the shared Rich console.

    Attributes:
        use_emoji: Prefix lines with status emoji.
        verbose: Print ``debug`` lines; they are dropped otherwise.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    use_emoji: bool = True
    verbose: bool = False
    use_color: bool | None = None
    debug_prefix: str = field(default="[debug] ")

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def success(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def error(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Print ``message`` verbatim."""

        plain(message, use_color=self.use_color)

    def debug(self, message: str) -> None:
        """Emit ``message`` with ``key=value`` highlighting when verbose output is enabled.

        Args:
            message: Debug payload rendered with simple highlighting.
        """

        if not self.verbose:
            return
        text = Text(self.debug_prefix, style="bold cyan")
        cursor = 0
        for match in _KEY_VALUE_RE.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.show(text)

    def show(self, renderable: RenderableType) -> None:
        """Print a rich renderable, such as a summary table, with this logger's settings."""

        hook_console(use_color=self.use_color, use_emoji=self.use_emoji).print(renderable)


__all__ = [
    "ConsoleHookLogger",
    "HookLogger",
    "emoji",
    "fail",
    "hook_console",
    "info",
    "ok",
    "plain",
    "section",
    "stdout_is_tty",
    "warn",
]
