# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile configuration-supplied patterns into regular expressions."""

from __future__ import annotations

import re
from typing import Final, TypeAlias

PatternLike: TypeAlias = str | re.Pattern[str] | None

COMMIT_TYPES: Final[tuple[str, ...]] = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "build",
    "ci",
    "revert",
)
DEFAULT_COMMIT_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^({'|'.join(COMMIT_TYPES)})(\(.+\))?: .+",
    re.IGNORECASE,
)

_DELIMITED_RE: Final[re.Pattern[str]] = re.compile(r"^/(.*?)/([gimsuxy]*)$", re.DOTALL)
# ``g``, ``u`` and ``y`` carry no meaning for single-shot Python matching.
_FLAG_MAP: Final[dict[str, re.RegexFlag]] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "g": re.NOFLAG,
    "u": re.NOFLAG,
    "y": re.NOFLAG,
}


def _translate_flags(letters: str) -> re.RegexFlag:
    """Return the :mod:`re` flags encoded by ``letters``.

    Args:
        letters: Flag characters trailing a ``/body/flags`` pattern.

    Returns:
        re.RegexFlag: Combined flags; case-insensitive when ``letters`` is empty.
    """

    if not letters:
        return re.IGNORECASE
    flags = re.NOFLAG
    for letter in letters:
        flags |= _FLAG_MAP[letter]
    return flags


def compile_pattern(value: PatternLike) -> re.Pattern[str]:
    """Return a compiled matcher for a configuration pattern value.

    Already-compiled patterns are returned untouched. Text wrapped as
    ``/body/flags`` with recognised flag letters uses those flags; any other
    text, ``/src/app`` included, compiles case-insensitively as written, and
    ``None`` yields :data:`DEFAULT_COMMIT_PATTERN`.

    Args:
        value: Pattern supplied by configuration.

    Returns:
        re.Pattern[str]: Compiled regular expression.

    Raises:
        re.error: Raised when the pattern text is malformed.
    """

    if isinstance(value, re.Pattern):
        return value
    if value is None:
        return DEFAULT_COMMIT_PATTERN
    if delimited := _DELIMITED_RE.match(value):
        return re.compile(delimited.group(1), _translate_flags(delimited.group(2)))
    return re.compile(value, re.IGNORECASE)


__all__ = ["COMMIT_TYPES", "DEFAULT_COMMIT_PATTERN", "PatternLike", "compile_pattern"]
