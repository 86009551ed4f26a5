# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration pattern compilation."""

from __future__ import annotations

import re

import pytest

from pyhooks.patterns import DEFAULT_COMMIT_PATTERN, compile_pattern


def test_compiled_pattern_is_returned_untouched() -> None:
    pattern = re.compile(r"^chore")
    assert compile_pattern(pattern) is pattern


def test_none_yields_default_commit_pattern() -> None:
    pattern = compile_pattern(None)
    assert pattern is DEFAULT_COMMIT_PATTERN
    assert pattern.match("FEAT(ui): add toggle")
    assert not pattern.match("feature: nope")


def test_delimited_pattern_uses_embedded_flags() -> None:
    pattern = compile_pattern("/^wip:|^draft:/m")
    assert pattern.flags & re.MULTILINE
    assert not pattern.flags & re.IGNORECASE
    assert pattern.search("first line\ndraft: second")
    assert not pattern.search("WIP: shouting")


def test_delimited_pattern_without_flags_is_case_insensitive() -> None:
    assert compile_pattern("/^wip:/").search("WIP: later")


def test_javascript_only_flags_are_ignored() -> None:
    pattern = compile_pattern("/^fixup!/gi")
    assert pattern.flags & re.IGNORECASE
    assert pattern.search("fixup! tweak")


def test_bare_text_is_case_insensitive() -> None:
    assert compile_pattern("^merge").search("Merge branch 'x'")


def test_body_may_contain_slashes() -> None:
    assert compile_pattern("/^release/v\\d+/i").search("Release/v2")


def test_malformed_pattern_raises() -> None:
    with pytest.raises(re.error):
        compile_pattern("/(unclosed/i")


def test_unknown_flag_letters_compile_as_bare_text() -> None:
    pattern = compile_pattern("/abc/q")
    assert pattern.pattern == "/abc/q"
    assert pattern.search("see /ABC/q here")


def test_path_like_pattern_is_bare_text() -> None:
    pattern = compile_pattern("/src/app")
    assert pattern.flags & re.IGNORECASE
    assert pattern.search("touches /src/app/page.tsx")
    assert not pattern.search("src")
