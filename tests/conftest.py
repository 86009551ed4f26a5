# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
from hook_doubles import FIXED_NOW, FakeCheck, RecordingLogger

from pyhooks.checks import CheckRegistry
from pyhooks.config.models import EffectiveConfig, validate_config

_PYHOOKS_ENV_VARS = (
    "CI",
    "GITHUB_ACTIONS",
    "PYHOOKS_ENV",
    "PYHOOKS_VERBOSE",
    "PYHOOKS_AUTO_FIX",
    "PYHOOKS_PARALLEL",
    "PYHOOKS_CACHE",
    "PYHOOKS_DEBUG",
    "DEBUG",
    "PYHOOKS_LINT_STAGED_VERSION",
    "PYHOOKS_TYPESCRIPT_VERSION",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment out of every test."""

    for name in _PYHOOKS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def make_registry(calls: list[str]) -> Callable[..., CheckRegistry]:
    """Return a factory registering a :class:`FakeCheck` per keyword argument."""

    def factory(**specs: Mapping[str, Any]) -> CheckRegistry:
        registry = CheckRegistry()
        for name, spec in specs.items():
            registry.register(name, FakeCheck(calls=calls, **spec))
        return registry

    return factory


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., EffectiveConfig]:
    """Return a factory validating hook sections into an :class:`EffectiveConfig`."""

    def factory(*, is_ci: bool = False, general: Mapping[str, Any] | None = None, **sections: Any) -> EffectiveConfig:
        payload = {
            "meta": {"generated_at": FIXED_NOW},
            "general": {"project_root": tmp_path, **(general or {})},
            "advanced": {
                "env": {"is_ci": is_ci},
                "cache": {"directory": tmp_path / ".pyhooks-cache"},
            },
            **sections,
        }
        return validate_config(payload)

    return factory
