# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in base configuration and per-environment overlays.

The base tree keeps hook settings in ``*_defaults`` sections; the resolver
flattens them into the matching hook sections after all layers are merged,
so overlays can target either the defaults or the hook section itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from ..constants import (
    AUTO_FIX_ENV,
    CACHE_ENV,
    CI_ENV,
    DEBUG_ENV,
    FALSY,
    LEGACY_DEBUG_ENV,
    PARALLEL_ENV,
    TRUTHY,
    VERBOSE_ENV,
)
from .models import Environment

ENVIRONMENTS_KEY: Final[str] = "environments"
DEFAULT_SKIP_PATTERN: Final[str] = "/^wip:|^fixup!|^squash!|^draft:/i"
DEFAULT_SKIP_BRANCHES: Final[tuple[str, ...]] = ("main", "master", "develop", "release/*")
DEFAULT_EXAMPLES: Final[tuple[str, ...]] = (
    "feat(button): add a new variant",
    "fix(modal): close on backdrop click",
    "docs: update API documentation",
    "chore(deps): bump dependencies",
)


def env_flag(env: Mapping[str, str], name: str) -> bool:
    """Return ``True`` when ``name`` is set to ``"true"``."""

    return env.get(name) == TRUTHY


def env_opt_out(env: Mapping[str, str], name: str) -> bool:
    """Return ``True`` unless ``name`` is explicitly set to ``"false"``."""

    return env.get(name) != FALSY


def debug_enabled(env: Mapping[str, str]) -> bool:
    """Return whether stack traces should accompany unexpected failures."""

    return env_flag(env, DEBUG_ENV) or bool(env.get(LEGACY_DEBUG_ENV))


def _general_section(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "skip_ci": env_flag(env, CI_ENV),
        "verbose": env_flag(env, VERBOSE_ENV),
        "auto_fix": env_opt_out(env, AUTO_FIX_ENV),
        "parallel_checks": env_opt_out(env, PARALLEL_ENV),
        "cache_enabled": env_opt_out(env, CACHE_ENV),
        "debug": debug_enabled(env),
    }


def _environment_overlays() -> dict[str, dict[str, Any]]:
    return {
        Environment.DEVELOPMENT.value: {
            "general": {"verbose": True, "auto_fix": True},
            "pre_commit": {"timeout": 15_000, "fail_fast": False},
            "pre_push": {"enabled": False},
        },
        Environment.PRODUCTION.value: {
            "general": {"skip_ci": False, "verbose": False},
            "pre_commit": {
                "checks": [
                    {"name": "lint-staged", "enabled": True, "critical": True},
                    {"name": "typescript", "enabled": True, "critical": True},
                ],
            },
            "pre_push": {
                "enabled": True,
                "checks": [
                    {"name": "build", "enabled": True, "critical": True},
                    {"name": "test", "enabled": True, "critical": False},
                ],
            },
        },
        Environment.CI.value: {
            "general": {"skip_ci": False, "verbose": True, "parallel_checks": True},
            "pre_commit": {"run_in_ci": True, "parallel": True, "timeout": 30_000},
            "pre_push": {"enabled": True, "timeout": 180_000},
        },
    }


def build_common_config(env: Mapping[str, str]) -> dict[str, Any]:
    """Return the common base configuration for ``env``.

    Args:
        env: Environment variables supplying the ``general`` toggles.

    Returns:
        dict[str, Any]: Fresh raw base tree including the ``environments`` overlays.
    """

    return {
        "general": _general_section(env),
        "pre_commit_defaults": {
            "enabled": True,
            "checks": [
                {
                    "name": "lint-staged",
                    "enabled": True,
                    "critical": True,
                    "options": {"staged_only": True, "allow_empty": False, "auto_fix": True},
                },
                {
                    "name": "typescript",
                    "enabled": True,
                    "critical": True,
                    "options": {"no_emit": True, "skip_lib_check": True, "changed_only": True},
                },
            ],
            "timeout": 10_000,
            "skip_pattern": DEFAULT_SKIP_PATTERN,
            "run_in_ci": True,
            "parallel": False,
            "fail_fast": True,
        },
        "pre_push_defaults": {
            "enabled": True,
            "checks": [
                {
                    "name": "build",
                    "enabled": True,
                    "critical": True,
                    "options": {"production": False, "source_map": True},
                },
                {
                    "name": "test",
                    "enabled": False,
                    "critical": False,
                    "options": {"watch": False, "coverage": False},
                },
            ],
            "timeout": 120_000,
            "skip_branches": list(DEFAULT_SKIP_BRANCHES),
        },
        "commit_msg_defaults": {
            "enabled": True,
            "pattern": None,
            "min_length": 10,
            "max_length": 100,
            "allow_merge": True,
            "allow_revert": True,
            "allow_squash": False,
            "examples": list(DEFAULT_EXAMPLES),
        },
        "pre_commit": {},
        "pre_push": {},
        "commit_msg": {},
        ENVIRONMENTS_KEY: _environment_overlays(),
    }


def environment_overlay(base: Mapping[str, Any], environment: Environment) -> dict[str, Any]:
    """Return the overlay registered in ``base`` for ``environment`` (empty when absent)."""

    overlays = base.get(ENVIRONMENTS_KEY)
    if not isinstance(overlays, Mapping):
        return {}
    overlay = overlays.get(environment.value)
    return dict(overlay) if isinstance(overlay, Mapping) else {}


def build_fallback_config(env: Mapping[str, str]) -> dict[str, Any]:
    """Return the minimal configuration used when the combining step cannot run.

    Args:
        env: Environment variables supplying the ``general`` toggles.

    Returns:
        dict[str, Any]: Raw tree with flattened hook sections and no overlays.
    """

    return {
        "general": {"skip_ci": env_flag(env, CI_ENV), "verbose": env_flag(env, VERBOSE_ENV)},
        "pre_commit": {
            "enabled": True,
            "checks": [
                {"name": "lint-staged", "enabled": True, "critical": True},
                {"name": "typescript", "enabled": True, "critical": True},
            ],
            "timeout": 10_000,
            "skip_pattern": DEFAULT_SKIP_PATTERN,
        },
        "pre_push": {
            "enabled": True,
            "checks": [{"name": "build", "enabled": True, "critical": True}],
            "timeout": 120_000,
            "skip_branches": ["main", "master", "develop"],
        },
        "commit_msg": {
            "enabled": True,
            "pattern": None,
            "min_length": 10,
            "max_length": 100,
            "examples": list(DEFAULT_EXAMPLES[:3]),
        },
    }


__all__ = [
    "DEFAULT_EXAMPLES",
    "DEFAULT_SKIP_BRANCHES",
    "DEFAULT_SKIP_PATTERN",
    "ENVIRONMENTS_KEY",
    "build_common_config",
    "build_fallback_config",
    "debug_enabled",
    "env_flag",
    "env_opt_out",
    "environment_overlay",
]
