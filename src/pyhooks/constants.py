# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across pyhooks modules."""

from __future__ import annotations

from typing import Final

CONFIG_VERSION: Final[str] = "1.0.0"
SNAPSHOT_SOURCE: Final[str] = "py-hooks"

CI_ENV: Final[str] = "CI"
GITHUB_ACTIONS_ENV: Final[str] = "GITHUB_ACTIONS"
TARGET_ENV: Final[str] = "PYHOOKS_ENV"
VERBOSE_ENV: Final[str] = "PYHOOKS_VERBOSE"
AUTO_FIX_ENV: Final[str] = "PYHOOKS_AUTO_FIX"
PARALLEL_ENV: Final[str] = "PYHOOKS_PARALLEL"
CACHE_ENV: Final[str] = "PYHOOKS_CACHE"
DEBUG_ENV: Final[str] = "PYHOOKS_DEBUG"
LEGACY_DEBUG_ENV: Final[str] = "DEBUG"

LINT_STAGED_VERSION_ENV: Final[str] = "PYHOOKS_LINT_STAGED_VERSION"
TYPESCRIPT_VERSION_ENV: Final[str] = "PYHOOKS_TYPESCRIPT_VERSION"

PROJECT_CONFIG_FILENAME: Final[str] = ".pyhooks.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_SECTION_KEY: Final[str] = "pyhooks"
COMBINER_PATH: Final[tuple[str, ...]] = (".pyhooks", "hooks_config.py")
COMBINER_CALLABLE: Final[str] = "get_config"
SNAPSHOT_FILENAME: Final[str] = ".pyhooks-config.json"
CACHE_DIR_NAME: Final[str] = ".pyhooks-cache"
CACHE_TTL_MS: Final[int] = 3_600_000

PACKAGE_MANIFEST: Final[str] = "package.json"
MANIFEST_DEPENDENCY_KEYS: Final[tuple[str, ...]] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
)

TRUTHY: Final[str] = "true"
FALSY: Final[str] = "false"

__all__ = [
    "AUTO_FIX_ENV",
    "CACHE_DIR_NAME",
    "CACHE_ENV",
    "CACHE_TTL_MS",
    "CI_ENV",
    "COMBINER_CALLABLE",
    "COMBINER_PATH",
    "CONFIG_VERSION",
    "DEBUG_ENV",
    "FALSY",
    "GITHUB_ACTIONS_ENV",
    "LEGACY_DEBUG_ENV",
    "LINT_STAGED_VERSION_ENV",
    "MANIFEST_DEPENDENCY_KEYS",
    "PACKAGE_MANIFEST",
    "PARALLEL_ENV",
    "PROJECT_CONFIG_FILENAME",
    "PYPROJECT_FILENAME",
    "PYPROJECT_SECTION_KEY",
    "SNAPSHOT_FILENAME",
    "SNAPSHOT_SOURCE",
    "TARGET_ENV",
    "TRUTHY",
    "TYPESCRIPT_VERSION_ENV",
    "VERBOSE_ENV",
]
