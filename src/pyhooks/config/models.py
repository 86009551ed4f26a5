# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validated configuration models consumed by the hook runners."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any, Final, TypeAlias

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from ..constants import CACHE_TTL_MS, CONFIG_VERSION


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class Environment(StrEnum):
    """Runtime environments selecting an overlay from the base configuration."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    CI = "ci"
    TEST = "test"


class HookKind(StrEnum):
    """Git hooks managed by pyhooks, valued by their git hook file name."""

    PRE_COMMIT = "pre-commit"
    PRE_PUSH = "pre-push"
    COMMIT_MSG = "commit-msg"

    @property
    def section(self) -> str:
        """Return the configuration section key for the hook."""

        return self.value.replace("-", "_")

    @property
    def label(self) -> str:
        """Return a human-readable hook label."""

        return self.value.capitalize()


COMMON_PROJECT_TYPE: Final[str] = "common"

_FROZEN: Final[ConfigDict] = ConfigDict(frozen=True, extra="ignore", arbitrary_types_allowed=True)


class CheckDescriptor(BaseModel):
    """Named check configured for a hook."""

    model_config = _FROZEN

    name: str
    enabled: bool = True
    critical: bool = True
    options: dict[str, Any] = Field(default_factory=dict)


def _unique_check_names(checks: tuple[CheckDescriptor, ...]) -> tuple[CheckDescriptor, ...]:
    seen: set[str] = set()
    for check in checks:
        if check.name in seen:
            raise ValueError(f"duplicate check name '{check.name}'")
        seen.add(check.name)
    return checks


CheckList: TypeAlias = Annotated[tuple[CheckDescriptor, ...], AfterValidator(_unique_check_names)]


class GeneralConfig(BaseModel):
    """Process-wide flags derived from environment variables and overlays."""

    model_config = _FROZEN

    skip_ci: bool = False
    verbose: bool = False
    auto_fix: bool = True
    parallel_checks: bool = True
    cache_enabled: bool = True
    debug: bool = False
    project_root: Path = Field(default_factory=Path.cwd)
    project_type: str = COMMON_PROJECT_TYPE
    environment: Environment = Environment.DEVELOPMENT


class PreCommitConfig(BaseModel):
    """Pre-commit hook section."""

    model_config = _FROZEN

    enabled: bool = True
    checks: CheckList = ()
    timeout: int = Field(default=10_000, gt=0)
    skip_pattern: str | re.Pattern[str] | None = None
    run_in_ci: bool = True
    parallel: bool = False
    fail_fast: bool = True


class PrePushConfig(BaseModel):
    """Pre-push hook section."""

    model_config = _FROZEN

    enabled: bool = True
    checks: CheckList = ()
    timeout: int = Field(default=120_000, gt=0)
    skip_branches: tuple[str, ...] = ()
    parallel: bool = False


class CommitMsgConfig(BaseModel):
    """Commit-msg hook section."""

    model_config = _FROZEN

    enabled: bool = True
    pattern: str | re.Pattern[str] | None = None
    min_length: int | None = None
    max_length: int | None = None
    allow_merge: bool = True
    allow_revert: bool = True
    allow_squash: bool = True
    auto_skip_pattern: str | re.Pattern[str] | None = None
    types: tuple[str, ...] = ()
    scopes: tuple[str, ...] = ()
    require_scope: bool = False
    allow_emoji: bool = True
    examples: tuple[str, ...] = ()


class MetaInfo(BaseModel):
    """Provenance of a resolved configuration."""

    model_config = _FROZEN

    project_type: str = COMMON_PROJECT_TYPE
    environment: Environment = Environment.DEVELOPMENT
    config_version: str = CONFIG_VERSION
    generated_at: datetime
    is_default: bool = False


class EnvSnapshot(BaseModel):
    """Environment signals captured while resolving."""

    model_config = _FROZEN

    target_env: str | None = None
    is_ci: bool = False
    is_verbose: bool = False


class CacheSettings(BaseModel):
    """Check result cache settings."""

    model_config = _FROZEN

    enabled: bool = True
    directory: Path
    ttl: int = CACHE_TTL_MS


class AdvancedConfig(BaseModel):
    """Derived settings attached after merging."""

    model_config = _FROZEN

    project: dict[str, Any] = Field(default_factory=dict)
    env: EnvSnapshot = Field(default_factory=EnvSnapshot)
    cache: CacheSettings


class EffectiveConfig(BaseModel):
    """Fully merged configuration shared read-only by every hook."""

    model_config = _FROZEN

    meta: MetaInfo
    general: GeneralConfig
    pre_commit: PreCommitConfig = Field(default_factory=PreCommitConfig)
    pre_push: PrePushConfig = Field(default_factory=PrePushConfig)
    commit_msg: CommitMsgConfig = Field(default_factory=CommitMsgConfig)
    advanced: AdvancedConfig

    def hook_enabled(self, kind: HookKind) -> bool:
        """Return whether the section for ``kind`` is enabled."""

        section: PreCommitConfig | PrePushConfig | CommitMsgConfig = getattr(self, kind.section)
        return section.enabled


def validate_config(payload: Mapping[str, Any]) -> EffectiveConfig:
    """Validate a merged raw configuration tree.

    Args:
        payload: Raw tree holding ``meta``, ``general``, hook sections and ``advanced``.

    Returns:
        EffectiveConfig: Frozen configuration model.

    Raises:
        ConfigError: Raised when the tree does not match the schema.
    """

    try:
        return EffectiveConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid hook configuration: {exc}") from exc


__all__ = [
    "COMMON_PROJECT_TYPE",
    "AdvancedConfig",
    "CacheSettings",
    "CheckDescriptor",
    "CommitMsgConfig",
    "ConfigError",
    "EffectiveConfig",
    "EnvSnapshot",
    "Environment",
    "GeneralConfig",
    "HookKind",
    "MetaInfo",
    "PreCommitConfig",
    "PrePushConfig",
    "validate_config",
]
