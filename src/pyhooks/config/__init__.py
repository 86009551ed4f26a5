# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models, merging and resolution."""

from __future__ import annotations

from .merge import deep_merge, merge_layers, merge_sequences
from .models import (
    CheckDescriptor,
    CommitMsgConfig,
    ConfigError,
    EffectiveConfig,
    Environment,
    GeneralConfig,
    HookKind,
    PreCommitConfig,
    PrePushConfig,
)
from .resolver import ConfigResolver

__all__ = [
    "CheckDescriptor",
    "CommitMsgConfig",
    "ConfigError",
    "ConfigResolver",
    "EffectiveConfig",
    "Environment",
    "GeneralConfig",
    "HookKind",
    "PreCommitConfig",
    "PrePushConfig",
    "deep_merge",
    "merge_layers",
    "merge_sequences",
]
