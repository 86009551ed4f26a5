# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check registry and built-in checks."""

from __future__ import annotations

from .builtin import BUILTIN_CHECKS, CommandCheck, default_registry
from .registry import Check, CheckFailedError, CheckRegistry, CheckRequest, UnknownCheckError

__all__ = [
    "BUILTIN_CHECKS",
    "Check",
    "CheckFailedError",
    "CheckRegistry",
    "CheckRequest",
    "CommandCheck",
    "UnknownCheckError",
    "default_registry",
]
