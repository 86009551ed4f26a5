# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Overlay applied to Vite projects."""

from __future__ import annotations

from typing import Any, Final

OVERLAY: Final[dict[str, Any]] = {
    "pre_commit": {
        "checks": [
            {"name": "typescript", "enabled": False, "critical": True},
            {
                "name": "vite-type-check",
                "enabled": True,
                "critical": True,
                "options": {"project": "tsconfig.json"},
            },
        ],
    },
    "pre_push": {
        "checks": [{"name": "build", "enabled": True, "critical": True, "options": {"production": True}}],
    },
}
