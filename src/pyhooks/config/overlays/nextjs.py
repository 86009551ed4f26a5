# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Overlay applied to Next.js projects."""

from __future__ import annotations

from typing import Any


def overlay() -> dict[str, Any]:
    """Return the Next.js overlay tree."""

    return {
        "pre_commit": {
            "checks": [{"name": "next-lint", "enabled": True, "critical": True}],
        },
        "pre_push": {
            "checks": [
                {"name": "build", "enabled": True, "critical": True, "options": {"no_lint": True}},
                {"name": "next-security", "enabled": True, "critical": False},
            ],
        },
    }
