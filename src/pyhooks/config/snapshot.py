# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write-only diagnostic snapshot of the last resolved configuration."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..constants import CONFIG_VERSION, SNAPSHOT_FILENAME, SNAPSHOT_SOURCE
from .models import EffectiveConfig, HookKind


def build_snapshot(config: EffectiveConfig, *, now: datetime | None = None) -> dict[str, Any]:
    """Return the JSON payload describing ``config``.

    Args:
        config: Resolved configuration.
        now: Optional timestamp override.

    Returns:
        dict[str, Any]: Snapshot payload with camelCase keys.
    """

    stamp = now or datetime.now(UTC)
    return {
        "version": CONFIG_VERSION,
        "projectType": config.meta.project_type,
        "configType": "default" if config.meta.is_default else "custom",
        "installed": stamp.isoformat(),
        "source": SNAPSHOT_SOURCE,
        "environment": config.meta.environment.value,
        "hooks": {
            "preCommit": config.hook_enabled(HookKind.PRE_COMMIT),
            "prePush": config.hook_enabled(HookKind.PRE_PUSH),
            "commitMsg": config.hook_enabled(HookKind.COMMIT_MSG),
        },
    }


def write_snapshot(config: EffectiveConfig, root: Path) -> Path:
    """Persist the snapshot for ``config`` under ``root``.

    Args:
        config: Resolved configuration.
        root: Project root receiving the snapshot file.

    Returns:
        Path: Location of the written snapshot.

    Raises:
        OSError: Raised when the file cannot be written.
    """

    destination = root / SNAPSHOT_FILENAME
    destination.write_text(json.dumps(build_snapshot(config), indent=2) + "\n", encoding="utf-8")
    return destination


__all__ = ["build_snapshot", "write_snapshot"]
