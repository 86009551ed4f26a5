# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project-type configuration overlays.

Each module is named after the project type it applies to and exposes
either an ``OVERLAY`` mapping or an ``overlay()`` callable returning one.
"""

from __future__ import annotations

from typing import Final

OVERLAY_ATTRIBUTE: Final[str] = "OVERLAY"
OVERLAY_FACTORY: Final[str] = "overlay"

__all__ = ["OVERLAY_ATTRIBUTE", "OVERLAY_FACTORY"]
