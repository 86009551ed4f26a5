# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry helpers describing the git hooks pyhooks manages."""

from __future__ import annotations

from collections.abc import Iterable

from ..config.models import HookKind

_DEFAULT_HOOKS: tuple[HookKind, ...] = tuple(HookKind)


def available_hooks() -> tuple[str, ...]:
    """Return the git hook file names managed by pyhooks."""

    return tuple(kind.value for kind in _DEFAULT_HOOKS)


def parse_hook(name: str) -> HookKind:
    """Return the :class:`HookKind` named ``name``.

    Args:
        name: Git hook file name such as ``pre-commit``.

    Returns:
        HookKind: Matching hook kind.

    Raises:
        ValueError: Raised when ``name`` is not a managed hook.
    """

    try:
        return HookKind(name)
    except ValueError:
        supported = ", ".join(available_hooks())
        raise ValueError(f"Unsupported hook '{name}' (expected one of: {supported})") from None


def normalise_hook_order(hooks: Iterable[str] | None = None) -> tuple[HookKind, ...]:
    """Return the requested hooks in canonical order.

    Unknown names are rejected rather than silently dropped.

    Args:
        hooks: Optional hook names; ``None`` selects every managed hook.

    Returns:
        tuple[HookKind, ...]: Requested hooks ordered like :class:`HookKind`.

    Raises:
        ValueError: Raised when a name is not a managed hook.
    """

    if hooks is None:
        return _DEFAULT_HOOKS
    requested = {parse_hook(name) for name in hooks}
    return tuple(kind for kind in _DEFAULT_HOOKS if kind in requested)


__all__ = ["available_hooks", "normalise_hook_order", "parse_hook"]
