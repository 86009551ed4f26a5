# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry mapping check names to callables run by the hook runner."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..config.models import CheckDescriptor, EffectiveConfig
from ..logging import HookLogger


class CheckFailedError(RuntimeError):
    """Raised by a check to signal failure with a user-facing message."""


class UnknownCheckError(LookupError):
    """Raised when configuration names a check that is not registered."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        """Initialise the error with the unknown name and the registered names.

        Args:
            name: Check name requested by configuration.
            available: Names currently registered.
        """

        known = ", ".join(available) or "none"
        super().__init__(f"Unknown check '{name}' (registered checks: {known})")
        self.name = name
        self.available = available


@dataclass(frozen=True, slots=True)
class CheckRequest:
    """Inputs handed to a check invocation."""

    descriptor: CheckDescriptor
    config: EffectiveConfig
    logger: HookLogger

    @property
    def options(self) -> Mapping[str, Any]:
        """Return the options configured for the check."""

        return self.descriptor.options


@runtime_checkable
class Check(Protocol):
    """Callable unit of work; returning normally means the check passed."""

    def __call__(self, request: CheckRequest) -> None:
        """Run the check, raising to signal failure."""


class CheckRegistry:
    """Explicit name-to-check mapping populated at startup."""

    def __init__(self, checks: Mapping[str, Check] | None = None) -> None:
        self._checks: dict[str, Check] = dict(checks or {})

    def register(self, name: str, check: Check, *, replace: bool = False) -> None:
        """Register ``check`` under ``name``.

        Args:
            name: Check name referenced by configuration.
            check: Callable implementing the check.
            replace: Allow replacing an existing registration.

        Raises:
            ValueError: Raised when ``name`` is taken and ``replace`` is false.
        """

        if name in self._checks and not replace:
            raise ValueError(f"check '{name}' is already registered")
        self._checks[name] = check

    def resolve(self, name: str) -> Check:
        """Return the check registered as ``name``.

        Raises:
            UnknownCheckError: Raised when no check is registered under ``name``.
        """

        try:
            return self._checks[name]
        except KeyError:
            raise UnknownCheckError(name, self.names()) from None

    def names(self) -> tuple[str, ...]:
        """Return registered names in registration order."""

        return tuple(self._checks)

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    def __iter__(self) -> Iterator[str]:
        return iter(self._checks)

    def __len__(self) -> int:
        return len(self._checks)


__all__ = [
    "Check",
    "CheckFailedError",
    "CheckRegistry",
    "CheckRequest",
    "UnknownCheckError",
]
