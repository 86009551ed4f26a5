# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Project override sources read from TOML documents."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from ..constants import PROJECT_CONFIG_FILENAME, PYPROJECT_FILENAME, PYPROJECT_SECTION_KEY
from .merge import deep_merge
from .models import ConfigError

DEFAULT_INCLUDE_KEY: Final[str] = "include"
PYPROJECT_TOOL_KEY: Final[str] = "tool"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


@runtime_checkable
class ConfigSource(Protocol):
    """Source of a raw configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw fragment, empty when the source does not exist."""
        ...

    def describe(self) -> str:
        """Return a human-readable description of the source."""
        ...


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {key: _expand_env_value(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


class TomlConfigSource:
    """Load configuration data from a TOML document with include support."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = os.environ if env is None else env

    @property
    def path(self) -> Path:
        """Return the document path."""

        return self._root_path

    def exists(self) -> bool:
        """Return whether the document is present on disk."""

        return self._root_path.is_file()

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        resolved = path.resolve()
        if resolved in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {include_chain}")
        try:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Malformed TOML in {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {path}: {exc}") from exc
        document: dict[str, Any] = dict(data)
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, resolved.parent):
            fragment = self._load(include_path, (*stack, resolved))
            merged = deep_merge(merged, fragment)
        merged = deep_merge(merged, document)
        return _expand_env_value(merged, self._env)

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [self._resolve_path(Path(raw), base_dir)]
        if isinstance(raw, MutableMapping):
            return [self._resolve_path(Path(value), base_dir) for value in raw.values()]
        if isinstance(raw, list):
            return [self._resolve_path(Path(item), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    @staticmethod
    def _resolve_path(path: Path, base_dir: Path) -> Path:
        return path if path.is_absolute() else (base_dir / path)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.pyhooks]`` within ``pyproject.toml``."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        super().__init__(path, name=str(path), env=env)

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def project_sources(root: Path, *, env: Mapping[str, str] | None = None) -> list[TomlConfigSource]:
    """Return the project override sources for ``root`` in increasing priority.

    Args:
        root: Project root directory.
        env: Environment used for ``$VAR`` expansion.

    Returns:
        list[TomlConfigSource]: ``pyproject.toml`` first, then ``.pyhooks.toml``.
    """

    return [
        PyProjectConfigSource(root / PYPROJECT_FILENAME, env=env),
        TomlConfigSource(root / PROJECT_CONFIG_FILENAME, env=env),
    ]


__all__ = [
    "ConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "project_sources",
]
