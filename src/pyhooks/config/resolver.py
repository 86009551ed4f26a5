# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the effective hook configuration from layered sources.

Layers apply in increasing priority: the common base, the environment
overlay registered in the base, the project-type overlay module, project
override files and finally caller-supplied overrides. Every optional layer
that fails to load degrades to an empty layer with a logged warning.
"""

from __future__ import annotations

import importlib.util
import os
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from importlib import import_module
from pathlib import Path
from types import ModuleType
from typing import Any, Final

from ..constants import CACHE_DIR_NAME, COMBINER_CALLABLE, COMBINER_PATH, TARGET_ENV, VERBOSE_ENV
from ..logging import ConsoleHookLogger, HookLogger
from .defaults import ENVIRONMENTS_KEY, build_common_config, build_fallback_config, env_flag, environment_overlay
from .detection import detect_environment, detect_project_type, is_ci
from .merge import dedupe_sequence, is_mapping, merge_layers
from .models import (
    COMMON_PROJECT_TYPE,
    ConfigError,
    EffectiveConfig,
    Environment,
    HookKind,
    validate_config,
)
from .overlays import OVERLAY_ATTRIBUTE, OVERLAY_FACTORY
from .snapshot import write_snapshot
from .sources import ConfigSource, project_sources

OVERLAY_PACKAGE: Final[str] = "pyhooks.config.overlays"
DEFAULTS_SUFFIX: Final[str] = "_defaults"
CHECKS_KEY: Final[str] = "checks"

_PROJECT_TYPE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z][a-z0-9_]*$")

Combiner = Callable[[str, Mapping[str, Any] | None], Mapping[str, Any]]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def flatten_sections(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Fold ``<hook>_defaults`` sections into their hook sections.

    Hook section keys override default keys. ``checks`` lists are
    concatenated defaults-first and deduplicated by name, later entries
    replacing earlier ones in place.

    Args:
        tree: Merged raw configuration.

    Returns:
        dict[str, Any]: New tree without ``*_defaults`` sections.
    """

    result = {key: value for key, value in tree.items() if not key.endswith(DEFAULTS_SUFFIX)}
    for hook in HookKind:
        defaults = tree.get(f"{hook.section}{DEFAULTS_SUFFIX}")
        own = tree.get(hook.section)
        defaults = defaults if is_mapping(defaults) else {}
        own = own if is_mapping(own) else {}
        section = {**defaults, **own}
        if hook is not HookKind.COMMIT_MSG:
            section[CHECKS_KEY] = dedupe_sequence([*defaults.get(CHECKS_KEY, ()), *own.get(CHECKS_KEY, ())])
        result[hook.section] = section
    return result


class ConfigResolver:
    """Resolve and cache the effective configuration for one process.

    Construct a single resolver per hook invocation and hand it to the
    consumers that need configuration; :meth:`resolve` caches its first
    result and returns that same object on every later call.
    """

    def __init__(
        self,
        *,
        project_root: Path,
        env: Mapping[str, str] | None = None,
        logger: HookLogger | None = None,
        overlay_package: str = OVERLAY_PACKAGE,
        sources: Sequence[ConfigSource] | None = None,
        combiner_path: Path | None = None,
        persist_snapshot: bool = True,
        clock: Clock | None = None,
    ) -> None:
        """Initialise the resolver.

        Args:
            project_root: Repository root used for detection and override discovery.
            env: Environment variables; defaults to ``os.environ``.
            logger: Logger receiving warnings about degraded layers.
            overlay_package: Package holding project-type overlay modules.
            sources: Project override sources; defaults to ``pyproject.toml`` and ``.pyhooks.toml``.
            combiner_path: Project-local combining module; defaults to ``.pyhooks/hooks_config.py``.
            persist_snapshot: Write the diagnostic snapshot after resolving.
            clock: Clock used for ``meta.generated_at``.
        """

        self._root = project_root.resolve()
        self._env: Mapping[str, str] = dict(os.environ if env is None else env)
        self._logger = logger or ConsoleHookLogger(verbose=env_flag(self._env, VERBOSE_ENV))
        self._overlay_package = overlay_package
        self._sources = list(sources) if sources is not None else project_sources(self._root, env=self._env)
        self._combiner_path = combiner_path or self._root.joinpath(*COMBINER_PATH)
        self._persist_snapshot = persist_snapshot
        self._clock = clock or _utcnow
        self._resolved: EffectiveConfig | None = None

    @property
    def project_root(self) -> Path:
        """Return the resolved project root."""

        return self._root

    @property
    def env(self) -> Mapping[str, str]:
        """Return the environment snapshot used for resolution."""

        return self._env

    def resolve(
        self,
        project_type: str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> EffectiveConfig:
        """Return the effective configuration, resolving it on first use.

        Args:
            project_type: Explicit project type; detected from the project root when omitted.
            overrides: Caller overrides applied with the highest priority.

        Returns:
            EffectiveConfig: Cached configuration; later calls return the identical object.
        """

        if self._resolved is not None:
            return self._resolved

        environment = detect_environment(self._env)
        resolved_type = project_type or detect_project_type(self._root, debug=self._logger.debug)
        self._logger.debug(f"project_type={resolved_type} environment={environment.value}")

        raw, project_overlay, is_default = self._combine(resolved_type, environment, overrides)
        try:
            config = self._finalise(raw, resolved_type, environment, project_overlay, is_default=is_default)
        except ConfigError as exc:
            self._logger.warn(f"Configuration rejected, using defaults: {exc}")
            fallback = flatten_sections(build_fallback_config(self._env))
            config = self._finalise(fallback, resolved_type, environment, {}, is_default=True)

        if config.meta.is_default:
            self._logger.warn("Using the built-in default configuration")
        self._resolved = config
        if self._persist_snapshot:
            self._write_snapshot(config)
        return config

    def clear_cache(self) -> None:
        """Forget the cached configuration so the next call resolves again."""

        self._resolved = None
        self._logger.debug("configuration cache cleared")

    def build_raw(
        self,
        project_type: str,
        environment: Environment,
        overrides: Mapping[str, Any] | None = None,
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Merge the built-in layers for ``project_type`` and ``environment``.

        Args:
            project_type: Project type selecting the overlay module.
            environment: Environment selecting the base overlay.
            overrides: Caller overrides applied last.

        Returns:
            tuple[dict[str, Any], dict[str, Any]]: Flattened raw tree and the project-type overlay.
        """

        base = build_common_config(self._env)
        env_layer = environment_overlay(base, environment)
        base.pop(ENVIRONMENTS_KEY, None)
        project_layer = self.load_project_overlay(project_type)
        merged = merge_layers(base, env_layer, project_layer, *self._load_sources(), overrides)
        return flatten_sections(merged), project_layer

    def load_project_overlay(self, project_type: str) -> dict[str, Any]:
        """Return the overlay registered for ``project_type``.

        Args:
            project_type: Detected or explicit project type.

        Returns:
            dict[str, Any]: Overlay tree, empty when unavailable.
        """

        if project_type == COMMON_PROJECT_TYPE:
            return {}
        if not _PROJECT_TYPE_RE.match(project_type):
            self._logger.warn(f"Ignoring invalid project type '{project_type}', using common settings")
            return {}
        module_name = f"{self._overlay_package}.{project_type}"
        try:
            module = import_module(module_name)
        except ModuleNotFoundError as exc:
            self._logger.warn(f"No specific config for {project_type}, using common: {exc}")
            return {}
        except Exception as exc:  # overlay modules are user-extensible; any failure degrades to common
            self._logger.warn(f"Failed to load overlay for {project_type}, using common: {exc}")
            return {}
        return self._overlay_from_module(module, project_type)

    def _overlay_from_module(self, module: ModuleType, project_type: str) -> dict[str, Any]:
        factory = getattr(module, OVERLAY_FACTORY, None)
        payload = factory() if callable(factory) else getattr(module, OVERLAY_ATTRIBUTE, None)
        if not is_mapping(payload):
            self._logger.warn(f"Overlay for {project_type} has an unknown format, using common")
            return {}
        return dict(payload)

    def _load_sources(self) -> list[Mapping[str, Any]]:
        fragments: list[Mapping[str, Any]] = []
        for source in self._sources:
            try:
                fragment = source.load()
            except ConfigError as exc:
                self._logger.warn(f"Ignoring {source.describe()}: {exc}")
                continue
            if fragment:
                self._logger.debug(f"loaded source={source.name}")
                fragments.append(fragment)
        return fragments

    def _combine(
        self,
        project_type: str,
        environment: Environment,
        overrides: Mapping[str, Any] | None,
    ) -> tuple[dict[str, Any], dict[str, Any], bool]:
        if not self._combiner_path.is_file():
            raw, project_layer = self.build_raw(project_type, environment, overrides)
            return raw, project_layer, False
        self._logger.debug(f"combiner={self._combiner_path}")
        try:
            combiner = self._load_combiner()
            payload = combiner(project_type, overrides)
        except Exception as exc:  # project-local module: report and fall back
            self._logger.error(f"Failed to load configuration from {self._combiner_path}: {exc}")
            return flatten_sections(build_fallback_config(self._env)), {}, True
        if not is_mapping(payload):
            self._logger.warn(f"{self._combiner_path} returned an unknown format, using defaults")
            return flatten_sections(build_fallback_config(self._env)), {}, True
        return flatten_sections(payload), {}, False

    def _load_combiner(self) -> Combiner:
        spec = importlib.util.spec_from_file_location("pyhooks_project_config", self._combiner_path)
        if spec is None or spec.loader is None:
            raise ConfigError(f"cannot import {self._combiner_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        combiner = getattr(module, COMBINER_CALLABLE, None)
        if not callable(combiner):
            raise ConfigError(f"{self._combiner_path} does not define {COMBINER_CALLABLE}()")
        return combiner

    def _finalise(
        self,
        raw: Mapping[str, Any],
        project_type: str,
        environment: Environment,
        project_overlay: Mapping[str, Any],
        *,
        is_default: bool,
    ) -> EffectiveConfig:
        general = dict(raw.get("general") or {})
        general.update(project_root=self._root, project_type=project_type, environment=environment)
        payload = {
            **raw,
            "meta": {
                "project_type": project_type,
                "environment": environment,
                "generated_at": self._clock(),
                "is_default": is_default,
            },
            "general": general,
            "advanced": {
                "project": dict(project_overlay),
                "env": {
                    "target_env": self._env.get(TARGET_ENV),
                    "is_ci": is_ci(self._env),
                    "is_verbose": env_flag(self._env, VERBOSE_ENV),
                },
                "cache": {
                    "enabled": general.get("cache_enabled") is not False,
                    "directory": self._root / CACHE_DIR_NAME,
                },
            },
        }
        return validate_config(payload)

    def _write_snapshot(self, config: EffectiveConfig) -> None:
        try:
            path = write_snapshot(config, self._root)
        except OSError as exc:
            self._logger.warn(f"Unable to save configuration snapshot: {exc}")
            return
        self._logger.debug(f"snapshot={path}")


__all__ = ["OVERLAY_PACKAGE", "ConfigResolver", "flatten_sections"]
