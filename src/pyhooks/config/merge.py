# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered deep-merge of raw configuration trees.

Configuration layers are plain trees of mappings, sequences and scalars.
Merging never mutates its inputs: every mapping or sequence in the result
is a fresh container, while leaf values (strings, numbers, compiled
patterns) are shared by reference.

Sequence merge concatenates both sides and then removes duplicates.
Mappings carrying a ``name`` key are identified by that name; when a name
repeats, the entry keeps the position of its first occurrence and takes the
value of its last occurrence, so a higher-priority layer fully replaces the
earlier definition. Any other element is identified by deep equality.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable, Mapping, Sequence
from functools import reduce
from typing import Any, Final

NAME_KEY: Final[str] = "name"


def is_mapping(value: Any) -> bool:
    """Return whether ``value`` is an associative configuration node."""

    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Return whether ``value`` is an ordered configuration sequence (text excluded)."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def clone_tree(value: Any) -> Any:
    """Return ``value`` with every mapping and sequence container rebuilt.

    Args:
        value: Configuration node to copy.

    Returns:
        Any: Structurally equal node sharing only leaf values with ``value``.
    """

    if is_mapping(value):
        return {key: clone_tree(item) for key, item in value.items()}
    if is_sequence(value):
        return [clone_tree(item) for item in value]
    return value


def _freeze(value: Any) -> Hashable:
    """Return a hashable token that is equal for deeply equal nodes."""

    if is_mapping(value):
        return ("map", tuple(sorted(((str(key), _freeze(item)) for key, item in value.items()), key=repr)))
    if is_sequence(value):
        return ("seq", tuple(_freeze(item) for item in value))
    if isinstance(value, re.Pattern):
        return ("re", value.pattern, value.flags)
    if isinstance(value, Hashable):
        return (type(value).__name__, value)
    return ("repr", repr(value))


def element_identity(value: Any) -> Hashable:
    """Return the deduplication identity of a sequence element.

    Args:
        value: Element taken from a configuration sequence.

    Returns:
        Hashable: ``("name", <name>)`` for named mappings, otherwise a deep-equality token.
    """

    if is_mapping(value) and value.get(NAME_KEY):
        return (NAME_KEY, _freeze(value[NAME_KEY]))
    return _freeze(value)


def dedupe_sequence(items: Iterable[Any]) -> list[Any]:
    """Remove duplicate elements keeping first positions and last values.

    Args:
        items: Elements in priority order (later elements win).

    Returns:
        list[Any]: Fresh list without duplicate identities.
    """

    positions: dict[Hashable, int] = {}
    result: list[Any] = []
    for item in items:
        identity = element_identity(item)
        if identity in positions:
            result[positions[identity]] = clone_tree(item)
            continue
        positions[identity] = len(result)
        result.append(clone_tree(item))
    return result


def merge_sequences(first: Sequence[Any], second: Sequence[Any]) -> list[Any]:
    """Concatenate ``first`` and ``second`` and drop duplicate elements.

    Args:
        first: Lower-priority sequence.
        second: Higher-priority sequence.

    Returns:
        list[Any]: Deduplicated concatenation.
    """

    return dedupe_sequence([*first, *second])


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``source`` on top of ``target`` and return a new tree.

    Args:
        target: Lower-priority configuration layer.
        source: Higher-priority configuration layer.

    Returns:
        dict[str, Any]: Merged configuration; neither input is modified.
    """

    result: dict[str, Any] = {key: clone_tree(value) for key, value in target.items()}
    for key, value in source.items():
        current = result.get(key)
        if key in result and is_mapping(current) and is_mapping(value):
            result[key] = deep_merge(current, value)
        elif key in result and is_sequence(current) and is_sequence(value):
            result[key] = merge_sequences(current, value)
        else:
            result[key] = clone_tree(value)
    return result


def merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fold ``layers`` left to right, later layers taking priority.

    Args:
        *layers: Configuration layers in increasing priority; ``None`` entries are skipped.

    Returns:
        dict[str, Any]: Effective merged tree.
    """

    present = [layer for layer in layers if layer]
    return reduce(deep_merge, present, {})


__all__ = [
    "NAME_KEY",
    "clone_tree",
    "dedupe_sequence",
    "deep_merge",
    "element_identity",
    "is_mapping",
    "is_sequence",
    "merge_layers",
    "merge_sequences",
]
