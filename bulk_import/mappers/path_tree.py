"""
bulk_import/mappers/path_tree.py

Dot-path helpers for building and flattening nested records.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "."


def split_path(path: str) -> list[str]:
    return path.split(PATH_SEPARATOR)


def set_at_path(tree: MutableMapping[str, Any], path: str, value: Any) -> None:
    """
    Assign ``value`` at a dot-path, creating intermediate mappings.

    An intermediate segment holding a non-mapping value is replaced with a
    fresh mapping.
    """

    segments = split_path(path)
    current: MutableMapping[str, Any] = tree
    for depth, segment in enumerate(segments[:-1]):
        existing = current.get(segment)
        if not isinstance(existing, MutableMapping):
            if existing is not None:
                logger.debug(
                    "Path collision replaced scalar with mapping path=%s segment=%s",
                    path,
                    PATH_SEPARATOR.join(segments[: depth + 1]),
                )
            existing = {}
            current[segment] = existing
        current = existing
    current[segments[-1]] = value


def get_at_path(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    current: Any = tree
    for segment in split_path(path):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]
    return current


def flatten(tree: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested mappings into dot-path keys; lists and scalars are leaves.
    """

    flat: dict[str, Any] = {}
    for key, value in tree.items():
        path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat
