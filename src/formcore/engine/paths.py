"""
Path expressions over nested data records.

Grammar::

    path        := "$" segment*
    segment     := "." ( plainName | indexedName )
    indexedName := name "[" ( digits | "*" ) "]"

Resolution never raises for missing data: an absent key, an out-of-range
index or a step into a scalar yields ``MISSING``. Only a malformed path
(no leading ``$``, or segments after a wildcard) raises ``PathSyntaxError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..logging import logger

ROOT = "$"

_INDEXED_SEGMENT = re.compile(r"^(\w+)\[(\d+|\*)\]$")


class PathSyntaxError(ValueError):
    """Raised for structurally invalid path expressions."""


class _Missing:
    """Sentinel for "no value at this path" (distinct from JSON null)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


@dataclass(frozen=True)
class PathSegment:
    name: str
    index: Optional[int] = None
    wildcard: bool = False

    @property
    def indexed(self) -> bool:
        return self.wildcard or self.index is not None


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Split a path expression into segments.

    Segments that do not look like ``name[n]`` / ``name[*]`` are plain keys,
    whatever characters they contain.
    """
    if not isinstance(path, str) or not path.startswith(ROOT):
        raise PathSyntaxError(f"Invalid path: must start with {ROOT}. Got: {path!r}")

    segments: list[PathSegment] = []
    for raw in path[len(ROOT):].split("."):
        if not raw:
            continue
        if segments and segments[-1].wildcard:
            raise PathSyntaxError(f"Invalid path: no segment may follow a wildcard. Got: {path!r}")
        match = _INDEXED_SEGMENT.match(raw)
        if match is None:
            segments.append(PathSegment(name=raw))
        elif match.group(2) == "*":
            segments.append(PathSegment(name=match.group(1), wildcard=True))
        else:
            segments.append(PathSegment(name=match.group(1), index=int(match.group(2))))
    return tuple(segments)


def _child(current: Any, key: str) -> Any:
    if isinstance(current, dict):
        return current.get(key, MISSING)
    if isinstance(current, list) and key.isdigit():
        return _element(current, int(key))
    return MISSING


def _element(items: list, index: int) -> Any:
    if 0 <= index < len(items):
        return items[index]
    return MISSING


def resolve_path(path: str, record: Any) -> Any:
    """Resolve ``path`` against ``record``; ``MISSING`` when nothing is there."""
    current = record
    for segment in parse_path(path):
        if current is None or current is MISSING:
            return MISSING
        current = _child(current, segment.name)
        if not segment.indexed:
            continue
        if not isinstance(current, list):
            return MISSING
        if segment.wildcard:
            return current
        current = _element(current, segment.index)
    return current


def _ensure_list(container: dict, key: str, path: str) -> list:
    existing = container.get(key)
    if not existing:
        container[key] = existing = []
    if not isinstance(existing, list):
        raise TypeError(f"Cannot index non-list value at {key!r} while setting {path!r}")
    return existing


def _pad(items: list, index: int) -> None:
    if len(items) <= index:
        items.extend([None] * (index + 1 - len(items)))


def _slot(current: Any, segment: PathSegment, path: str) -> tuple[Any, Any]:
    """Container and key that hold ``segment`` below ``current``."""
    if segment.index is not None and isinstance(current, dict):
        items = _ensure_list(current, segment.name, path)
        _pad(items, segment.index)
        return items, segment.index
    if segment.index is None and isinstance(current, list) and segment.name.isdigit():
        index = int(segment.name)
        _pad(current, index)
        return current, index
    if segment.index is None and isinstance(current, dict):
        return current, segment.name
    raise TypeError(f"Cannot assign into {type(current).__name__} while setting {path!r}")


def set_path(path: str, record: dict, value: Any) -> dict:
    """Assign ``value`` at ``path`` inside ``record``, creating intermediates.

    Missing or falsy intermediates become ``{}`` (or ``[]`` for indexed
    segments). A plain digit segment on an existing list indexes it, as in
    ``resolve_path``. The record is mutated in place and returned.
    """
    segments = parse_path(path)
    if not segments:
        raise PathSyntaxError(f"Invalid path: cannot assign to the root. Got: {path!r}")
    if any(segment.wildcard for segment in segments):
        raise PathSyntaxError(f"Invalid path: wildcards cannot be assigned. Got: {path!r}")

    current: Any = record
    for segment in segments[:-1]:
        container, key = _slot(current, segment, path)
        child = container[key] if isinstance(container, list) else container.get(key)
        if not child:
            container[key] = child = {}
        current = child

    container, key = _slot(current, segments[-1], path)
    container[key] = value
    logger.debug("Set %s", path)
    return record
