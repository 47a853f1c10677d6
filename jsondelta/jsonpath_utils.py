"""JSONPath utilities for the jsondelta engine."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.jsonpath import Fields, Index

from .exceptions import InvalidPathExpressionError


class JSONPathMatcher:
    """Utility class for JSONPath matching and manipulation."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression."""
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except JSONPathError as e:
                raise InvalidPathExpressionError(path, str(e)) from e
        return cls._cache[path]

    @classmethod
    def delete_paths(cls, data: Any, paths: list[str]) -> int:
        """
        Delete every member or element matched by the given expressions.

        Args:
            data: The data to modify (modified in place)
            paths: List of JSONPath expressions

        Returns:
            Number of members/elements removed
        """
        removed = 0
        for path in paths:
            removed += cls._delete_path(data, path)
        return removed

    @classmethod
    def _delete_path(cls, data: Any, path: str) -> int:
        """Delete a single JSONPath from data."""
        expr = cls.compile(path)
        removed = 0
        pending: dict[int, tuple[list, set[int]]] = {}

        for match in expr.find(data):
            if match.context is None:
                # The document root itself cannot be removed
                continue

            parent = match.context.value
            step = match.path

            if isinstance(step, Fields) and isinstance(parent, dict):
                for name in step.fields:
                    if name in parent:
                        del parent[name]
                        removed += 1
            elif isinstance(step, Index) and isinstance(parent, list):
                index = _index_of(step)
                if index < 0:
                    index += len(parent)
                if 0 <= index < len(parent):
                    pending.setdefault(id(parent), (parent, set()))[1].add(index)

        # Array elements go last and highest index first so earlier
        # deletions do not shift the positions of later ones
        for parent, indices in pending.values():
            for index in sorted(indices, reverse=True):
                del parent[index]
                removed += 1

        return removed


def _index_of(step: Index) -> int:
    """Get the position addressed by an Index step."""
    indices = getattr(step, 'indices', None)
    if indices:
        return indices[0]
    return step.index
