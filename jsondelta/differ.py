"""Structural deep compare of two JSON documents."""

from __future__ import annotations

from typing import Any

from .models import DiffItem, DiffType
from .matcher import ArrayMatcher, COMPARE, MISSING, EXTRA
from .severity import classify_severity
from .utils import json_type, strict_equal, format_value, build_path


_ABSENT = object()
_EMIT = "emit"


class Differ:
    """
    Performs a structural deep comparison of two documents.

    Handles:
    - Type changes (no descent past them)
    - Object members present on one side only
    - Array comparison (positional or order-insensitive)
    - Scalar value changes (exact equality, no tolerance)

    Traversal runs on an explicit work stack rather than native recursion,
    so arbitrarily deep documents cannot exhaust the interpreter stack.
    Differences come out in the same order a depth-first recursive walk
    would produce them.
    """

    def __init__(self, order_sensitive: bool = False):
        self.order_sensitive = order_sensitive
        self.matcher = ArrayMatcher(order_sensitive)
        self.diffs: list[DiffItem] = []

    def diff(self, left: Any, right: Any, path: str = "") -> list[DiffItem]:
        """
        Perform deep diff comparison.

        Args:
            left: The left/baseline value
            right: The right value to compare against it
            path: Path of the values within their documents

        Returns:
            The differences collected so far, in traversal order
        """
        stack: list[tuple] = [(COMPARE, left, right, path)]

        while stack:
            task = stack.pop()
            if task[0] == COMPARE:
                _, l_value, r_value, t_path = task
                children = self._compare(l_value, r_value, t_path)
                stack.extend(reversed(children))
            else:
                _, diff_type, t_path, old, new, message = task
                self._add_diff(t_path, diff_type, message, old, new)

        return self.diffs

    def _compare(self, left: Any, right: Any, path: str) -> list[tuple]:
        """Compare one pair of values, returning follow-up tasks in order."""
        left_type = json_type(left)
        right_type = json_type(right)

        if left_type != right_type:
            self._add_diff(
                path,
                DiffType.TYPE_CHANGED,
                f"Type changed from {left_type} to {right_type}",
                left,
                right
            )
            return []

        if isinstance(left, list) and isinstance(right, list):
            return self._compare_arrays(left, right, path)

        if isinstance(left, dict) and isinstance(right, dict):
            return self._compare_objects(left, right, path)

        if not strict_equal(left, right):
            self._add_diff(
                path,
                DiffType.CHANGED,
                f"Value changed from '{format_value(left)}' to '{format_value(right)}'",
                left,
                right
            )
        return []

    def _compare_objects(self, left: dict, right: dict, path: str) -> list[tuple]:
        """Compare two objects member by member."""
        tasks = []
        keys = list(left)
        keys.extend(k for k in right if k not in left)

        for key in keys:
            child_path = build_path(path, key)

            if key not in left:
                tasks.append((
                    _EMIT, DiffType.EXTRA, child_path, _ABSENT, right[key],
                    f"Property '{key}' exists only in right"
                ))
            elif key not in right:
                tasks.append((
                    _EMIT, DiffType.MISSING, child_path, left[key], _ABSENT,
                    f"Property '{key}' exists only in left"
                ))
            else:
                tasks.append((COMPARE, left[key], right[key], child_path))

        return tasks

    def _compare_arrays(self, left: list, right: list, path: str) -> list[tuple]:
        """Compare two arrays through the array matcher."""
        tasks = []

        for step in self.matcher.plan(left, right, path):
            if step.kind == COMPARE:
                tasks.append((COMPARE, step.left, step.right, step.path))
            elif step.kind == MISSING:
                tasks.append((
                    _EMIT, DiffType.MISSING, step.path, step.left, _ABSENT,
                    step.description
                ))
            elif step.kind == EXTRA:
                tasks.append((
                    _EMIT, DiffType.EXTRA, step.path, _ABSENT, step.right,
                    step.description
                ))

        return tasks

    def _add_diff(
        self,
        path: str,
        diff_type: DiffType,
        message: str,
        old_value: Any = _ABSENT,
        new_value: Any = _ABSENT
    ):
        """Add a diff entry."""
        has_old = old_value is not _ABSENT
        has_new = new_value is not _ABSENT

        self.diffs.append(DiffItem(
            path=path,
            type=diff_type,
            severity=classify_severity(path, diff_type),
            description=message,
            old_value=old_value if has_old else None,
            new_value=new_value if has_new else None,
            has_old_value=has_old,
            has_new_value=has_new
        ))
