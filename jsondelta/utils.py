"""Utility functions for the jsondelta engine."""

from __future__ import annotations

import json
from typing import Any, Optional


def json_type(value: Any) -> str:
    """
    Get the runtime type category of a value.

    Categories follow JavaScript ``typeof``: ``null``, arrays and objects
    all report ``object`` and ints/floats report ``number``. Values that
    are not JSON types fall back to their Python type name.
    """
    if value is None or isinstance(value, (dict, list)):
        return "object"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    else:
        return type(value).__name__


def strict_equal(left: Any, right: Any) -> bool:
    """
    Check two values for strict structural equality.

    Unlike ``==`` this never equates values of different JSON types,
    so ``1`` and ``True`` differ, even inside containers.
    """
    if left is right:
        return True

    if isinstance(left, dict) and isinstance(right, dict):
        if len(left) != len(right):
            return False
        for key, value in left.items():
            if key not in right or not strict_equal(value, right[key]):
                return False
        return True

    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(strict_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return False

    if json_type(left) != json_type(right):
        return False

    try:
        return bool(left == right)
    except Exception:
        return False


def format_value(value: Any) -> str:
    """Render a value for a diff description."""
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        # JSON numbers have no int/float split; 2.0 prints as 2
        return str(int(value))
    elif isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'), default=str)
    return str(value)


def build_path(parent_path: str, key: str | int) -> str:
    """Build a diff path from parent path and member key or array index."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    return f"{parent_path}.{key}" if parent_path else str(key)


def get_json_size_mb(obj: Any) -> float:
    """Get the approximate size of a JSON object in megabytes."""
    json_str = json.dumps(obj, default=str)
    return len(json_str.encode('utf-8')) / (1024 * 1024)


def find_depth_violation(data: Any, max_depth: int) -> Optional[str]:
    """
    Find the first container nested deeper than ``max_depth``.

    The root container sits at depth 1 and scalars add no depth.

    Args:
        data: The document to inspect
        max_depth: Maximum allowed container nesting

    Returns:
        Path of the first offending container, or None if within limits
    """
    stack = [(data, "", 1)]

    while stack:
        value, path, depth = stack.pop()

        if isinstance(value, dict):
            children = [(build_path(path, k), v) for k, v in value.items()]
        elif isinstance(value, list):
            children = [(build_path(path, i), v) for i, v in enumerate(value)]
        else:
            continue

        if depth > max_depth:
            return path

        for child_path, child in reversed(children):
            stack.append((child, child_path, depth + 1))

    return None
