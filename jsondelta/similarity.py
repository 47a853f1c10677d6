"""Content similarity scoring used to pair up array elements."""

from __future__ import annotations

from typing import Any

from .utils import json_type, strict_equal


ID_KEY_MARKER = "id"
ID_MATCH_WEIGHT = 0.8
VALUE_WEIGHT = 0.5


def is_id_key(key: Any) -> bool:
    """Check if a member name looks like an identifier (``id``, ``userId``, ...)."""
    return ID_KEY_MARKER in str(key).lower()


def similarity(left: Any, right: Any) -> float:
    """
    Score how alike two values are.

    This is a heuristic, not a metric. Identical values score 1.0, values
    of different types score 0.0, and objects score higher the more keys
    they share and the more identifier members agree.

    Args:
        left: Value from the left document
        right: Value from the right document

    Returns:
        Score between 0.0 and 1.0
    """
    if strict_equal(left, right):
        return 1.0

    if json_type(left) != json_type(right):
        return 0.0

    if isinstance(left, dict) and isinstance(right, dict):
        return _object_similarity(left, right)

    return 0.0


def _object_similarity(left: dict, right: dict) -> float:
    """Score two objects by shared keys, weighting equal identifier members."""
    all_keys = list(left)
    all_keys.extend(k for k in right if k not in left)

    if not all_keys:
        return 1.0

    score = 0.0
    matching_keys = 0

    for key in all_keys:
        if key not in left or key not in right:
            continue

        matching_keys += 1
        if is_id_key(key) and strict_equal(left[key], right[key]):
            score += ID_MATCH_WEIGHT
        else:
            score += similarity(left[key], right[key]) * VALUE_WEIGHT

    key_overlap = matching_keys / len(all_keys)
    return min(1.0, (score + key_overlap) / 2)
