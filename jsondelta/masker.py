"""Noise suppression: pruning ignored members and filtering ignored diffs."""

from __future__ import annotations

from typing import Any, Sequence
from copy import deepcopy

from .models import DiffItem
from .jsonpath_utils import JSONPathMatcher


class Masker:
    """
    Applies ignore rules around a comparison.

    Operations:
    - Remove members matched by global-ignore JSONPath expressions
    - Drop differences whose path contains an ignored substring
    """

    def __init__(
        self,
        global_ignores: Sequence[str] = (),
        ignore_paths: Sequence[str] = ()
    ):
        self.global_ignores = list(global_ignores)
        self.ignore_paths = [p for p in ignore_paths if p]
        self.removed_count = 0

        # Fail early on malformed expressions
        for expression in self.global_ignores:
            JSONPathMatcher.compile(expression)

    def mask(self, left: Any, right: Any) -> tuple[Any, Any, int]:
        """
        Apply global ignores to both documents.

        The inputs are never modified; pruning happens on deep copies.

        Args:
            left: The left document
            right: The right document

        Returns:
            Tuple of (masked_left, masked_right, removed_count)
        """
        self.removed_count = 0

        if not self.global_ignores:
            return left, right, 0

        left = deepcopy(left)
        right = deepcopy(right)
        self.removed_count += JSONPathMatcher.delete_paths(left, self.global_ignores)
        self.removed_count += JSONPathMatcher.delete_paths(right, self.global_ignores)

        return left, right, self.removed_count

    def filter(self, diffs: Sequence[DiffItem]) -> list[DiffItem]:
        """Drop differences whose path contains any ignored substring."""
        if not self.ignore_paths:
            return list(diffs)
        return [
            d for d in diffs
            if not any(ignored in d.path for ignored in self.ignore_paths)
        ]
