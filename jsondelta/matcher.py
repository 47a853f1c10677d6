"""Array element pairing for positional and order-insensitive comparison."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .models import MatchCandidate
from .similarity import similarity
from .utils import build_path, strict_equal

logger = logging.getLogger(__name__)

# A candidate must score strictly above this to be paired at all
MATCH_THRESHOLD = 0.7
# At or above this the pair counts as a near-exact match
EXACT_THRESHOLD = 0.95

COMPARE = "compare"
MISSING = "missing"
EXTRA = "extra"


@dataclass(frozen=True)
class ArrayStep:
    """One step of an array comparison plan, in emission order."""
    kind: str
    path: str
    left: Any = None
    right: Any = None
    description: str = ""


def find_best_match(
    item: Any,
    candidates: list,
    used_indices: set[int]
) -> Optional[MatchCandidate]:
    """
    Find the best unclaimed candidate for an item.

    An unclaimed candidate that is strictly equal wins immediately.
    Otherwise the highest scoring candidate above MATCH_THRESHOLD is
    returned, the first one encountered on ties.

    Args:
        item: Element from the left array
        candidates: The right array
        used_indices: Right array indices already claimed

    Returns:
        MatchCandidate, or None if nothing is similar enough
    """
    best: Optional[MatchCandidate] = None
    best_similarity = MATCH_THRESHOLD

    for index, candidate in enumerate(candidates):
        if index in used_indices:
            continue

        if strict_equal(item, candidate):
            return MatchCandidate(match=candidate, index=index, similarity=1.0)

        score = similarity(item, candidate)
        if score > best_similarity:
            best = MatchCandidate(match=candidate, index=index, similarity=score)
            best_similarity = score

    return best


class ArrayMatcher:
    """
    Pairs up the elements of two arrays.

    Handles:
    - Positional comparison (order-sensitive)
    - Greedy similarity matching (order-insensitive)
    """

    def __init__(self, order_sensitive: bool = False):
        self.order_sensitive = order_sensitive

    def plan(self, left: list, right: list, path: str) -> list[ArrayStep]:
        """Plan the comparison of two arrays according to the mode."""
        if self.order_sensitive:
            return self._plan_positional(left, right, path)
        return self._plan_unordered(left, right, path)

    def _plan_positional(self, left: list, right: list, path: str) -> list[ArrayStep]:
        """Compare arrays index-by-index (order matters)."""
        steps = []

        for i in range(max(len(left), len(right))):
            item_path = build_path(path, i)

            if i >= len(left):
                steps.append(ArrayStep(
                    kind=EXTRA,
                    path=item_path,
                    right=right[i],
                    description=f"Extra array item at position {i} (order-sensitive)"
                ))
            elif i >= len(right):
                steps.append(ArrayStep(
                    kind=MISSING,
                    path=item_path,
                    left=left[i],
                    description=f"Missing array item at position {i} (order-sensitive)"
                ))
            else:
                steps.append(ArrayStep(kind=COMPARE, path=item_path, left=left[i], right=right[i]))

        return steps

    def _plan_unordered(self, left: list, right: list, path: str) -> list[ArrayStep]:
        """Compare arrays as multisets, pairing elements by content similarity."""
        steps = []
        used_indices: set[int] = set()
        unmatched: list[int] = []

        for i, item in enumerate(left):
            best = find_best_match(item, right, used_indices)

            if best is None:
                unmatched.append(i)
                continue

            used_indices.add(best.index)
            logger.debug(
                "%s: left[%d] paired with right[%d] (%s, similarity %.3f)",
                path or "<root>", i, best.index,
                "near-exact" if best.similarity >= EXACT_THRESHOLD else "partial",
                best.similarity
            )

            # A perfect score has nothing left to report, even when the
            # object score was capped rather than strictly equal
            if best.similarity < 1.0:
                steps.append(ArrayStep(
                    kind=COMPARE,
                    path=build_path(path, i),
                    left=item,
                    right=best.match
                ))

        for i in unmatched:
            steps.append(ArrayStep(
                kind=MISSING,
                path=build_path(path, i),
                left=left[i],
                description="Item from left not found in right (no similar match found)"
            ))

        for j, item in enumerate(right):
            if j not in used_indices:
                steps.append(ArrayStep(
                    kind=EXTRA,
                    path=build_path(path, j),
                    right=item,
                    description="New item in right not found in left"
                ))

        return steps
