"""Summary statistics over a finished comparison."""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional, Sequence

from .models import (
    ComparisonResult,
    DiffItem,
    DiffType,
    ExecutionInfo,
    Severity,
    Summary,
)


def count_fields(data: Any) -> int:
    """
    Count the leaf fields of a document.

    ``None`` counts 0, any other scalar counts 1 and containers count
    the sum of their children, so empty containers count 0.
    """
    count = 0
    stack = [data]

    while stack:
        value = stack.pop()
        if value is None:
            continue
        if isinstance(value, dict):
            stack.extend(value.values())
        elif isinstance(value, list):
            stack.extend(value)
        else:
            count += 1

    return count


def aggregate(left: Any, right: Any, differences: Sequence[DiffItem]) -> Summary:
    """
    Compute summary statistics for a comparison.

    ``identical_fields`` is ``total_fields - len(differences)`` floored at
    zero. One structural difference can cover many fields, so this is an
    approximation and not an exact recount.

    Args:
        left: The left root document
        right: The right root document
        differences: All differences reported for the pair

    Returns:
        Summary of the comparison
    """
    total_fields = count_fields(left) + count_fields(right)
    by_type = Counter(d.type for d in differences)
    by_severity = Counter(d.severity for d in differences)

    return Summary(
        total_fields=total_fields,
        identical_fields=max(0, total_fields - len(differences)),
        different_fields=by_type[DiffType.CHANGED] + by_type[DiffType.TYPE_CHANGED],
        missing_fields=by_type[DiffType.MISSING],
        extra_fields=by_type[DiffType.EXTRA],
        critical_diffs=by_severity[Severity.CRITICAL],
        high_diffs=by_severity[Severity.HIGH],
        medium_diffs=by_severity[Severity.MEDIUM],
        low_diffs=by_severity[Severity.LOW],
    )


def build_result(
    left: Any,
    right: Any,
    differences: Sequence[DiffItem],
    execution: Optional[ExecutionInfo] = None
) -> ComparisonResult:
    """Wrap differences and their summary into a ComparisonResult."""
    return ComparisonResult(
        identical=len(differences) == 0,
        differences=tuple(differences),
        summary=aggregate(left, right, differences),
        execution=execution,
    )
