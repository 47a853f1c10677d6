"""Business-impact classification of differences by path keyword."""

from __future__ import annotations

from .models import DiffType, Severity


CRITICAL_KEYWORDS = ("id", "status", "error", "code")
HIGH_KEYWORDS = ("data", "result", "response")
MEDIUM_KEYWORDS = ("timestamp", "count", "total", "meta")


def classify_severity(path: str, diff_type: DiffType) -> Severity:
    """
    Map a difference to a severity tier.

    Rules are checked in order and the first hit wins. Keyword tests are
    case-sensitive substring tests on the whole path, so ``zipcode``
    matches ``code`` and ``response.meta.count`` is high, not medium.

    Args:
        path: Path of the difference
        diff_type: Kind of difference

    Returns:
        Severity of the difference
    """
    if any(keyword in path for keyword in CRITICAL_KEYWORDS):
        return Severity.CRITICAL

    if diff_type == DiffType.TYPE_CHANGED or any(keyword in path for keyword in HIGH_KEYWORDS):
        return Severity.HIGH

    if any(keyword in path for keyword in MEDIUM_KEYWORDS):
        return Severity.MEDIUM

    return Severity.LOW
