"""Data models for the jsondelta engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import ValidationError


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class DiffType(Enum):
    MISSING = "missing"
    EXTRA = "extra"
    CHANGED = "changed"
    TYPE_CHANGED = "type-changed"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class EngineConfig:
    """
    Global configuration for the comparison engine.

    ``log_level`` left as None keeps whatever level the host application
    gave the ``jsondelta`` logger.
    """
    order_sensitive: bool = False
    max_depth: int = 100
    max_payload_size_mb: float = 50
    ignore_paths: list[str] = field(default_factory=list)
    global_ignores: list[str] = field(default_factory=list)
    log_level: Optional[LogLevel] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'EngineConfig':
        """
        Build a config from a plain mapping (e.g. a parsed YAML file).

        Args:
            data: Mapping of config field names to values, or None

        Returns:
            EngineConfig with defaults for any field not given

        Raises:
            ValidationError: On unknown keys or malformed values
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError(
                "Engine config must be a mapping",
                {"type": type(data).__name__}
            )

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown config keys: {', '.join(unknown)}",
                {"unknown": unknown}
            )

        values = dict(data)

        if values.get('log_level') is not None:
            level = str(values['log_level']).upper()
            if level == "WARNING":
                level = "WARN"
            if level not in [lv.value for lv in LogLevel]:
                raise ValidationError(
                    f"Invalid log_level: {values['log_level']}",
                    {"allowed": [lv.value for lv in LogLevel]}
                )
            values['log_level'] = LogLevel(level)

        for key in ('ignore_paths', 'global_ignores'):
            if key in values:
                if values[key] is None:
                    values[key] = []
                elif isinstance(values[key], str):
                    values[key] = [values[key]]
                elif not isinstance(values[key], list):
                    raise ValidationError(
                        f"{key} must be a list of strings",
                        {"type": type(values[key]).__name__}
                    )
                values[key] = [str(p) for p in values[key]]

        return cls(**values)


@dataclass(frozen=True)
class DiffItem:
    """A single difference found during comparison."""
    path: str
    type: DiffType
    severity: Severity
    description: str
    old_value: Any = None
    new_value: Any = None
    has_old_value: bool = False
    has_new_value: bool = False

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "type": self.type.value,
            "severity": self.severity.value,
        }
        if self.has_old_value:
            result["old_value"] = self.old_value
        if self.has_new_value:
            result["new_value"] = self.new_value
        result["description"] = self.description
        return result


@dataclass(frozen=True)
class MatchCandidate:
    """Best right-hand element found for one left-hand array element."""
    match: Any
    index: int
    similarity: float


@dataclass(frozen=True)
class Summary:
    """Summary statistics of a comparison."""
    total_fields: int = 0
    identical_fields: int = 0
    different_fields: int = 0
    missing_fields: int = 0
    extra_fields: int = 0
    critical_diffs: int = 0
    high_diffs: int = 0
    medium_diffs: int = 0
    low_diffs: int = 0

    @property
    def total_differences(self) -> int:
        return self.different_fields + self.missing_fields + self.extra_fields

    @property
    def added(self) -> int:
        return self.extra_fields

    @property
    def removed(self) -> int:
        return self.missing_fields

    @property
    def modified(self) -> int:
        return self.different_fields

    def to_dict(self) -> dict:
        return {
            "total_fields": self.total_fields,
            "identical_fields": self.identical_fields,
            "different_fields": self.different_fields,
            "missing_fields": self.missing_fields,
            "extra_fields": self.extra_fields,
            "critical_diffs": self.critical_diffs,
            "high_diffs": self.high_diffs,
            "medium_diffs": self.medium_diffs,
            "low_diffs": self.low_diffs,
            "total_differences": self.total_differences,
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
        }


@dataclass(frozen=True)
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Complete comparison result."""
    identical: bool
    differences: tuple[DiffItem, ...] = ()
    summary: Summary = field(default_factory=Summary)
    execution: Optional[ExecutionInfo] = None

    @property
    def headline(self) -> str:
        """One-line human readable outcome."""
        if self.identical:
            return "Both documents are identical"
        s = self.summary
        return (
            f"Found {len(self.differences)} differences "
            f"({s.critical_diffs} critical, {s.high_diffs} high, "
            f"{s.medium_diffs} medium, {s.low_diffs} low)"
        )

    def to_dict(self) -> dict:
        result = {
            "identical": self.identical,
            "differences": [d.to_dict() for d in self.differences],
            "summary": self.summary.to_dict(),
        }
        if self.execution:
            result["execution"] = self.execution.to_dict()
        return result


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
