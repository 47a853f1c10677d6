"""
jsondelta - Semantic JSON Comparison Engine

Compares two JSON documents structurally and reports every difference
with a severity tier, matching array elements either by position or by
content similarity regardless of order.
"""

from .engine import DeltaEngine, compare, compare_json_data
from .models import (
    EngineConfig,
    ComparisonResult,
    DiffItem,
    DiffType,
    Severity,
    Summary,
    MatchCandidate,
    ErrorResponse,
    LogLevel,
)
from .similarity import similarity
from .severity import classify_severity
from .matcher import ArrayMatcher, find_best_match
from .aggregator import aggregate, count_fields
from .exceptions import (
    JsonDeltaError,
    ValidationError,
    MaxDepthExceededError,
    PayloadSizeError,
    InvalidPathExpressionError,
)
from .batch import (
    BatchRunner,
    ScenarioResult,
    GlobalReport,
)
from .runner import (
    DatasetRunner,
    run_tests,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DeltaEngine",
    "EngineConfig",
    "LogLevel",
    "compare",
    "compare_json_data",
    # Results
    "ComparisonResult",
    "DiffItem",
    "DiffType",
    "Severity",
    "Summary",
    "MatchCandidate",
    "ErrorResponse",
    # Components
    "similarity",
    "classify_severity",
    "ArrayMatcher",
    "find_best_match",
    "aggregate",
    "count_fields",
    # Errors
    "JsonDeltaError",
    "ValidationError",
    "MaxDepthExceededError",
    "PayloadSizeError",
    "InvalidPathExpressionError",
    # Batch Runner
    "BatchRunner",
    "ScenarioResult",
    "GlobalReport",
    # Simple Runner
    "DatasetRunner",
    "run_tests",
]
