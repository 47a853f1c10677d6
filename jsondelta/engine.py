"""Main comparison engine for jsondelta."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    EngineConfig,
    ComparisonResult,
    ExecutionInfo,
    ErrorResponse,
)
from .differ import Differ
from .masker import Masker
from .aggregator import build_result
from .exceptions import (
    ValidationError,
    PayloadSizeError,
    MaxDepthExceededError,
    InvalidPathExpressionError,
)
from .utils import get_json_size_mb, find_depth_violation

logger = logging.getLogger(__name__)


def compare_json_data(
    left: Any,
    right: Any,
    order_sensitive: bool = False
) -> ComparisonResult:
    """
    Compare two parsed JSON documents.

    Pure and synchronous; neither input is modified and nothing is raised
    for JSON input.

    Args:
        left: The left/baseline document
        right: The right document
        order_sensitive: Compare arrays by position instead of by content

    Returns:
        ComparisonResult with differences in traversal order
    """
    differ = Differ(order_sensitive=order_sensitive)
    differences = differ.diff(left, right)
    return build_result(left, right, differences)


class DeltaEngine:
    """
    Comparison engine that wraps the core diff with guard rails:

    1. Validation: Payload size and nesting depth limits
    2. Masking: Prune members matched by global-ignore expressions
    3. Diffing: Structural deep compare
    4. Filtering: Drop differences under ignored paths
    5. Aggregation: Summary statistics and execution metadata
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()
        if self.config.log_level is not None:
            logging.getLogger("jsondelta").setLevel(self.config.log_level.value)

    def compare(self, left: Any, right: Any) -> ComparisonResult | ErrorResponse:
        """
        Compare two JSON documents.

        Args:
            left: The baseline document (e.g. the live API response)
            right: The document to compare (e.g. the candidate API response)

        Returns:
            ComparisonResult on success, ErrorResponse on validation/processing errors
        """
        start_time = time.time()

        try:
            self._validate_inputs(left, right)

            masker = Masker(self.config.global_ignores, self.config.ignore_paths)
            left_masked, right_masked, removed = masker.mask(left, right)
            if removed:
                logger.debug("Global ignores removed %d members", removed)

            differ = Differ(order_sensitive=self.config.order_sensitive)
            differences = masker.filter(differ.diff(left_masked, right_masked))
            if len(differences) != len(differ.diffs):
                logger.debug(
                    "Ignore paths dropped %d differences",
                    len(differ.diffs) - len(differences)
                )

            duration_ms = int((time.time() - start_time) * 1000)
            result = build_result(
                left_masked,
                right_masked,
                differences,
                execution=ExecutionInfo(
                    duration_ms=duration_ms,
                    timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                    engine_version=self.VERSION
                )
            )

            logger.info(
                "Comparison finished in %dms: %s",
                duration_ms,
                result.headline
            )
            return result

        except ValidationError as e:
            return self._create_error_response("VALIDATION_ERROR", e.message, e.details)
        except PayloadSizeError as e:
            return self._create_error_response(
                "PAYLOAD_SIZE_ERROR",
                str(e),
                {"size_mb": e.size_mb, "limit_mb": e.limit_mb}
            )
        except MaxDepthExceededError as e:
            return self._create_error_response(
                "MAX_DEPTH_ERROR",
                str(e),
                {"depth": e.depth, "path": e.path}
            )
        except InvalidPathExpressionError as e:
            return self._create_error_response(
                "INVALID_PATH_EXPRESSION",
                str(e),
                {"expression": e.expression, "reason": e.reason}
            )
        except Exception as e:
            logger.exception("Unexpected failure while comparing documents")
            return self._create_error_response(
                "PROCESSING_ERROR",
                str(e),
                {"type": type(e).__name__}
            )

    def _validate_inputs(self, left: Any, right: Any):
        """Validate input documents against the configured limits."""
        if self.config.max_depth < 1:
            raise ValidationError(
                "max_depth must be at least 1",
                {"max_depth": self.config.max_depth}
            )

        # Depth first: serializing for the size check recurses
        for document in (left, right):
            violation = find_depth_violation(document, self.config.max_depth)
            if violation is not None:
                raise MaxDepthExceededError(self.config.max_depth, violation)

            size = get_json_size_mb(document)
            if size > self.config.max_payload_size_mb:
                raise PayloadSizeError(size, self.config.max_payload_size_mb)

    def _create_error_response(self, code: str, message: str, details: dict) -> ErrorResponse:
        """Create an error response."""
        logger.warning("Comparison failed (%s): %s", code, message)
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            }
        )


def compare(
    left: Any,
    right: Any,
    config: Optional[EngineConfig] = None
) -> ComparisonResult | ErrorResponse:
    """
    Convenience function to compare two JSON documents.

    Args:
        left: The baseline document
        right: The document to compare
        config: Optional engine configuration

    Returns:
        ComparisonResult on success, ErrorResponse on errors
    """
    engine = DeltaEngine(config)
    return engine.compare(left, right)
