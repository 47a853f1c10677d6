"""Custom exceptions for the jsondelta engine."""


class JsonDeltaError(Exception):
    """Base exception for jsondelta errors."""
    pass


class ValidationError(JsonDeltaError):
    """Raised when input or configuration validation fails."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MaxDepthExceededError(JsonDeltaError):
    """Raised when a document nests deeper than the configured limit."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path or '<root>'}")
        self.depth = depth
        self.path = path


class PayloadSizeError(JsonDeltaError):
    """Raised when payload size exceeds limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Payload size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb


class InvalidPathExpressionError(JsonDeltaError):
    """Raised when a global-ignore entry is not a valid JSONPath expression."""
    def __init__(self, expression: str, reason: str):
        super().__init__(f"Invalid JSONPath expression '{expression}': {reason}")
        self.expression = expression
        self.reason = reason
