"""Domain layer: errors and schemas."""

from .errors import (
    ConfigurationError,
    LetterError,
    UpstreamError,
    ValidationError,
    classify_upstream_error,
)
from .schemas import (
    ApiHealth,
    Gender,
    HealthStatus,
    LetterRequest,
    LetterResponse,
)

__all__ = [
    "LetterError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "classify_upstream_error",
    "ApiHealth",
    "Gender",
    "HealthStatus",
    "LetterRequest",
    "LetterResponse",
]
