"""
Error definitions for the letter service.

규칙:
- 엔드포인트 밖으로 처리되지 않은 예외를 내보내지 않음
- 모든 실패는 타입이 있는 LetterError로 변환 → JSON 에러 바디 + 상태 코드
- 업스트림 에러 분류는 classify_upstream_error() 한 곳에서만 수행
"""

from typing import Any

# =============================================================================
# Error Codes
# =============================================================================


class ErrorCodes:
    """에러 코드 상수. 로그/컨텍스트 식별용."""

    # === Request ===
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Configuration ===
    API_KEY_MISSING = "API_KEY_MISSING"
    API_KEY_MALFORMED = "API_KEY_MALFORMED"

    # === Upstream ===
    UPSTREAM_AUTH = "UPSTREAM_AUTH"
    UPSTREAM_QUOTA = "UPSTREAM_QUOTA"
    UPSTREAM_RATE_LIMIT = "UPSTREAM_RATE_LIMIT"
    UPSTREAM_CONNECTIVITY = "UPSTREAM_CONNECTIVITY"
    UPSTREAM_UNKNOWN = "UPSTREAM_UNKNOWN"


# =============================================================================
# Base Error
# =============================================================================


class LetterError(Exception):
    """
    편지 생성/헬스 체크 실패의 공통 베이스.

    두 가지 응답 형태로 렌더링됨:
    - to_dict(): /api/generate-letter 에러 바디 {error, details?}
    - health_message / health_details: /api/health 에러 바디 (ApiHealth.from_error)

    Usage:
        raise ValidationError("Child's name is required", field="childName")
    """

    code: str = ErrorCodes.UPSTREAM_UNKNOWN
    status_code: int = 500

    # 서브클래스 기본 메시지
    default_error: str = "Failed to generate letter"
    default_details: str | None = None
    health_message: str | None = None
    health_details: str | None = None

    def __init__(
        self,
        error: str | None = None,
        details: str | None = None,
        **context: Any,
    ) -> None:
        self.error = error or self.default_error
        self.details = details if details is not None else self.default_details
        self.context = context
        super().__init__(f"[{self.code}] {self.error}")

    def to_dict(self) -> dict[str, Any]:
        """편지 엔드포인트 에러 바디."""
        body: dict[str, Any] = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(LetterError):
    """필수 필드 누락 / 잘못된 요청 바디."""

    code = ErrorCodes.VALIDATION_FAILED
    status_code = 400
    default_error = "Invalid request body"


class ConfigurationError(LetterError):
    """API 키 누락 또는 형식 오류. 크래시가 아니라 사용자에게 보이는 설정 에러."""

    code = ErrorCodes.API_KEY_MISSING
    status_code = 500
    default_error = "OpenAI API key is not configured"

    def __init__(
        self,
        error: str | None = None,
        details: str | None = None,
        *,
        code: str | None = None,
        **context: Any,
    ) -> None:
        if code:
            self.code = code
        super().__init__(error, details, **context)


# =============================================================================
# Upstream Errors
# =============================================================================


class UpstreamError(LetterError):
    """업스트림 완성 API 실패."""


class UpstreamAuthError(UpstreamError):
    code = ErrorCodes.UPSTREAM_AUTH
    status_code = 401
    default_error = "Invalid API Key"
    default_details = (
        "Your OpenAI API key is invalid. "
        "Please check your .env file and update the OPENAI_API_KEY."
    )
    health_message = "OpenAI API key is invalid"
    health_details = "Please check your API key in .env and ensure it's correct"


class UpstreamQuotaError(UpstreamError):
    code = ErrorCodes.UPSTREAM_QUOTA
    status_code = 402
    default_error = "API Quota Exceeded"
    default_details = (
        "You've reached your OpenAI usage limit. Please check your billing at "
        "https://platform.openai.com/account/billing"
    )
    health_message = "OpenAI API quota exceeded"
    health_details = "Please check your OpenAI account billing and usage limits"


class UpstreamRateLimitError(UpstreamError):
    code = ErrorCodes.UPSTREAM_RATE_LIMIT
    status_code = 429
    default_error = "Rate Limit Reached"
    default_details = "Too many requests. Please wait a moment and try again."
    health_message = "OpenAI API rate limit reached"
    health_details = "Please wait a moment and try again"


class UpstreamConnectivityError(UpstreamError):
    code = ErrorCodes.UPSTREAM_CONNECTIVITY
    status_code = 503
    default_error = "Connection Error"
    default_details = "Cannot connect to OpenAI. Please check your internet connection."
    health_message = "Cannot connect to OpenAI API"
    health_details = "Please check your internet connection"


class UpstreamUnknownError(UpstreamError):
    """분류되지 않은 실패. details에 업스트림 원문 메시지를 담음."""

    code = ErrorCodes.UPSTREAM_UNKNOWN
    status_code = 500
    default_error = "Failed to generate letter"
    default_details = "An unknown error occurred"
    health_message = "OpenAI API check failed"


# =============================================================================
# Upstream Classification
# =============================================================================

# 첫 매치 우선. 업스트림 SDK가 모든 실패에 안정적인 코드를 주지 않으므로
# 에러 메시지 소문자 부분 문자열로만 판정.
UPSTREAM_ERROR_PATTERNS: list[tuple[tuple[str, ...], type[UpstreamError]]] = [
    (("rate limit",), UpstreamRateLimitError),
    (("incorrect api key", "invalid api key"), UpstreamAuthError),
    (("quota", "insufficient_quota"), UpstreamQuotaError),
    (
        ("network", "econnrefused", "fetch failed", "connection error", "timed out"),
        UpstreamConnectivityError,
    ),
]


def classify_upstream_error(error: BaseException) -> LetterError:
    """
    임의의 예외를 에러 분류 체계로 변환.

    이미 LetterError면 그대로 반환.
    SDK/프로바이더를 교체하면 이 함수의 판정 로직만 바꾼다.

    Args:
        error: 업스트림 호출 또는 핸들러에서 발생한 예외

    Returns:
        LetterError 서브클래스 인스턴스
    """
    if isinstance(error, LetterError):
        return error

    raw_message = str(error)
    lowered = raw_message.lower()

    for needles, error_cls in UPSTREAM_ERROR_PATTERNS:
        if any(needle in lowered for needle in needles):
            return error_cls(upstream_message=raw_message)

    return UpstreamUnknownError(
        details=raw_message or None,
        upstream_message=raw_message,
    )
