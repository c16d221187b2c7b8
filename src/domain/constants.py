"""
Domain Constants: 애플리케이션 전역 상수.

엔드포인트 경로, SSE 프레이밍, 세션 저장 키 등
서버와 클라이언트가 함께 쓰는 값들.
"""

# =============================================================================
# API Paths (엔드포인트 경로)
# =============================================================================

GENERATE_LETTER_PATH = "/api/generate-letter"

# =============================================================================
# Server-Sent Events (스트림 프레이밍)
# =============================================================================
# 각 이벤트: data: {"content": "<delta>"}\n\n
# 종료: data: [DONE]\n\n
# 스트림 도중 실패: event: error\ndata: {"error": ..., "details": ...}\n\n

SSE_MEDIA_TYPE = "text/event-stream"
SSE_DATA_PREFIX = "data: "
SSE_EVENT_PREFIX = "event: "
SSE_DONE_SENTINEL = "[DONE]"
SSE_ERROR_EVENT = "error"

# 모바일 Safari / 프록시 버퍼링 방지
SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

# =============================================================================
# Client Session Storage (세션 저장소)
# =============================================================================

SESSION_STORAGE_KEY = "santaLetter"

# =============================================================================
# Credentials
# =============================================================================

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_API_KEY_PREFIX = "sk-"
