"""
Health Routes.

- GET /health → 프로세스 생존 확인 (업스트림 호출 없음)
- GET /api/health → API 키 확인 + 최소 완성 호출로 자격 증명 검증
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.app.dependencies import get_settings, resolve_provider
from src.domain.errors import ConfigurationError, ErrorCodes, classify_upstream_error
from src.domain.schemas import ApiHealth, HealthStatus

logger = logging.getLogger(__name__)

# Routers
router = APIRouter()  # liveness
api_router = APIRouter()  # API endpoints


class EmptyCompletionError(Exception):
    """업스트림이 빈 응답을 돌려줌."""


@router.get("/health")
async def liveness() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


@api_router.get("/health")
async def api_health(request: Request) -> JSONResponse:
    """
    OpenAI API 키 검증.

    순서:
    1. 키 존재 확인 → 없으면 500
    2. 키 형식 확인 (prefix) → 다르면 500
    3. 최소 완성 호출 (max_tokens 작게)

    Returns:
        ApiHealth JSON (200 / 401 / 402 / 429 / 500 / 503)
    """
    settings = get_settings(request)

    try:
        api_key = settings.openai_api_key
        if not api_key:
            raise ConfigurationError(
                "OpenAI API key is not configured",
                "Please add OPENAI_API_KEY to your .env file",
                code=ErrorCodes.API_KEY_MISSING,
            )

        if not api_key.startswith(settings.api_key_prefix):
            raise ConfigurationError(
                "OpenAI API key format is invalid",
                f"API key should start with '{settings.api_key_prefix}'",
                code=ErrorCodes.API_KEY_MALFORMED,
            )

        provider = resolve_provider(request)
        reply = await provider.complete(
            settings.health_prompt,
            max_tokens=settings.health_max_tokens,
        )
        if not reply:
            raise EmptyCompletionError("No response from OpenAI")

    except ConfigurationError as e:
        logger.warning(f"OpenAI health check rejected: {e}")
        return _health_response(e.status_code, ApiHealth.from_error(e))

    except Exception as e:
        letter_error = classify_upstream_error(e)
        logger.error(f"OpenAI health check failed: {e}", exc_info=True)
        return _health_response(letter_error.status_code, ApiHealth.from_error(letter_error))

    health = ApiHealth(
        status=HealthStatus.SUCCESS,
        message="OpenAI API key is working correctly",
        model=settings.model,
        timestamp=datetime.now(UTC).isoformat(),
    )
    return _health_response(200, health)


def _health_response(status_code: int, health: ApiHealth) -> JSONResponse:
    content: dict[str, Any] = health.to_dict()
    return JSONResponse(status_code=status_code, content=content)
