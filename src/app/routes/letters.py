"""
Letter Routes: 편지 생성 (메인 기능).

- GET / → 편지 폼 화면
- POST /api/generate-letter → SSE 스트림 (유일한 응답 계약)

에러 처리:
- 스트림 시작 전 실패 → JSON {error, details?} + 상태 코드
- 스트림 시작 후 실패 → event: error (relay_stream)
- 처리되지 않은 예외는 밖으로 내보내지 않음
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response, StreamingResponse
from fastapi.templating import Jinja2Templates

from src.app.dependencies import get_settings, resolve_provider
from src.app.providers import CompletionParams, compute_hash
from src.app.services.prompt import PROMPT_TEMPLATE_VERSION, SYSTEM_PROMPT, build_prompt
from src.app.services.relay import relay_stream
from src.domain.constants import (
    GENERATE_LETTER_PATH,
    SESSION_STORAGE_KEY,
    SSE_DONE_SENTINEL,
    SSE_HEADERS,
    SSE_MEDIA_TYPE,
)
from src.domain.errors import (
    ConfigurationError,
    ErrorCodes,
    ValidationError,
    classify_upstream_error,
)
from src.domain.schemas import LetterRequest

logger = logging.getLogger(__name__)

# Jinja2 템플릿 설정
_templates_dir = Path(__file__).parent.parent / "templates"
jinja_templates = Jinja2Templates(directory=_templates_dir)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints

MISSING_KEY_MESSAGE = (
    "OpenAI API key is not configured. Please add OPENAI_API_KEY to your .env file."
)


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("/", response_class=HTMLResponse)
async def letter_page(request: Request) -> HTMLResponse:
    """편지 폼 + 미리보기 화면."""
    return jinja_templates.TemplateResponse(
        request,
        "index.html",
        {
            "generate_url": GENERATE_LETTER_PATH,
            "storage_key": SESSION_STORAGE_KEY,
            "done_sentinel": SSE_DONE_SENTINEL,
        },
    )


# =============================================================================
# API Routes
# =============================================================================


@api_router.post("/generate-letter")
async def generate_letter(request: Request) -> Response:
    """
    편지 생성 요청.

    Body: LetterRequest (camelCase JSON)

    Returns:
        text/event-stream: data: {"content": ...} ... data: [DONE]
        실패 시 JSON {error, details?} (400/401/402/429/500/503)
    """
    settings = get_settings(request)

    try:
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Invalid request body") from None

        letter_request = LetterRequest.from_dict(body)

        if not settings.openai_api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE, code=ErrorCodes.API_KEY_MISSING)

        prompt = build_prompt(letter_request)
        params = CompletionParams(
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        logger.info(
            f"Generating letter: prompt_hash={compute_hash(prompt)}, "
            f"template_version={PROMPT_TEMPLATE_VERSION}, params={params.to_dict()}"
        )

        provider = resolve_provider(request)
        stream = await provider.open_stream(SYSTEM_PROMPT, prompt, params)

    except (ValidationError, ConfigurationError) as e:
        logger.warning(f"Letter request rejected: {e} {e.context}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    except Exception as e:
        letter_error = classify_upstream_error(e)
        logger.error(f"Error generating letter: {e}", exc_info=True)
        return JSONResponse(
            status_code=letter_error.status_code,
            content=letter_error.to_dict(),
        )

    return StreamingResponse(
        relay_stream(stream, request.is_disconnected),
        media_type=SSE_MEDIA_TYPE,
        headers=SSE_HEADERS,
    )
