"""
Event Stream Relay: 업스트림 델타 → SSE 이벤트.

- 델타마다 즉시 전달 (버퍼링 없음)
- 정상 종료: data: [DONE]
- 스트림 도중 실패: event: error (상태 코드는 이미 200으로 전송됨)
- 클라이언트 연결 끊김: 전달 중단 + 업스트림 해제
"""

import json
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

from src.app.providers.base import CompletionStream
from src.domain.constants import (
    SSE_DATA_PREFIX,
    SSE_DONE_SENTINEL,
    SSE_ERROR_EVENT,
    SSE_EVENT_PREFIX,
)
from src.domain.errors import classify_upstream_error

logger = logging.getLogger(__name__)


def format_event(data: dict[str, Any] | str, event: str | None = None) -> str:
    """
    SSE 이벤트 한 개 직렬화.

    Args:
        data: dict면 JSON, str이면 그대로
        event: 이벤트 이름 (None이면 기본 message 이벤트)
    """
    payload = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False)
    prefix = f"{SSE_EVENT_PREFIX}{event}\n" if event else ""
    return f"{prefix}{SSE_DATA_PREFIX}{payload}\n\n"


async def relay_stream(
    stream: CompletionStream,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncGenerator[str, None]:
    """
    업스트림 스트림을 SSE 이벤트로 중계.

    Args:
        stream: 이미 열린 CompletionStream (요청은 성공한 상태)
        is_disconnected: 클라이언트 연결 확인 콜백 (Request.is_disconnected)

    Yields:
        SSE 이벤트 문자열
    """
    forwarded = 0
    try:
        async for delta in stream:
            if is_disconnected is not None and await is_disconnected():
                logger.info(f"Client disconnected after {forwarded} chunks; closing upstream")
                return
            forwarded += 1
            yield format_event({"content": delta})

        yield format_event(SSE_DONE_SENTINEL)
        logger.info(f"Letter stream completed: {forwarded} chunks")

    except Exception as e:
        letter_error = classify_upstream_error(e)
        logger.error(f"Streaming error: {e}", exc_info=True)
        yield format_event(letter_error.to_dict(), event=SSE_ERROR_EVENT)

    finally:
        await stream.aclose()
