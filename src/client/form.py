"""
Form Controller: 편지 요청 초안 + 제출 상태 머신.

상태:
- editing → submitting (submit, 제출 중 재제출은 무시)
- submitting → showing-result (비어 있지 않은 편지 수신)
- submitting → error (검증/네트워크/비-2xx/스트림 에러)
- error → submitting (재제출)
- showing-result → editing (reset, 세션 저장소 삭제)

클라이언트당 동시에 진행 중인 요청은 최대 1개.
"""

import dataclasses
import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from src.domain.constants import (
    GENERATE_LETTER_PATH,
    SSE_DATA_PREFIX,
    SSE_DONE_SENTINEL,
    SSE_ERROR_EVENT,
    SSE_EVENT_PREFIX,
)
from src.domain.errors import ValidationError
from src.domain.schemas import Gender, LetterRequest, LetterResponse

from .storage import SessionStore

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SHOWING_RESULT = "showing-result"
    ERROR = "error"


class FormStateError(RuntimeError):
    """현재 상태에서 허용되지 않는 조작."""


class SubmissionError(Exception):
    """서버/네트워크 실패. error/details는 사용자에게 그대로 표시."""

    def __init__(self, error: str, details: str | None = None) -> None:
        self.error = error
        self.details = details
        super().__init__(f"{error}: {details}" if details else error)


# =============================================================================
# SSE Parsing
# =============================================================================


@dataclass
class SseEvent:
    event: str
    data: str


async def iter_sse_events(lines: AsyncIterator[str]) -> AsyncIterator[SseEvent]:
    """줄 단위 스트림 → SSE 이벤트. 빈 줄이 이벤트 경계."""
    event = "message"
    data_lines: list[str] = []

    async for line in lines:
        if not line:
            if data_lines:
                yield SseEvent(event=event, data="\n".join(data_lines))
            event = "message"
            data_lines = []
        elif line.startswith(SSE_EVENT_PREFIX):
            event = line[len(SSE_EVENT_PREFIX):]
        elif line.startswith(SSE_DATA_PREFIX):
            data_lines.append(line[len(SSE_DATA_PREFIX):])

    if data_lines:
        yield SseEvent(event=event, data="\n".join(data_lines))


# =============================================================================
# Controller
# =============================================================================


class LetterFormController:
    """
    편지 폼 컨트롤러.

    Usage:
        async with httpx.AsyncClient(base_url="http://localhost:8000") as client:
            controller = LetterFormController(client, SessionStore())
            controller.update(child_name="Mia", gifts="a bicycle")
            response = await controller.submit()
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        store: SessionStore | None = None,
        url: str = GENERATE_LETTER_PATH,
    ) -> None:
        self.client = client
        self.store = store or SessionStore()
        self.url = url

        self.state = FormState.EDITING
        self.draft = LetterRequest()
        self.result: LetterResponse | None = None
        self.error: str | None = None
        self.error_details: str | None = None

    # -------------------------------------------------------------------------
    # Draft
    # -------------------------------------------------------------------------

    def update(self, **changes: Any) -> LetterRequest:
        """
        초안 수정 (키 입력마다 호출).

        Raises:
            FormStateError: 결과 화면에서 수정 시도
        """
        if self.state is FormState.SHOWING_RESULT:
            raise FormStateError("Reset before editing a new letter")

        if "gender" in changes and not isinstance(changes["gender"], Gender):
            changes["gender"] = Gender(changes["gender"] or "")

        self.draft = dataclasses.replace(self.draft, **changes)
        return self.draft

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def restore(self) -> bool:
        """세션 저장소에 유효한 편지가 있으면 요청 없이 결과 화면으로."""
        saved = self.store.load()
        if saved is None:
            return False
        self.result = saved
        self.draft = saved.form_data
        self._set_state(FormState.SHOWING_RESULT)
        return True

    async def submit(self) -> LetterResponse | None:
        """
        현재 초안 제출.

        Returns:
            성공 시 LetterResponse, 무시/실패 시 None (error 필드 확인)
        """
        if self.state is FormState.SUBMITTING:
            logger.debug("Submit ignored: request already in flight")
            return None
        if self.state is FormState.SHOWING_RESULT:
            raise FormStateError("Reset before generating another letter")

        try:
            snapshot = LetterRequest.from_dict(self.draft.to_dict())
        except ValidationError as e:
            self._fail(e.error, e.details)
            return None

        self._set_state(FormState.SUBMITTING)
        self.error = None
        self.error_details = None

        try:
            letter = await self._request_letter(snapshot)
        except SubmissionError as e:
            logger.warning(f"Letter generation failed: {e}")
            self._fail(e.error, e.details)
            return None

        response = LetterResponse(letter=letter, form_data=snapshot)
        if not response.is_valid:
            self._fail("No letter content received")
            return None

        self.result = response
        self._set_state(FormState.SHOWING_RESULT)
        self.store.save(response)
        return response

    def reset(self) -> None:
        """결과 화면 → 새 편지 작성. 저장된 스냅샷 삭제."""
        if self.state is not FormState.SHOWING_RESULT:
            raise FormStateError(f"Cannot reset from {self.state.value}")
        self.store.clear()
        self.result = None
        self.draft = LetterRequest()
        self._set_state(FormState.EDITING)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _set_state(self, state: FormState) -> None:
        logger.debug(f"Form state: {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: str, details: str | None = None) -> None:
        self.error = error
        self.error_details = details
        self._set_state(FormState.ERROR)

    async def _request_letter(self, snapshot: LetterRequest) -> str:
        """POST 후 SSE 델타를 이어 붙여 편지 전체를 반환."""
        try:
            async with self.client.stream("POST", self.url, json=snapshot.to_dict()) as response:
                if not response.is_success:
                    await response.aread()
                    raise self._error_from_body(response)

                parts: list[str] = []
                async for event in iter_sse_events(response.aiter_lines()):
                    if event.data == SSE_DONE_SENTINEL:
                        break
                    payload = self._decode(event.data)
                    if event.event == SSE_ERROR_EVENT:
                        raise SubmissionError(
                            payload.get("error") or "Failed to generate letter",
                            payload.get("details"),
                        )
                    parts.append(payload.get("content") or "")
                else:
                    # [DONE] 없이 본문 종료 = 잘린 스트림
                    raise SubmissionError("Connection Error", "Letter stream ended unexpectedly")
                return "".join(parts)

        except httpx.HTTPError as e:
            raise SubmissionError("Connection Error", str(e) or type(e).__name__) from e

    @staticmethod
    def _decode(data: str) -> dict[str, Any]:
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise SubmissionError("Malformed response", data) from e
        if not isinstance(payload, dict):
            raise SubmissionError("Malformed response", data)
        return payload

    @staticmethod
    def _error_from_body(response: httpx.Response) -> SubmissionError:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return SubmissionError(str(body["error"]), body.get("details"))
        return SubmissionError(
            "Failed to generate letter",
            f"HTTP {response.status_code}",
        )
