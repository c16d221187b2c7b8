"""
Completion Provider 추상 인터페이스.

- Provider 추상화로 업스트림 모델/SDK 교체 가능
- 모델명/샘플링 파라미터는 config(Settings)만 SSOT
- 업스트림 예외는 가공하지 않고 그대로 전파 → classify_upstream_error가 분류
"""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompletionParams:
    """
    업스트림 호출 파라미터.

    편지 생성: 높은 temperature(창의적 변주) + 출력 토큰 상한.
    """

    model: str
    temperature: float | None = None
    max_tokens: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


def compute_hash(content: str) -> str:
    """SHA-256 해시 계산 (로그용 프롬프트 식별자)."""
    return f"sha256:{hashlib.sha256(content.encode()).hexdigest()[:16]}"


# =============================================================================
# Abstract Stream / Provider
# =============================================================================


class CompletionStream(ABC):
    """
    열린 업스트림 스트림.

    async for로 텍스트 델타(str)를 순회하고, 끝나면 반드시 aclose().
    """

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[str]:
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """업스트림 연결 해제. 여러 번 호출해도 안전해야 함."""
        ...


class CompletionProvider(ABC):
    """
    완성 API Provider 추상 인터페이스.

    역할: 프롬프트 → 생성 텍스트 (검증/분류 권한 없음)
    """

    model: str

    @abstractmethod
    async def open_stream(
        self,
        system_prompt: str,
        prompt: str,
        params: CompletionParams | None = None,
    ) -> CompletionStream:
        """
        스트리밍 완성 요청.

        await 시점에 업스트림 HTTP 요청이 실행되므로
        인증/쿼터/레이트 리밋 실패는 첫 바이트 전송 전에 여기서 발생.

        Args:
            system_prompt: 역할 지시문
            prompt: 사용자 프롬프트
            params: 호출 파라미터 (None이면 provider 기본값)

        Returns:
            CompletionStream
        """
        ...

    @abstractmethod
    async def complete(self, prompt: str, **kwargs: Any) -> str:
        """
        일반 완성 API (버퍼링).

        Args:
            prompt: 프롬프트
            **kwargs: 추가 옵션 (max_tokens 등)

        Returns:
            응답 텍스트 (없으면 빈 문자열)
        """
        ...
