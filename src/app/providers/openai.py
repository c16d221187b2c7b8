"""
OpenAI Chat Completions Provider.

- 스트리밍(open_stream): 편지 생성
- 버퍼링(complete): 헬스 체크용 최소 호출
- 재시도 없음: SDK 자동 재시도(max_retries)도 0으로 고정
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from src.domain.errors import ConfigurationError, ErrorCodes

from .base import CompletionParams, CompletionProvider, CompletionStream

logger = logging.getLogger(__name__)


class OpenAICompletionStream(CompletionStream):
    """openai.AsyncStream[ChatCompletionChunk] 래퍼. 비어 있지 않은 델타만 내보냄."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream
        self._closed = False

    async def _deltas(self) -> AsyncIterator[str]:
        async for chunk in self._stream:
            if not chunk.choices:
                continue
            content = chunk.choices[0].delta.content
            if content:
                yield content

    def __aiter__(self) -> AsyncIterator[str]:
        return self._deltas()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._stream.close()


class OpenAIProvider(CompletionProvider):
    """
    OpenAI API Provider.

    Usage:
        provider = OpenAIProvider(api_key=settings.openai_api_key, model="gpt-4o-mini")
        stream = await provider.open_stream(SYSTEM_PROMPT, prompt)
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o-mini",
        temperature: float | None = 0.9,
        max_tokens: int = 400,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_key: API 키 (Settings에서 주입, 환경변수 직접 읽지 않음)
            model: 모델 ID
            temperature: 샘플링 온도
            max_tokens: 출력 토큰 상한
            timeout: 요청 타임아웃 (초)

        Raises:
            ConfigurationError: API 키가 없을 때 (fail-fast)
        """
        if not api_key:
            raise ConfigurationError(code=ErrorCodes.API_KEY_MISSING)

        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client: Any = None

    def _get_client(self) -> Any:
        """OpenAI 클라이언트 (lazy init)."""
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def default_params(self) -> CompletionParams:
        return CompletionParams(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def open_stream(
        self,
        system_prompt: str,
        prompt: str,
        params: CompletionParams | None = None,
    ) -> CompletionStream:
        """스트리밍 완성 요청. 업스트림 예외는 그대로 전파."""
        params = params or self.default_params()
        client = self._get_client()

        api_kwargs: dict[str, Any] = {
            "model": params.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "stream": True,
        }
        if params.temperature is not None:
            api_kwargs["temperature"] = params.temperature
        if params.max_tokens is not None:
            api_kwargs["max_tokens"] = params.max_tokens

        logger.debug(f"Opening completion stream: {params.to_dict()}")
        stream = await client.chat.completions.create(**api_kwargs)
        return OpenAICompletionStream(stream)

    async def complete(self, prompt: str, **kwargs: Any) -> str:
        """일반 완성 API."""
        client = self._get_client()
        response = await client.chat.completions.create(
            model=kwargs.get("model", self.model),
            max_tokens=kwargs.get("max_tokens", self.max_tokens),
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            return ""
        text: str = response.choices[0].message.content or ""
        return text
