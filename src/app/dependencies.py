"""
Request-scoped accessors for app.state.

settings/provider는 lifespan 또는 create_app()에서 주입.
provider는 주입되지 않았으면 첫 사용 시 Settings로 생성해 캐시.
"""

from fastapi import Request

from src.app.providers import CompletionProvider, OpenAIProvider
from src.app.settings import Settings


def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def resolve_provider(request: Request) -> CompletionProvider:
    """
    완성 Provider 조회 (lazy init).

    Raises:
        ConfigurationError: 주입된 provider가 없고 API 키도 없을 때
    """
    provider: CompletionProvider | None = getattr(request.app.state, "provider", None)
    if provider is None:
        settings = get_settings(request)
        provider = OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
        )
        request.app.state.provider = provider
    return provider
