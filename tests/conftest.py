"""
Pytest fixtures for the letter service tests.

구성:
- Settings: 환경변수 없이 주입 (API 키 있음/없음)
- FakeCompletionProvider: 업스트림 호출 없이 델타/에러 재현
- TestClient: create_app(settings, provider)로 앱 생성
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.app.main import create_app
from src.app.settings import Settings
from tests.fakes import FakeCompletionProvider

# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """API 키가 설정된 기본 Settings."""
    return Settings(openai_api_key="sk-test-key")


@pytest.fixture
def settings_without_key() -> Settings:
    """API 키 누락 Settings."""
    return Settings(openai_api_key=None)


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def fake_provider() -> FakeCompletionProvider:
    return FakeCompletionProvider()


@pytest.fixture
def client(
    settings: Settings,
    fake_provider: FakeCompletionProvider,
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient (fake provider 주입)."""
    app = create_app(settings=settings, provider=fake_provider)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client_without_key(
    settings_without_key: Settings,
    fake_provider: FakeCompletionProvider,
) -> Generator[TestClient, None, None]:
    """API 키 없는 TestClient."""
    app = create_app(settings=settings_without_key, provider=fake_provider)
    with TestClient(app) as client:
        yield client


# =============================================================================
# Request Fixtures
# =============================================================================


@pytest.fixture
def mia_request() -> dict:
    """착한 아이 목록 + 선물 요청."""
    return {
        "childName": "Mia",
        "isOnGoodList": True,
        "gifts": "a bicycle",
        "goodThings": "helped her brother",
    }
