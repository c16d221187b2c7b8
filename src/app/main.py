"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.providers import CompletionProvider

# Routes
from src.app.routes import health, letters
from src.app.settings import Settings, load_config

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 해석 (한 번만), 로깅 설정
    종료 시: 리소스 정리
    """
    # Startup
    if app.state.settings is None:
        load_dotenv()
        app.state.settings = Settings.from_config(load_config())

    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting SantaScribe with {settings!r}")

    yield

    # Shutdown
    # (리소스 정리 필요 시 여기에 추가)


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    provider: CompletionProvider | None = None,
) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        settings: 주입할 설정 (None이면 lifespan에서 default.yaml + 환경변수로 해석)
        provider: 주입할 완성 Provider (None이면 첫 요청 시 OpenAIProvider 생성)
    """
    app = FastAPI(
        title="SantaScribe",
        description="Personalized letters from Santa Claus",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.provider = provider

    # Static files (CSS, JS)
    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # 페이지 라우트 (HTML)
    app.include_router(letters.router, prefix="", tags=["Letters"])
    app.include_router(health.router, prefix="", tags=["Health"])

    # API 라우트
    app.include_router(letters.api_router, prefix="/api", tags=["Letters API"])
    app.include_router(health.api_router, prefix="/api", tags=["Health API"])

    return app


# =============================================================================
# App Instance
# =============================================================================

app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
