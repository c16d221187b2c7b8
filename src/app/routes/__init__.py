"""
FastAPI Routes.

페이지 라우트 (HTML) + API 라우트 (JSON + SSE)
"""

from . import health, letters

__all__ = ["health", "letters"]
