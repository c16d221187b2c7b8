"""
Application settings.

프로세스 시작 시 한 번만 해석 (lifespan) → app.state.settings로 주입.
핸들러는 환경변수를 직접 읽지 않음 (테스트에서 환경 변경 없이 주입 가능).

우선순위:
- 환경변수 OPENAI_API_KEY (.env는 lifespan에서 load_dotenv)
- default.yaml
- 아래 dataclass 기본값
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import DEFAULT_API_KEY_PREFIX, OPENAI_API_KEY_ENV

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


@dataclass(frozen=True)
class Settings:
    """해석이 끝난 설정값 (불변)."""

    openai_api_key: str | None = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.9
    max_tokens: int = 400
    timeout: float = 30.0
    api_key_prefix: str = DEFAULT_API_KEY_PREFIX
    health_prompt: str = "Say 'OK' if you can read this."
    health_max_tokens: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        """
        config dict + 환경변수에서 Settings 생성.

        Args:
            config: load_config() 결과
            environ: 환경변수 매핑 (None이면 os.environ)
        """
        config = config or {}
        environ = os.environ if environ is None else environ

        openai_cfg = config.get("openai") or {}
        health_cfg = config.get("health") or {}
        logging_cfg = config.get("logging") or {}

        defaults = cls()
        api_key = (environ.get(OPENAI_API_KEY_ENV) or "").strip() or None

        return cls(
            openai_api_key=api_key,
            model=str(openai_cfg.get("model", defaults.model)),
            temperature=float(openai_cfg.get("temperature", defaults.temperature)),
            max_tokens=int(openai_cfg.get("max_tokens", defaults.max_tokens)),
            timeout=float(openai_cfg.get("timeout", defaults.timeout)),
            api_key_prefix=str(openai_cfg.get("api_key_prefix", defaults.api_key_prefix)),
            health_prompt=str(health_cfg.get("prompt", defaults.health_prompt)),
            health_max_tokens=int(health_cfg.get("max_tokens", defaults.health_max_tokens)),
            log_level=str(logging_cfg.get("level", defaults.log_level)).upper(),
        )

    def __repr__(self) -> str:
        # API 키는 로그/리프레젠테이션에 노출하지 않음
        key_state = "set" if self.openai_api_key else "missing"
        return (
            f"Settings(openai_api_key=<{key_state}>, model={self.model!r}, "
            f"temperature={self.temperature}, max_tokens={self.max_tokens})"
        )
