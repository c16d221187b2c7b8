"""
Session Storage: 생성된 편지의 임시 미러.

브라우저 sessionStorage와 같은 계약:
- 키 하나에 LetterResponse JSON 하나
- 저장/조회/삭제 실패는 경고만 남기고 흐름을 막지 않음
"""

import json
import logging
from collections.abc import MutableMapping

from src.domain.constants import SESSION_STORAGE_KEY
from src.domain.errors import LetterError
from src.domain.schemas import LetterResponse

logger = logging.getLogger(__name__)


class SessionStore:
    """
    MutableMapping[str, str] 위의 단일 키 저장소.

    Usage:
        store = SessionStore({})
        store.save(response)
        restored = store.load()
    """

    def __init__(
        self,
        backend: MutableMapping[str, str] | None = None,
        key: str = SESSION_STORAGE_KEY,
    ) -> None:
        self.backend: MutableMapping[str, str] = {} if backend is None else backend
        self.key = key

    def save(self, response: LetterResponse) -> bool:
        """저장 성공 여부 반환."""
        try:
            self.backend[self.key] = json.dumps(response.to_dict(), ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not persist letter to session storage: {e}")
            return False
        return True

    def load(self) -> LetterResponse | None:
        """
        저장된 편지 복원.

        없거나, 깨졌거나, letter가 비어 있으면 None (깨진 값은 삭제).
        """
        try:
            raw = self.backend.get(self.key)
        except OSError as e:
            logger.warning(f"Could not read session storage: {e}")
            return None

        if raw is None:
            return None

        try:
            response = LetterResponse.from_dict(json.loads(raw))
        except (ValueError, LetterError) as e:
            logger.warning(f"Could not restore letter from session storage: {e}")
            self.clear()
            return None

        if not response.is_valid:
            self.clear()
            return None
        return response

    def clear(self) -> None:
        try:
            self.backend.pop(self.key, None)
        except OSError as e:
            logger.warning(f"Could not clear session storage: {e}")
