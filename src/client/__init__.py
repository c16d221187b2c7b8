"""
Client layer: 편지 폼 상태 머신 + 세션 저장소.

브라우저 페이지(src/app/templates/index.html)와 같은 계약을
Python(httpx)으로 구현. 스크립트/통합 테스트에서 사용.
"""

from .form import FormState, FormStateError, LetterFormController, SubmissionError
from .storage import SessionStore

__all__ = [
    "FormState",
    "FormStateError",
    "LetterFormController",
    "SubmissionError",
    "SessionStore",
]
