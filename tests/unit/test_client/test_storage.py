"""
test_storage.py - SessionStore 테스트

저장소 실패는 경고만 남기고 흐름을 막지 않음.
"""

import json

from src.client.storage import SessionStore
from src.domain.schemas import LetterRequest, LetterResponse


class BrokenBackend(dict):
    """쓰기/읽기/삭제 모두 실패하는 저장소 (quota 초과, 비활성화 등)."""

    def __setitem__(self, key, value):
        raise OSError("storage disabled")

    def get(self, key, default=None):
        raise OSError("storage disabled")

    def pop(self, key, default=None):
        raise OSError("storage disabled")


def make_response() -> LetterResponse:
    return LetterResponse(
        letter="Ho Ho Ho, Mia!\n\nSanta Claus",
        form_data=LetterRequest(child_name="Mia", gifts="a bicycle"),
    )


class TestSessionStore:

    def test_save_and_load(self):
        backend: dict[str, str] = {}
        store = SessionStore(backend)

        assert store.save(make_response()) is True
        assert "santaLetter" in backend
        assert json.loads(backend["santaLetter"])["formData"]["childName"] == "Mia"
        assert store.load() == make_response()

    def test_load_empty(self):
        assert SessionStore({}).load() is None

    def test_clear(self):
        store = SessionStore({})
        store.save(make_response())

        store.clear()

        assert store.load() is None

    def test_malformed_json_is_discarded(self):
        backend = {"santaLetter": "{not json"}
        store = SessionStore(backend)

        assert store.load() is None
        assert "santaLetter" not in backend

    def test_invalid_shape_is_discarded(self):
        backend = {"santaLetter": json.dumps({"letter": 7})}
        store = SessionStore(backend)

        assert store.load() is None
        assert "santaLetter" not in backend

    def test_empty_letter_is_not_restored(self):
        backend = {"santaLetter": json.dumps({"letter": "", "formData": {"childName": "Mia"}})}
        store = SessionStore(backend)

        assert store.load() is None
        assert "santaLetter" not in backend

    def test_custom_key(self):
        backend: dict[str, str] = {}
        store = SessionStore(backend, key="other")

        store.save(make_response())

        assert list(backend) == ["other"]

    def test_storage_failures_do_not_raise(self, caplog):
        store = SessionStore(BrokenBackend())

        assert store.save(make_response()) is False
        assert store.load() is None
        store.clear()

        assert "session storage" in caplog.text
