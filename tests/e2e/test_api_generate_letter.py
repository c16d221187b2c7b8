"""
E2E Tests: POST /api/generate-letter

TestClient + FakeCompletionProvider (업스트림 호출 없음).
"""

import json

import pytest

from src.app.services.prompt import SYSTEM_PROMPT


def parse_sse(text: str) -> list[tuple[str, str]]:
    """(event, data) 목록."""
    events = []
    for block in text.split("\n\n"):
        if not block.strip():
            continue
        event = "message"
        data = []
        for line in block.split("\n"):
            if line.startswith("event: "):
                event = line[len("event: "):]
            elif line.startswith("data: "):
                data.append(line[len("data: "):])
        events.append((event, "\n".join(data)))
    return events


def letter_from(events: list[tuple[str, str]]) -> str:
    return "".join(
        json.loads(data)["content"]
        for event, data in events
        if event == "message" and data != "[DONE]"
    )


# =============================================================================
# 성공 경로
# =============================================================================


class TestGenerateLetterStream:

    def test_mia_streams_letter(self, client, fake_provider, mia_request):
        response = client.post("/api/generate-letter", json=mia_request)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")

        events = parse_sse(response.text)
        assert events[-1] == ("message", "[DONE]")
        letter = letter_from(events)
        assert letter.startswith("Ho Ho Ho! Dear Mia")
        assert "Santa Claus" in letter
        assert "P.S." in letter

    def test_prompt_carries_request(self, client, fake_provider, mia_request):
        client.post("/api/generate-letter", json=mia_request)

        call = fake_provider.stream_calls[0]
        assert call["system_prompt"] == SYSTEM_PROMPT
        assert "Mia" in call["prompt"]
        assert "GOOD LIST" in call["prompt"]
        assert "a bicycle" in call["prompt"]
        assert "helped her brother" in call["prompt"]

    def test_uses_configured_params(self, client, fake_provider, mia_request):
        client.post("/api/generate-letter", json=mia_request)

        params = fake_provider.stream_calls[0]["params"]
        assert params.model == "gpt-4o-mini"
        assert params.temperature == 0.9
        assert params.max_tokens == 400

    def test_naughty_list_omits_gifts(self, client, fake_provider):
        client.post(
            "/api/generate-letter",
            json={"childName": "Max", "isOnGoodList": False, "gifts": "a drone"},
        )

        prompt = fake_provider.stream_calls[0]["prompt"]
        assert "NAUGHTY LIST" in prompt
        assert "a drone" not in prompt

    def test_sse_headers(self, client, mia_request):
        response = client.post("/api/generate-letter", json=mia_request)

        assert "no-cache" in response.headers["cache-control"]
        assert response.headers["x-accel-buffering"] == "no"

    def test_upstream_stream_closed(self, client, fake_provider, mia_request):
        client.post("/api/generate-letter", json=mia_request)

        assert fake_provider.streams[0].closed is True


# =============================================================================
# 검증 / 설정 에러
# =============================================================================


class TestGenerateLetterRejected:

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name(self, client, fake_provider, name):
        response = client.post("/api/generate-letter", json={"childName": name})

        assert response.status_code == 400
        assert response.json()["error"] == "Child's name is required"
        assert fake_provider.stream_calls == []

    def test_invalid_json(self, client, fake_provider):
        response = client.post(
            "/api/generate-letter",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
        assert fake_provider.stream_calls == []

    def test_non_object_body(self, client):
        response = client.post("/api/generate-letter", json=["Mia"])

        assert response.status_code == 400

    def test_missing_api_key(self, client_without_key, fake_provider, mia_request):
        response = client_without_key.post("/api/generate-letter", json=mia_request)

        assert response.status_code == 500
        assert "OPENAI_API_KEY" in response.json()["error"]
        assert fake_provider.stream_calls == []


# =============================================================================
# 업스트림 에러 (스트림 시작 전)
# =============================================================================


class TestGenerateLetterUpstreamErrors:

    @pytest.mark.parametrize(
        ("message", "status_code", "error"),
        [
            ("Rate limit reached for gpt-4o-mini", 429, "Rate Limit Reached"),
            ("Incorrect API key provided: sk-xxx", 401, "Invalid API Key"),
            ("You exceeded your current quota", 402, "API Quota Exceeded"),
            ("Connection error.", 503, "Connection Error"),
            ("Request timed out.", 503, "Connection Error"),
        ],
    )
    def test_status_mapping(self, client, fake_provider, mia_request, message, status_code, error):
        fake_provider.open_error = Exception(message)

        response = client.post("/api/generate-letter", json=mia_request)

        assert response.status_code == status_code
        assert response.json()["error"] == error
        assert response.json()["details"]

    def test_rate_limit_wins_over_quota(self, client, fake_provider, mia_request):
        fake_provider.open_error = Exception("Rate limit reached: quota window")

        response = client.post("/api/generate-letter", json=mia_request)

        assert response.status_code == 429

    def test_unknown_error_keeps_message(self, client, fake_provider, mia_request):
        fake_provider.open_error = Exception("model overloaded")

        response = client.post("/api/generate-letter", json=mia_request)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate letter",
            "details": "model overloaded",
        }


# =============================================================================
# 업스트림 에러 (스트림 도중)
# =============================================================================


class TestGenerateLetterMidStreamError:

    def test_error_event_after_partial_letter(self, client, fake_provider, mia_request):
        fake_provider.stream_error = Exception("Network failure")

        response = client.post("/api/generate-letter", json=mia_request)

        assert response.status_code == 200
        events = parse_sse(response.text)
        assert ("message", "[DONE]") not in events
        event, data = events[-1]
        assert event == "error"
        assert json.loads(data)["error"] == "Connection Error"
        assert letter_from(events[:-1]).startswith("Ho Ho Ho!")
        assert fake_provider.streams[0].closed is True
