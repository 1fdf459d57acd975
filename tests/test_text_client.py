import httpx
import pytest

from wair.core import config
from wair.core.config import settings
from wair.core.errors import ApiError
from wair.schemas.chat import StylistReply
from wair.services.llm.text_client import GenerativeTextClient, strip_fences
from tests.fixtures import RecordingSleep, ScriptedBackend, error_response, make_image, text_response


def _client(backend: ScriptedBackend, sleep: RecordingSleep) -> GenerativeTextClient:
    return GenerativeTextClient(backend.client(), sleep=sleep)


def test_strip_fences():
    assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_fences('  {"a": 1} ') == '{"a": 1}'


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_request(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    backend = ScriptedBackend()
    sleep = RecordingSleep()
    with pytest.raises(ApiError) as exc:
        await _client(backend, sleep).generate("hi")
    assert exc.value.kind == "NO_API_KEY"
    assert exc.value.retryable is False
    assert backend.calls == 0
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_host_injected_key_is_used_as_fallback(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    config.inject_host_api_key("host-key")
    backend = ScriptedBackend(text_response({"ok": True}))
    out = await _client(backend, RecordingSleep()).generate("hi")
    assert out == {"ok": True}
    assert backend.requests[0].url.params["key"] == "host-key"


@pytest.mark.asyncio
async def test_payload_joins_system_instruction_and_attaches_image():
    photo = make_image(10, 10)
    backend = ScriptedBackend(text_response({"ok": True}))
    await _client(backend, RecordingSleep()).generate("Rate this", "You are a stylist.", photo)

    request = backend.requests[0]
    assert request.method == "POST"
    assert request.url.path.endswith(f"/models/{settings.GEMINI_TEXT_MODEL}:generateContent")
    body = backend.body()
    parts = body["contents"][0]["parts"]
    assert parts[0] == {"text": "You are a stylist.\n\nRate this"}
    assert parts[1]["inlineData"]["mimeType"] == "image/jpeg"
    assert parts[1]["inlineData"]["data"] == photo.split(",", 1)[1]
    assert body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 8192}


@pytest.mark.asyncio
async def test_prompt_without_system_instruction_is_sent_as_is():
    backend = ScriptedBackend(text_response({"ok": True}))
    await _client(backend, RecordingSleep()).generate("just this")
    assert backend.body()["contents"][0]["parts"] == [{"text": "just this"}]


@pytest.mark.asyncio
async def test_fenced_json_is_parsed():
    backend = ScriptedBackend(text_response({"category": "Top"}, fenced=True))
    assert await _client(backend, RecordingSleep()).generate("x") == {"category": "Top"}


@pytest.mark.asyncio
async def test_succeeds_on_third_attempt_after_two_503s():
    sleep = RecordingSleep()
    backend = ScriptedBackend(error_response(503), error_response(503), text_response({"responseText": "hi"}))
    out = await _client(backend, sleep).generate("x")
    assert out == {"responseText": "hi"}
    assert backend.calls == 3
    assert sleep.total_ms == 1000 + 2000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure, kind",
    [
        (lambda: error_response(429, "Resource exhausted"), "RATE_LIMIT"),
        (lambda: error_response(500), "RATE_LIMIT"),
        (lambda: httpx.Response(200, json={"candidates": []}), "EMPTY_RESPONSE"),
        (lambda: text_response("Sure! Here are some outfits"), "PARSE_ERROR"),
    ],
)
@pytest.mark.parametrize("retries", [0, 1, 2])
async def test_transient_errors_are_retried_exactly_retries_times(failure, kind, retries):
    sleep = RecordingSleep()
    backend = ScriptedBackend(*[failure() for _ in range(retries + 1)])
    with pytest.raises(ApiError) as exc:
        await _client(backend, sleep).generate("x", retries=retries)
    assert exc.value.kind == kind
    assert exc.value.retryable is True
    assert backend.calls == retries + 1
    assert len(sleep.delays) == retries


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    sleep = RecordingSleep()
    backend = ScriptedBackend(error_response(400, "API key not valid"))
    with pytest.raises(ApiError) as exc:
        await _client(backend, sleep).generate("x", retries=2)
    assert exc.value.kind == "API_ERROR"
    assert exc.value.status == 400
    assert exc.value.message == "API key not valid"
    assert backend.calls == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_error_message_falls_back_to_status():
    backend = ScriptedBackend(error_response(403))
    with pytest.raises(ApiError) as exc:
        await _client(backend, RecordingSleep()).generate("x")
    assert exc.value.message == "HTTP 403"


@pytest.mark.asyncio
async def test_connection_failures_are_transient():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    sleep = RecordingSleep()
    backend = ScriptedBackend(refuse, text_response({"ok": 1}))
    assert await _client(backend, sleep).generate("x") == {"ok": 1}
    assert sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_shape_mismatch_is_a_retryable_parse_error():
    sleep = RecordingSleep()
    backend = ScriptedBackend(
        text_response({"responseText": "hi", "outfits": "not a list"}),
        text_response({"responseText": "hi", "outfits": []}),
    )
    reply = await _client(backend, sleep).generate("x", response_model=StylistReply)
    assert isinstance(reply, StylistReply)
    assert reply.response_text == "hi"
    assert backend.calls == 2
