import pytest

from wair.core.config import settings
from wair.core.errors import ApiError
from wair.services.llm.image_client import GenerativeImageClient
from tests.fixtures import RecordingSleep, ScriptedBackend, error_response, image_response, make_image, text_response


def _client(backend, sleep=None):
    return GenerativeImageClient(backend.client(), sleep=sleep or RecordingSleep())


@pytest.mark.asyncio
async def test_returns_inline_image_with_declared_mime():
    backend = ScriptedBackend(image_response("QUJD", "image/webp"))
    out = await _client(backend).generate_image("dress her", [make_image(8, 8)])
    assert out == "data:image/webp;base64,QUJD"


@pytest.mark.asyncio
async def test_missing_mime_defaults_to_png():
    backend = ScriptedBackend(image_response("QUJD", None))
    assert await _client(backend).generate_image("x", []) == "data:image/png;base64,QUJD"


@pytest.mark.asyncio
async def test_request_carries_prompt_then_subject_then_garments():
    subject, shirt, jeans = make_image(4, 4, "red"), make_image(4, 4, "white"), make_image(4, 4, "blue")
    backend = ScriptedBackend(image_response())
    await _client(backend).generate_image("full body photo", [subject, None, shirt, jeans])

    body = backend.body()
    assert backend.requests[0].url.path.endswith(f"/models/{settings.GEMINI_IMAGE_MODEL}:generateContent")
    assert body["generationConfig"] == {"responseModalities": ["IMAGE", "TEXT"]}
    parts = body["contents"][0]["parts"]
    assert parts[0] == {"text": "full body photo"}
    assert [p["inlineData"]["data"] for p in parts[1:]] == [
        subject.split(",", 1)[1],
        shirt.split(",", 1)[1],
        jeans.split(",", 1)[1],
    ]


@pytest.mark.asyncio
async def test_reference_images_are_capped(monkeypatch):
    monkeypatch.setattr(settings, "TRYON_MAX_GARMENTS", 2)
    backend = ScriptedBackend(image_response())
    await _client(backend).generate_image("x", [make_image(2, 2) for _ in range(6)])
    assert len(backend.body()["contents"][0]["parts"]) == 1 + 3


@pytest.mark.asyncio
async def test_text_only_answer_is_retried_once_then_raises_no_image():
    sleep = RecordingSleep()
    backend = ScriptedBackend(text_response("I can't do that"), text_response("still no"))
    with pytest.raises(ApiError) as exc:
        await _client(backend, sleep).generate_image("x", [])
    assert exc.value.kind == "NO_IMAGE"
    assert backend.calls == 2
    assert sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_http_failure_then_success():
    backend = ScriptedBackend(error_response(500, "internal"), image_response("WFla"))
    assert await _client(backend).generate_image("x", []) == "data:image/png;base64,WFla"
    assert backend.calls == 2


@pytest.mark.asyncio
async def test_http_failure_exhausts_budget():
    backend = ScriptedBackend(error_response(400, "bad image"), error_response(400, "bad image"))
    with pytest.raises(ApiError) as exc:
        await _client(backend).generate_image("x", [], retries=1)
    assert exc.value.kind == "IMAGE_GEN_ERROR"
    assert exc.value.message == "bad image"
    assert backend.calls == 2


@pytest.mark.asyncio
async def test_missing_key(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
    backend = ScriptedBackend()
    with pytest.raises(ApiError) as exc:
        await _client(backend).generate_image("x", [])
    assert exc.value.kind == "NO_API_KEY"
    assert backend.calls == 0
