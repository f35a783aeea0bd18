import pytest, httpx, respx

from src.models.entities import Template
from src.services.translation import TranslationService

BASE = "https://translate.test/v2"


def _service(api_key="k"):
    return TranslationService(api_key=api_key, base_url=BASE, timeout=1)


@pytest.mark.asyncio
async def test_translate_without_key_returns_original():
    svc = _service(api_key="")
    assert svc.is_configured is False
    assert await svc.translate_text("Hello", "es") == "Hello"


@respx.mock
@pytest.mark.asyncio
async def test_translate_text_success():
    route = respx.post(BASE).mock(return_value=httpx.Response(
        200, json={"data": {"translations": [{"translatedText": "Hola"}]}}
    ))
    assert await _service().translate_text("Hello", "es") == "Hola"

    request = route.calls.last.request
    assert request.url.params["key"] == "k"
    assert b'"target":"es"' in request.content.replace(b" ", b"")


@respx.mock
@pytest.mark.asyncio
async def test_translate_text_http_error_returns_original():
    respx.post(BASE).mock(return_value=httpx.Response(403))
    assert await _service().translate_text("Hello", "es") == "Hello"


@respx.mock
@pytest.mark.asyncio
async def test_translate_text_network_error_returns_original():
    respx.post(BASE).mock(side_effect=httpx.ConnectError("down"))
    assert await _service().translate_text("Hello", "es") == "Hello"


@respx.mock
@pytest.mark.asyncio
async def test_translate_template_uses_content():
    respx.post(BASE).mock(return_value=httpx.Response(
        200, json={"data": {"translations": [{"translatedText": "Bonjour {{customer_name}}"}]}}
    ))
    template = Template(id="t1", name="t", category_id="c1", language_code="en", content="Hello {{customer_name}}")
    assert await _service().translate_template(template, "fr") == "Bonjour {{customer_name}}"


@respx.mock
@pytest.mark.asyncio
async def test_detect_language_via_api():
    respx.post(f"{BASE}/detect").mock(return_value=httpx.Response(
        200, json={"data": {"detections": [[{"language": "it", "confidence": 0.9}]]}}
    ))
    assert await _service().detect_language("Ciao, grazie") == "it"


@respx.mock
@pytest.mark.asyncio
async def test_detect_language_falls_back_to_strict_markers():
    respx.post(f"{BASE}/detect").mock(return_value=httpx.Response(500))
    svc = _service()
    assert await svc.detect_language("Hola, gracias") == "es"
    # one marker is not enough for the strict fallback
    assert await svc.detect_language("hola") == "en"


@respx.mock
@pytest.mark.asyncio
async def test_detect_language_malformed_payload_falls_back():
    respx.post(f"{BASE}/detect").mock(return_value=httpx.Response(200, json={"data": {}}))
    assert await _service().detect_language("Danke, bitte") == "de"


@pytest.mark.asyncio
async def test_detect_language_without_key_uses_strict_markers():
    svc = _service(api_key="")
    assert await svc.detect_language("bonjour") == "en"
    assert await svc.detect_language("bonjour et merci") == "fr"


def test_available_languages():
    langs = _service().get_available_languages()
    assert langs[0] == "en"
    assert {"es", "fr", "de", "pt"} <= set(langs)
