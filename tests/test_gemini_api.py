import pytest

import ai_client
from ai_backends import gemini_api
from errors import AnalyzerError

IMAGE = "data:image/png;base64,iVBORw0KGgo="


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text  = text
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.text)


@pytest.fixture
def fake_models(monkeypatch):
    models = FakeModels(text="1. Coin Identification:\n- Country: Canada\n")

    class FakeClient:
        def __init__(self, api_key):
            self.api_key = api_key
            self.models  = models

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.setattr(gemini_api.genai, "Client", FakeClient)
    return models


def test_sends_image_and_prompt(fake_models):
    text = gemini_api.call(IMAGE, "Describe the coin")

    assert text == "1. Coin Identification:\n- Country: Canada"
    call = fake_models.calls[0]
    assert call["model"] == gemini_api.DEFAULT_MODEL
    image_part, prompt = call["contents"]
    assert prompt == "Describe the coin"
    assert image_part.inline_data.mime_type == "image/png"
    assert image_part.inline_data.data == b"\x89PNG\r\n\x1a\n"


def test_model_override(fake_models, monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
    gemini_api.call(IMAGE, "prompt")
    assert fake_models.calls[0]["model"] == "gemini-2.5-pro"


def test_missing_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(AnalyzerError, match="GEMINI_API_KEY is not set"):
        gemini_api.call(IMAGE, "prompt")


def test_bad_data_uri(fake_models):
    with pytest.raises(AnalyzerError, match="Could not decode the image"):
        gemini_api.call("/default-coin.jpeg", "prompt")
    assert fake_models.calls == []


def test_quota_error_is_friendly(fake_models):
    fake_models.error = RuntimeError(
        '429 RESOURCE_EXHAUSTED. {"error": {"code": 429, "details": '
        '[{"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "37s"}]}}'
    )
    with pytest.raises(AnalyzerError) as excinfo:
        gemini_api.call(IMAGE, "prompt")
    assert "quota exceeded" in excinfo.value.message
    assert "Retry after: 37s." in excinfo.value.message
    assert excinfo.value.__cause__ is fake_models.error


def test_other_errors_keep_their_message(fake_models):
    fake_models.error = ConnectionError("connection reset")
    with pytest.raises(AnalyzerError, match="connection reset"):
        gemini_api.call(IMAGE, "prompt")


def test_empty_response(fake_models):
    fake_models.text = None
    with pytest.raises(AnalyzerError, match="empty response"):
        gemini_api.call(IMAGE, "prompt")


def test_dispatcher_uses_configured_backend(fake_models, monkeypatch):
    monkeypatch.setattr(ai_client, "load_dotenv", lambda **kwargs: None)
    monkeypatch.setenv("AI_PROVIDER", "gemini_api")
    assert ai_client.analyze_image(IMAGE, "prompt").startswith("1. Coin Identification:")


def test_dispatcher_unknown_backend(monkeypatch):
    monkeypatch.setattr(ai_client, "load_dotenv", lambda **kwargs: None)
    monkeypatch.setenv("AI_PROVIDER", "no_such_backend")
    with pytest.raises(AnalyzerError, match="AI backend 'no_such_backend' not found"):
        ai_client.analyze_image(IMAGE, "prompt")
