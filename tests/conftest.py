import json

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from image_studio.config import settings
from image_studio.main import app
from image_studio.services.provider import GeminiImageProvider
from image_studio.services.session import get_provider


PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="


class FakeResponse:
    """Stand-in for a curl_cffi response."""

    def __init__(self, status_code=200, json_data=None, text=None, content=b"", headers=None):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text if text is not None else json.dumps(json_data)
        self.content = content
        self.headers = headers or {}

    def json(self):
        if self._json_data is not None:
            return self._json_data
        return json.loads(self.text)


class FakeSession:
    """Records calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self):
        self.post_responses = []
        self.get_responses = []
        self.posts = []
        self.gets = []

    async def post(self, url, headers=None, json=None, **kwargs):
        self.posts.append({"url": url, "headers": headers, "json": json, **kwargs})
        return self._next(self.post_responses)

    async def get(self, url, **kwargs):
        self.gets.append({"url": url, **kwargs})
        return self._next(self.get_responses)

    @staticmethod
    def _next(queue):
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def inline_image_response(data=PNG_B64, mime_type="image/png"):
    return FakeResponse(
        json_data={
            "candidates": [
                {
                    "content": {
                        "role": "model",
                        "parts": [
                            {"text": "Here is your image."},
                            {"inlineData": {"mimeType": mime_type, "data": data}},
                        ],
                    },
                    "finishReason": "STOP",
                }
            ]
        }
    )


@pytest.fixture(autouse=True)
def configured(monkeypatch):
    """Run every test against a known configuration with an API key set."""
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(settings, "gemini_image_model", None)
    monkeypatch.setattr(settings, "gemini_model", None)
    monkeypatch.setattr(settings, "reference_backend", "gemini")
    monkeypatch.setattr(settings, "gemini_base_api", "https://upstream.test")
    monkeypatch.setattr(settings, "max_upload_bytes", 10 * 1024 * 1024)
    yield


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def provider(fake_session):
    return GeminiImageProvider(fake_session)


@pytest_asyncio.fixture
async def client(provider):
    app.dependency_overrides[get_provider] = lambda: provider
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
