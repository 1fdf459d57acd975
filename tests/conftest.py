import pytest

from wair.core import config
from wair.core.config import settings


@pytest.fixture(autouse=True)
def gemini_key(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(config, "_host_api_key", None)
    yield
