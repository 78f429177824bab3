"""Shared fixtures: a fake model client and an API client wired to it."""

import os

# Must be set before app.main loads (and caches) the settings
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "10000")
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.critique import get_critic_service
from app.services.design_critic import DesignCriticService
from app.utils.config import Settings


class FakeCompletions:
    """Records create() calls and replies with canned text or raises."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, reply="", error=None):
        self.completions = FakeCompletions(reply, error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def settings():
    return Settings(OPENAI_API_KEY="test-key", OPENAI_MODEL="test-model")


@pytest.fixture
def make_service(settings):
    def _make(reply="", error=None):
        fake = FakeOpenAI(reply, error)
        return DesignCriticService(client=fake, settings=settings), fake

    return _make


@pytest.fixture
def api_client():
    """TestClient whose critic service is built from a fake model client."""
    def use_reply(reply="", error=None):
        fake = FakeOpenAI(reply, error)
        service = DesignCriticService(
            client=fake,
            settings=Settings(OPENAI_API_KEY="test-key", OPENAI_MODEL="test-model"),
        )
        app.dependency_overrides[get_critic_service] = lambda: service
        return fake

    client = TestClient(app)
    client.use_reply = use_reply
    yield client
    app.dependency_overrides.clear()
