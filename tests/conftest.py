import asyncio
import os
import sys
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from utils.llm_processor import LLMProcessor


@pytest.fixture
def offline_env(monkeypatch, tmp_path):
    """Environment with generated sources only and no AI key"""
    monkeypatch.setenv("USE_MOCK_SOURCES", "true")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("JSEARCH_API_KEY", "")
    monkeypatch.setenv("ADZUNA_APP_ID", "")
    monkeypatch.setenv("ADZUNA_APP_KEY", "")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test_cache.db'}")
    monkeypatch.setenv("COMPANY_CACHE_ENABLED", "true")


@pytest.fixture
def client(offline_env):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class FakeCompletions:
    """Stands in for client.chat.completions of the OpenAI SDK"""

    def __init__(self, reply=None, delay=0, error=None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])


def fake_llm(reply=None, delay=0, error=None) -> LLMProcessor:
    completions = FakeCompletions(reply=reply, delay=delay, error=error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return LLMProcessor(model="fake-model", client=client)


@pytest.fixture
def make_llm():
    return fake_llm
