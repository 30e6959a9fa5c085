import pytest

from support_agent.config.credentials import Credentials
from support_agent.domain.exceptions import ValidationError
from support_agent.providers import create_provider
from support_agent.providers.gemini_client import GeminiClient
from support_agent.providers.openai_client import OpenAIClient
from support_agent.providers.registry import PROVIDER_REGISTRY


class DummySettings:
    default_provider = "gemini"
    gemini_api_key = "g-key-123456"
    openai_api_key = None


def test_create_provider_default(monkeypatch):
    monkeypatch.setattr("support_agent.providers.settings", DummySettings())
    provider = create_provider()
    assert isinstance(provider, GeminiClient)


def test_create_provider_explicit(monkeypatch):
    monkeypatch.setattr("support_agent.providers.settings", DummySettings())
    provider = create_provider("OpenAI", Credentials(openai_api_key="sk-test-123456"))
    assert isinstance(provider, OpenAIClient)
    assert provider.name == "openai"


def test_create_provider_unknown(monkeypatch):
    monkeypatch.setattr("support_agent.providers.settings", DummySettings())
    with pytest.raises(ValidationError):
        create_provider("kimi")


def test_registry_generation_params():
    gemini = PROVIDER_REGISTRY["gemini"].generation
    assert (gemini.temperature, gemini.top_k, gemini.top_p, gemini.max_output_tokens) == (0.7, 40, 0.95, 500)
    openai = PROVIDER_REGISTRY["openai"].generation
    assert (openai.temperature, openai.max_output_tokens, openai.top_k) == (0.7, 500, None)
    assert GeminiClient.name == "gemini" and OpenAIClient.name == "openai"
