import pytest

from support_agent.api import service
from support_agent.infrastructure.speech import NullSpeaker
from support_agent.prompts import WELCOME_MESSAGE


class DummySettings:
    default_provider = "gemini"
    gemini_api_key = "g-key-123456"
    openai_api_key = "your_openai_api_key_here"
    voice_enabled = False


class FakeProvider:
    def __init__(self, name):
        self.name = name

    def respond(self, history, user_text, is_first_turn=False):
        return f"{self.name}: {user_text}"


@pytest.fixture(autouse=True)
def fresh_service(monkeypatch):
    monkeypatch.setattr(service, "_session", None)
    monkeypatch.setattr(service, "settings", DummySettings())
    monkeypatch.setattr(service, "default_speaker", NullSpeaker)
    monkeypatch.setattr(service, "create_provider", lambda name, credentials: FakeProvider(name))


def test_run_support_chat():
    res = service.run_support_chat("my printer jams")
    assert res["user_message"] == {"role": "user", "content": "my printer jams"}
    assert res["assistant_message"]["content"] == "gemini: my printer jams"
    assert res["assistant_message"]["label"] == "Optimum Agent (gemini)"
    assert res["error"] is None
    assert [m["role"] for m in service.get_conversation_messages()] == ["agent", "user", "agent"]


def test_run_support_chat_surfaces_config_error_in_band():
    res = service.run_support_chat("hi", "openai")
    assert res["error"]["kind"] == "configuration"
    assert res["assistant_message"]["content"].startswith("Error: OpenAI API key is not set")


def test_blank_input_returns_none():
    assert service.run_support_chat("  ") is None


def test_reset_chat():
    service.run_support_chat("hi")
    welcome = service.reset_chat("openai")
    assert welcome == {"role": "agent", "content": WELCOME_MESSAGE, "label": "Optimum Agent (openai)"}
    assert len(service.get_conversation_messages()) == 1


def test_key_status():
    assert service.key_status("gemini") == "✓ Gemini Key Set"
    assert service.key_status("openai") == "✗ OpenAI Key Missing"


def test_set_voice_enabled():
    service.set_voice_enabled(True)
    assert service.get_default_session().voice_enabled is True
