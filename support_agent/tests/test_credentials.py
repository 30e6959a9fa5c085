import pytest

from support_agent.config.credentials import Credentials
from support_agent.domain.exceptions import ConfigurationError, ValidationError


class SettingsStub:
    gemini_api_key = "g-key-123456"
    openai_api_key = None


def test_from_settings():
    creds = Credentials.from_settings(SettingsStub())
    assert creds.is_configured("gemini")
    assert creds.is_configured("GEMINI")
    assert not creds.is_configured("openai")


@pytest.mark.parametrize("key", [None, "", "   ", "your_gemini_api_key_here"])
def test_unconfigured_keys(key):
    creds = Credentials(gemini_api_key=key)
    assert not creds.is_configured("gemini")
    with pytest.raises(ConfigurationError) as exc:
        creds.require("gemini")
    assert exc.value.code == "MISSING_API_KEY"
    assert exc.value.provider == "gemini"
    assert exc.value.message == "Gemini API key is not set. Please add your API key to the .env file."


def test_require_returns_stripped_key():
    assert Credentials(openai_api_key=" sk-abc ").require("openai") == "sk-abc"


def test_unknown_provider():
    with pytest.raises(ValidationError):
        Credentials().is_configured("kimi")
