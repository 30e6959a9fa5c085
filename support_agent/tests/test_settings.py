from support_agent.config.settings import Settings


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SUPPORT_AGENT_CONFIG_FILE", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "  g-key-123456  ")
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    monkeypatch.setenv("DEFAULT_PROVIDER", " OpenAI ")
    cfg = Settings(_env_file=None)
    assert cfg.gemini_api_key == "g-key-123456"
    assert cfg.openai_api_key is None
    assert cfg.default_provider == "openai"
    assert cfg.http_timeout is None


def test_settings_from_yaml(monkeypatch, tmp_path):
    cfg_file = tmp_path / "agent.yaml"
    cfg_file.write_text("openai_model: gpt-4o-mini\nvoice_enabled: false\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SUPPORT_AGENT_CONFIG_FILE", str(cfg_file))
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("VOICE_ENABLED", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.openai_model == "gpt-4o-mini"
    assert cfg.voice_enabled is False
