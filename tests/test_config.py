from itinerary_export import config


def test_defaults(monkeypatch):
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert config.get_openai_model() == "gpt-4o-mini"
    assert config.get_log_level() == "INFO"
    assert config.get_openai_api_key() == ""


def test_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.get_openai_model() == "gpt-4o"
    assert config.get_log_level() == "DEBUG"
