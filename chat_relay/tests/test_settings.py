from chat_relay.config.settings import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "GEMINI_RETRY_ATTEMPTS", "GEMINI_MODEL", "CHAT_RELAY_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.gemini_api_key is None
    assert s.gemini_model == "gemini-2.5-pro"
    policy = s.retry_policy()
    assert policy.max_attempts == 4
    assert policy.base_delay == 0.5


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "  abc123  ")
    monkeypatch.setenv("GEMINI_RETRY_ATTEMPTS", "2")
    s = Settings(_env_file=None)
    assert s.gemini_api_key == "abc123"
    assert s.retry_policy().max_attempts == 2


def test_blank_key_is_none(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    assert Settings(_env_file=None).gemini_api_key is None


def test_yaml_config_file(monkeypatch, tmp_path):
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("gemini_model: gemini-2.5-flash\ngemini_temperature: 0.7\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.setenv("CHAT_RELAY_CONFIG_FILE", str(cfg))
    s = Settings(_env_file=None)
    assert s.gemini_model == "gemini-2.5-flash"
    assert s.gemini_temperature == 0.7
