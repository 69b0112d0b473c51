import pytest

from chat_relay.domain.exceptions import ConfigurationError
from chat_relay.providers import create_responder
from chat_relay.providers.gemini_client import GeminiClient
from chat_relay.providers.local_client import LocalResponder
from chat_relay.providers.registry import GEMINI_CONFIG, LOCAL_CONFIG, resolve_provider


class DummySettings:
    default_responder = "auto"
    gemini_api_key = None


def test_auto_without_key_is_local():
    assert isinstance(create_responder(cfg=DummySettings()), LocalResponder)


def test_auto_with_key_is_gemini():
    cfg = DummySettings()
    cfg.gemini_api_key = "some-key"
    assert isinstance(create_responder(cfg=cfg), GeminiClient)


def test_explicit_name():
    cfg = DummySettings()
    cfg.gemini_api_key = "some-key"
    assert isinstance(create_responder("local", cfg=cfg), LocalResponder)


def test_explicit_name_case_insensitive():
    assert isinstance(create_responder("Gemini", cfg=DummySettings()), GeminiClient)


def test_default_from_module_settings(monkeypatch):
    class ForcedGemini(DummySettings):
        default_responder = "gemini"

    monkeypatch.setattr("chat_relay.providers.settings", ForcedGemini())
    assert isinstance(create_responder(), GeminiClient)


def test_unknown_responder_rejected():
    with pytest.raises(ConfigurationError) as exc:
        create_responder("openai", cfg=DummySettings())
    assert exc.value.code == "UNKNOWN_RESPONDER"
    assert "openai" in exc.value.message


def test_resolve_provider():
    assert resolve_provider("auto", has_api_key=True) is GEMINI_CONFIG
    assert resolve_provider("auto", has_api_key=False) is LOCAL_CONFIG
    assert resolve_provider(" LOCAL ", has_api_key=True).remote is False
    assert resolve_provider("gemini", has_api_key=False).remote is True
