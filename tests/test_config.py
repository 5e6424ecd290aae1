import logging

from config import Settings, configure_logging, get_settings


def test_defaults(monkeypatch):
    for name in ("PHISH_API_PORT", "PHISH_HISTORY_ENABLED", "PHISH_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.api_port == Settings.api_port
    assert settings.history_enabled is True
    assert settings.request_timeout == 6.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PHISH_API_PORT", "8080")
    monkeypatch.setenv("PHISH_HISTORY_ENABLED", "no")
    monkeypatch.setenv("PHISH_REQUEST_TIMEOUT", "1.5")
    monkeypatch.setenv("PHISH_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.api_port == 8080
    assert settings.history_enabled is False
    assert settings.request_timeout == 1.5
    assert settings.log_level == "DEBUG"


def test_malformed_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("PHISH_API_PORT", "eighty")
    monkeypatch.setenv("PHISH_REQUEST_TIMEOUT", "soon")
    settings = get_settings()
    assert settings.api_port == 5000
    assert settings.request_timeout == 6.0


def test_configure_logging_sets_root_level():
    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    configure_logging("info")
    assert logging.getLogger().level == logging.INFO
