from __future__ import annotations

import pytest
from pydantic import ValidationError

from legal_gateway.config import AppConfig, ModelServerConfig, RagConfig


def test_allowed_origins_are_split_on_commas() -> None:
    config = AppConfig(allowed_origins=" https://a.example , https://*.b.example ,, ")

    assert config.origin_patterns == ["https://a.example", "https://*.b.example"]


def test_port_can_come_from_plain_port_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_PORT", raising=False)
    monkeypatch.setenv("PORT", "8080")

    assert AppConfig().app_port == 8080


def test_log_level_is_normalised_and_validated() -> None:
    assert AppConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        AppConfig(log_level="verbose")


def test_invalid_environment_and_history_limit_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(app_env="qa")
    with pytest.raises(ValidationError):
        AppConfig(history_limit=0)


def test_model_server_url_is_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODEL_SERVER_URL", "https://models.example.com/")
    monkeypatch.setenv("MODEL_API_KEY", "abc")

    config = ModelServerConfig()

    assert config.base_url == "https://models.example.com"
    assert config.api_key == "abc"
    assert config.timeout == 60.0


def test_model_server_rejects_bad_values() -> None:
    with pytest.raises(ValidationError):
        ModelServerConfig(MODEL_SERVER_URL="ftp://nope")
    with pytest.raises(ValidationError):
        ModelServerConfig(DEFAULT_TOP_P=0)


def test_rag_disabled_when_url_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RAG_SERVER_URL", "  ")

    config = RagConfig()

    assert config.base_url is None
    assert not config.enabled
    assert config.top_k == 5
