import importlib
import os

import pytest

from critic import config as config_module
from critic.config import DEFAULT_MODEL, DEFAULT_TIMEOUT_MS, CritiqueConfig, Settings


@pytest.fixture
def settings(monkeypatch):
    def _make(**env) -> Settings:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return Settings(_env_file=None)

    return _make


def test_defaults(settings):
    config = settings().critique_config()

    assert config.model == DEFAULT_MODEL
    assert config.timeout_ms == DEFAULT_TIMEOUT_MS
    assert config.base_url == "https://router.huggingface.co/v1"
    assert config.max_retries == 2
    assert config.temperature == 0.2
    assert config.max_tokens == 1400
    assert not config.has_credential


def test_values_are_read_from_environment(settings):
    config = settings(
        HF_TOKEN="hf_abc",  # pragma: allowlist secret
        HF_MODEL="org/other-model",
        CRITIQUE_TIMEOUT_MS="1500",
        HF_MAX_RETRIES="0",
    ).critique_config()

    assert config.has_credential
    assert config.api_key.get_secret_value() == "hf_abc"  # pragma: allowlist secret
    assert config.model == "org/other-model"
    assert config.timeout_ms == 1500
    assert config.timeout_seconds == 1.5
    assert config.max_retries == 0


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_model_falls_back_to_default(settings, value):
    assert settings(HF_MODEL=value).HF_MODEL == DEFAULT_MODEL


@pytest.mark.parametrize("value", ["soon", "0", "-5", "nan", "inf", ""])
def test_unusable_timeout_falls_back_to_default(settings, value):
    assert settings(CRITIQUE_TIMEOUT_MS=value).CRITIQUE_TIMEOUT_MS == DEFAULT_TIMEOUT_MS


def test_fractional_timeout_is_truncated(settings):
    assert settings(CRITIQUE_TIMEOUT_MS="250.9").CRITIQUE_TIMEOUT_MS == 250
    assert settings(CRITIQUE_TIMEOUT_MS="0.5").CRITIQUE_TIMEOUT_MS == 1


def test_empty_token_is_no_credential(settings):
    assert settings(HF_TOKEN="").critique_config().api_key is None


def test_credential_is_not_shown_in_repr():
    config = CritiqueConfig(api_key="hf_secret")  # pragma: allowlist secret

    assert "hf_secret" not in repr(config)


def test_dotenv_file_is_read_by_settings_only(settings, tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("HF_MODEL=org/from-dotenv\nHF_TOKEN=hf_dotenv\n")
    monkeypatch.chdir(tmp_path)

    importlib.reload(config_module)

    assert "HF_MODEL" not in os.environ
    assert "HF_TOKEN" not in os.environ
    assert settings().HF_MODEL == DEFAULT_MODEL
    assert config_module.Settings().HF_MODEL == "org/from-dotenv"


def test_no_settings_variable_leaks_into_tests():
    assert [name for name in Settings.model_fields if name in os.environ] == []
