import pytest

from gemini_study.config import StudySettings, resolve_config
from gemini_study.core.exceptions import ConfigurationError
from gemini_study.core.types import RetryPolicy

pytestmark = pytest.mark.unit


def test_defaults():
    settings = resolve_config()

    assert settings.api_key is None
    assert settings.model == "gemini-2.5-flash"
    assert settings.embedding_model == "gemini-embedding-001"
    assert settings.generate_policy() == RetryPolicy(5, 500)
    assert settings.embed_policy() == RetryPolicy(6, 400)
    assert not settings.has_api_key


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_GENERATE_MAX_RETRIES", "2")

    settings = resolve_config()

    assert settings.api_key == "env-key"
    assert settings.generate_policy().max_attempts == 3


def test_overrides_take_precedence_over_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "from-env")

    assert resolve_config(model="from-override").model == "from-override"


def test_invalid_values_raise_configuration_error(monkeypatch):
    monkeypatch.setenv("GEMINI_EMBED_MAX_RETRIES", "-1")

    with pytest.raises(ConfigurationError, match="embed_max_retries"):
        resolve_config()


def test_missing_env_file_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        resolve_config(env_file=tmp_path / "missing.env")


@pytest.mark.allow_dotenv
def test_env_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\nGEMINI_MODEL=file-model\n")
    monkeypatch.setenv("GEMINI_MODEL", "process-model")
    # Registered with monkeypatch so the value loaded from the file is undone
    monkeypatch.setenv("GEMINI_API_KEY", "placeholder")
    monkeypatch.delenv("GEMINI_API_KEY")

    settings = resolve_config(env_file=env_file)

    assert settings.api_key == "from-file"
    # Process environment wins over the file
    assert settings.model == "process-model"


def test_blank_api_key_counts_as_missing():
    assert not StudySettings(api_key="   ").has_api_key


def test_redacted_masks_api_key():
    redacted = StudySettings(api_key="super-secret").redacted()

    assert redacted["api_key"] == "[SET]"
    assert "super-secret" not in str(redacted)
    assert StudySettings().redacted()["api_key"] == "[NOT SET]"
