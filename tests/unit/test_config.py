import importlib

from motoroute.config import Environment, Settings, ValidationSettings, get_settings, reload_settings
from motoroute.config.loader import ConfigLoader


def test_validation_limits_from_environment(monkeypatch):
    monkeypatch.setenv("VALIDATION_MAX_STAGES", "5")
    monkeypatch.setenv("VALIDATION_CAPTION_MAX_LENGTH", "80")

    limits = ValidationSettings()

    assert limits.max_stages == 5
    assert limits.caption_max_length == 80
    assert limits.title_min_length == 3


def test_environment_is_case_insensitive():
    assert Settings(environment="PRODUCTION").is_production()


def test_missing_environment_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    loaded = ConfigLoader.load_environment_config("staging")

    assert loaded.environment == Environment.STAGING
    assert not ConfigLoader.validate_environment_config("staging")
    assert not ConfigLoader.validate_environment_config("qa")


def test_sample_file_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    sample = ConfigLoader.create_sample_env_file("staging")
    (tmp_path / ".env.staging").write_text((tmp_path / sample).read_text())

    assert ConfigLoader.get_available_environments() == ["staging"]
    assert ConfigLoader.validate_environment_config("staging")
    assert ConfigLoader.load_environment_config("staging").environment == Environment.STAGING


def test_reload_settings_picks_up_environment(monkeypatch):
    settings_module = importlib.import_module("motoroute.config.settings")
    original = settings_module.settings
    monkeypatch.setenv("APP_NAME", "Motoroute Staging")
    try:
        reloaded = reload_settings()
        assert reloaded.app_name == "Motoroute Staging"
        assert get_settings() is reloaded
    finally:
        settings_module.settings = original
