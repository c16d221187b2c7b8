"""
test_settings.py - Settings 해석 테스트

환경변수는 os.environ을 건드리지 않고 environ 매핑으로 주입.
"""

from pathlib import Path

from src.app.settings import DEFAULT_CONFIG_PATH, Settings, load_config


class TestLoadConfig:

    def test_missing_file_returns_empty(self, tmp_path: Path):
        assert load_config(tmp_path / "nope.yaml") == {}

    def test_empty_file_returns_empty(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == {}

    def test_reads_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("openai:\n  model: gpt-4o\n", encoding="utf-8")

        assert load_config(path) == {"openai": {"model": "gpt-4o"}}

    def test_project_default_config(self):
        config = load_config(DEFAULT_CONFIG_PATH)

        assert config["openai"]["model"] == "gpt-4o-mini"
        assert config["openai"]["max_tokens"] == 400


class TestSettingsFromConfig:

    def test_defaults_without_config(self):
        settings = Settings.from_config({}, environ={})

        assert settings.openai_api_key is None
        assert settings.model == "gpt-4o-mini"
        assert settings.temperature == 0.9
        assert settings.max_tokens == 400
        assert settings.api_key_prefix == "sk-"
        assert settings.health_max_tokens == 10

    def test_config_overrides(self):
        config = {
            "openai": {"model": "gpt-4o", "temperature": 0.5, "max_tokens": 200, "timeout": 10},
            "health": {"prompt": "ping", "max_tokens": 5},
            "logging": {"level": "debug"},
        }

        settings = Settings.from_config(config, environ={})

        assert settings.model == "gpt-4o"
        assert settings.temperature == 0.5
        assert settings.max_tokens == 200
        assert settings.timeout == 10.0
        assert settings.health_prompt == "ping"
        assert settings.health_max_tokens == 5
        assert settings.log_level == "DEBUG"

    def test_api_key_from_environ(self):
        settings = Settings.from_config({}, environ={"OPENAI_API_KEY": "  sk-live  "})

        assert settings.openai_api_key == "sk-live"

    def test_blank_api_key_is_missing(self):
        settings = Settings.from_config({}, environ={"OPENAI_API_KEY": "   "})

        assert settings.openai_api_key is None

    def test_null_sections_tolerated(self):
        settings = Settings.from_config({"openai": None, "health": None}, environ={})

        assert settings.model == "gpt-4o-mini"


class TestSettingsRepr:

    def test_key_never_printed(self):
        settings = Settings(openai_api_key="sk-secret-value")

        text = repr(settings)

        assert "sk-secret-value" not in text
        assert "<set>" in text

    def test_missing_key(self):
        assert "<missing>" in repr(Settings())
