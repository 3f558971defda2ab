"""Tests for BatchConfig persistence."""

import json

import pytest

from wordbatch.core.config import BatchConfig, load_config, save_config


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "wordbatch.json"


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, config_file):
        assert load_config(config_file) == BatchConfig()

    def test_defaults(self):
        config = BatchConfig()
        assert config.include_filter == "*.doc"
        assert config.target_format == "Default"
        assert config.continue_on_error is False
        assert config.disable_auto_macros is True

    def test_loads_valid_values(self, config_file):
        config_file.write_text(
            json.dumps({"target_format": "pdf", "include_filter": "*.rtf", "continue_on_error": True}),
            encoding="utf-8",
        )

        config = load_config(config_file)

        assert config.target_format == "PDF"
        assert config.include_filter == "*.rtf"
        assert config.continue_on_error is True

    def test_invalid_format_falls_back(self, config_file):
        config_file.write_text(json.dumps({"target_format": "RTF"}), encoding="utf-8")
        assert load_config(config_file).target_format == "Default"

    def test_non_bool_flag_falls_back(self, config_file):
        config_file.write_text(json.dumps({"reset_template": "yes"}), encoding="utf-8")
        assert load_config(config_file).reset_template is False

    def test_blank_filter_falls_back(self, config_file):
        config_file.write_text(json.dumps({"include_filter": "  "}), encoding="utf-8")
        assert load_config(config_file).include_filter == "*.doc"

    def test_corrupt_json_returns_defaults(self, config_file):
        config_file.write_text("{not json", encoding="utf-8")
        assert load_config(config_file) == BatchConfig()

    def test_non_object_returns_defaults(self, config_file):
        config_file.write_text("[1, 2]", encoding="utf-8")
        assert load_config(config_file) == BatchConfig()


class TestSaveConfig:
    def test_round_trip(self, config_file):
        config = BatchConfig(target_format="XPS", instance_per_file=True)

        written = save_config(config, config_file)

        assert written == config_file
        assert load_config(config_file) == config

    def test_creates_parent_dir(self, tmp_path):
        path = tmp_path / "nested" / "wordbatch.json"
        save_config(BatchConfig(), path)
        assert path.exists()
