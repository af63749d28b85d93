"""Unit tests for configuration loading."""

import pytest

from scopeview.config import DISPLAY_THRESHOLD, ViewerConfig, load_config
from scopeview.core.errors import ConfigError


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == ViewerConfig()
        assert config.display_threshold == DISPLAY_THRESHOLD

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("display_threshold: 3\ndebounce_window: 0.25\nunrelated: true\n")

        config = load_config(path)

        assert config.display_threshold == 3
        assert config.debounce_window == 0.25
        assert config.path_separator == "/"

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("debounce_window: -1\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)
