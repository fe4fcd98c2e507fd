"""Tests for the checkstyle configuration model."""

import json

import pytest
from pydantic import ValidationError

from gocheckstyle.config import (
    DEFAULT_CONFIG,
    CheckstyleConfig,
    load_config,
    load_config_file,
)
from gocheckstyle.errors import ConfigError


class TestCheckstyleConfig:
    """Tests for CheckstyleConfig defaults and values."""

    def test_default_values(self):
        """Every rule is disabled by default."""
        config = CheckstyleConfig()
        assert config.file_line == 0
        assert config.func_line == 0
        assert config.params_num == 0
        assert config.results_num == 0
        assert config.formated is False
        assert config.pkg_name is False
        assert config.camel_name is False
        assert config.fatal == []
        assert config.ignore == []

    def test_fatal_tags(self):
        config = CheckstyleConfig(fatal=["formated", "camel_name", "formated"])
        assert config.fatal_tags == frozenset({"formated", "camel_name"})

    def test_config_is_immutable(self):
        config = CheckstyleConfig(file_line=10)
        with pytest.raises(ValidationError):
            config.file_line = 20


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_options(self):
        data = json.dumps(
            {
                "file_line": 100,
                "func_line": 20,
                "params_num": 3,
                "results_num": 2,
                "formated": True,
                "pkg_name": True,
                "camel_name": True,
                "fatal": ["formated"],
                "ignore": ["vendor/*"],
            }
        )
        config = load_config(data)
        assert config.file_line == 100
        assert config.func_line == 20
        assert config.params_num == 3
        assert config.results_num == 2
        assert config.formated is True
        assert config.pkg_name is True
        assert config.camel_name is True
        assert config.fatal == ["formated"]
        assert config.ignore == ["vendor/*"]

    def test_accepts_bytes(self):
        config = load_config(b'{"func_line": 5}')
        assert config.func_line == 5

    def test_unknown_keys_ignored(self):
        config = load_config('{"file_line": 3, "_file_line_comment": "x", "bogus": 1}')
        assert config.file_line == 3
        assert not hasattr(config, "bogus")

    def test_absent_keys_mean_disabled(self):
        config = load_config("{}")
        assert config == CheckstyleConfig()

    def test_malformed_json(self):
        with pytest.raises(ConfigError):
            load_config('{"file_line": ')

    def test_non_object_document(self):
        with pytest.raises(ConfigError):
            load_config("[1, 2, 3]")

    def test_wrong_value_type(self):
        with pytest.raises(ConfigError):
            load_config('{"file_line": "many"}')

    def test_negative_threshold_rejected(self):
        with pytest.raises(ConfigError):
            load_config('{"params_num": -1}')

    def test_default_config(self):
        """The built-in document matches the documented defaults."""
        config = load_config(DEFAULT_CONFIG)
        assert config.file_line == 200
        assert config.func_line == 50
        assert config.params_num == 4
        assert config.results_num == 3
        assert config.formated is True
        assert config.pkg_name is True
        assert config.camel_name is True
        assert config.ignore == ["tmp/*", "src/tmp.go"]
        assert config.fatal == ["formated"]

    def test_reserved_options_accepted(self):
        """func_comment and max_indent are configured but inert."""
        config = load_config('{"func_comment": true, "max_indent": 4}')
        assert config.func_comment is True
        assert config.max_indent == 4


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "checkstyle.json"
        path.write_text('{"camel_name": true}')
        config = load_config_file(path)
        assert config.camel_name is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config_file(tmp_path / "missing.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json")
        with pytest.raises(ConfigError):
            load_config_file(path)
