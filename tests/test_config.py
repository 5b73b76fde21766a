"""
Tests for configuration loading.
"""

import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nestif.core.config import Config, find_config
from nestif.core.errors import ConfigError


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        """Without a file the documented defaults apply."""
        config = Config.load(None)
        assert config.min_complexity() == 1
        assert config.skip_nil_guards() is False
        assert config.exclude_dirs() == []
        assert config.workers() == 4
        assert config.output_format() == "text"
        assert config.top() == 10

    def test_yaml_overrides_merge(self, tmp_path):
        """A YAML file overrides single keys and keeps the rest."""
        path = tmp_path / ".nestif.yaml"
        path.write_text("checker:\n  min_complexity: 3\nfiles:\n  exclude_dirs:\n    - vendor\n")
        config = Config.load(str(path))
        assert config.min_complexity() == 3
        assert config.skip_nil_guards() is False
        assert config.exclude_dirs() == ["vendor"]
        assert config.top() == 10

    def test_json_file(self, tmp_path):
        """JSON files are accepted too."""
        path = tmp_path / "nestif.json"
        path.write_text('{"reporting": {"format": "json", "top": 3}}')
        config = Config.load(str(path))
        assert config.output_format() == "json"
        assert config.top() == 3

    def test_missing_file(self, tmp_path):
        """Naming a file that does not exist is an error."""
        with pytest.raises(FileNotFoundError):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_malformed_file(self, tmp_path):
        """Unparseable files raise ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("checker: [unclosed\n")
        with pytest.raises(ConfigError):
            Config.load(str(path))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"checker": {"min_complexity": -1}},
            {"checker": {"min_complexity": "high"}},
            {"reporting": {"top": -2}},
            {"reporting": {"format": "sarif"}},
            {"files": {"workers": 0}},
            {"checker": {"min_complexity": True}},
            {"reporting": {"top": False}},
            {"files": {"workers": True}},
        ],
    )
    def test_invalid_values(self, overrides):
        """Out-of-range values are rejected."""
        with pytest.raises(ConfigError):
            Config.load(None).with_overrides(overrides)

    def test_yaml_boolean_is_not_a_number(self, tmp_path):
        """``top: false`` in YAML is rejected rather than read as 0."""
        path = tmp_path / ".nestif.yaml"
        path.write_text("reporting:\n  top: false\n")
        with pytest.raises(ConfigError, match="top must be a non-negative integer"):
            Config.load(str(path))

    def test_discovery(self, tmp_path):
        """Config files are found in parent directories."""
        (tmp_path / ".nestif.yml").write_text("reporting:\n  top: 1\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(str(nested)) == str(tmp_path.resolve() / ".nestif.yml")
        assert Config.discover(str(nested)).top() == 1
