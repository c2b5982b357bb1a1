"""Tests for Inner configuration."""

import pytest

from inner import Inner, InnerConfig


class TestInnerConfig:
    """Test configuration defaults, validation and YAML files."""

    def test_defaults(self):
        """Test default values."""
        config = InnerConfig()

        assert config.cache_size == 128
        assert config.label_max_length == 80
        assert config.include_location is True

    @pytest.mark.parametrize("kwargs,message", [
        ({"cache_size": -1}, r"cache_size must not be negative"),
        ({"label_max_length": 3}, r"label_max_length must be at least 4"),
    ])
    def test_validation(self, kwargs, message):
        """Test that invalid values are rejected."""
        with pytest.raises(ValueError, match=message):
            InnerConfig(**kwargs)

    @pytest.mark.parametrize("data,message", [
        ({"cache_size": "big"}, r"cache_size must be int, got str: 'big'"),
        ({"cache_size": True}, r"cache_size must be int, got bool"),
        ({"label_max_length": 1.5}, r"label_max_length must be int, got float"),
        ({"include_location": "yes"}, r"include_location must be bool, got str"),
    ])
    def test_from_dict_rejects_wrong_types(self, data, message):
        """Test that values of the wrong type are reported as ValueError."""
        with pytest.raises(ValueError, match=message):
            InnerConfig.from_dict(data)

    def test_load_wrong_type(self, tmp_path):
        """Test a YAML file with a value of the wrong type."""
        path = tmp_path / "inner.yaml"
        path.write_text("cache_size: big\n", encoding="utf-8")

        with pytest.raises(ValueError, match=r"cache_size must be int"):
            InnerConfig.load_from_file(str(path))

    def test_from_dict_rejects_unknown_keys(self):
        """Test that misspelt keys are reported."""
        with pytest.raises(ValueError, match=r"Unknown configuration keys: cache, colour"):
            InnerConfig.from_dict({"colour": "red", "cache": 1})

    def test_save_and_load(self, tmp_path):
        """Test a YAML round trip through a file."""
        path = tmp_path / "inner.yaml"
        InnerConfig(cache_size=4, label_max_length=20, include_location=False).save_to_file(str(path))

        assert path.read_text(encoding="utf-8").startswith("cache_size: 4\n")

        config = InnerConfig.load_from_file(str(path))
        assert config == InnerConfig(cache_size=4, label_max_length=20, include_location=False)

    def test_load_partial_file(self, tmp_path):
        """Test that missing keys keep their defaults."""
        path = tmp_path / "inner.yaml"
        path.write_text("include_location: false\n", encoding="utf-8")

        config = InnerConfig.load_from_file(str(path))

        assert config.include_location is False
        assert config.cache_size == 128

    def test_load_empty_file(self, tmp_path):
        """Test that an empty file gives the defaults."""
        path = tmp_path / "inner.yaml"
        path.write_text("", encoding="utf-8")

        assert InnerConfig.load_from_file(str(path)) == InnerConfig()

    def test_load_missing_file(self, tmp_path):
        """Test a missing configuration file."""
        with pytest.raises(FileNotFoundError):
            InnerConfig.load_from_file(str(tmp_path / "missing.yaml"))

    def test_load_non_mapping(self, tmp_path):
        """Test a file that does not hold a mapping."""
        path = tmp_path / "inner.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match=r"must contain a mapping"):
            InnerConfig.load_from_file(str(path))

    def test_facade_uses_config(self):
        """Test that the facade passes settings to its diagnostics."""
        facade = Inner(InnerConfig(label_max_length=12, include_location=False))

        assert facade.runtime.strategy.diagnostic.label_max_length == 12
        assert facade.runtime.strategy.diagnostic.include_location is False
