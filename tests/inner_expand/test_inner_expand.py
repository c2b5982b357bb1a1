"""Tests for the inner_expand command-line tool."""

import importlib.util
import io
from pathlib import Path

import pytest


TOOL_PATH = Path(__file__).parent.parent.parent / "tools" / "inner_expand" / "inner_expand.py"


@pytest.fixture(scope="module")
def tool():
    """Load the tool script as a module."""
    spec = importlib.util.spec_from_file_location("inner_expand", TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestInnerExpand:
    """Test the inner_expand entry point."""

    def test_full_directive(self, tool, capsys):
        """Test expanding a 'name!(...)' directive."""
        assert tool.main(["inner!(x)"]) == 0

        output = capsys.readouterr().out
        assert output.startswith("def __inner_expansion__(__inner_runtime__, __inner_location__):\n")
        assert "return __inner_runtime__.inner(" in output

    def test_directive_option(self, tool, capsys):
        """Test expanding a bare argument list."""
        assert tool.main(["--directive", "ok", "fruit, if Fruit.Apple, or |e| e + 70"]) == 0

        output = capsys.readouterr().out
        assert "return __inner_runtime__.ok(" in output
        assert "return e + 70" in output

    def test_stdin(self, tool, capsys, monkeypatch):
        """Test reading the directive from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("some!(x)\n"))

        assert tool.main(["-"]) == 0
        assert "__inner_runtime__.some(" in capsys.readouterr().out

    def test_invalid_directive(self, tool, capsys):
        """Test that errors are reported on stderr."""
        assert tool.main(["--directive", "some", "x, if A, or { 1 }"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error expanding directive" in captured.err
        assert "'or' clause is only valid in ok!" in captured.err

    def test_config_file(self, tool, capsys, tmp_path):
        """Test loading a configuration file."""
        config = tmp_path / "inner.yaml"
        config.write_text("cache_size: 0\n", encoding="utf-8")

        assert tool.main(["--config", str(config), "inner!(x)"]) == 0
        assert "__inner_expansion__" in capsys.readouterr().out

    def test_bad_config_file(self, tool, capsys, tmp_path):
        """Test an invalid configuration file."""
        config = tmp_path / "inner.yaml"
        config.write_text("colour: red\n", encoding="utf-8")

        assert tool.main(["--config", str(config), "inner!(x)"]) == 1
        assert "Unknown configuration keys: colour" in capsys.readouterr().err

    def test_config_file_with_wrong_type(self, tool, capsys, tmp_path):
        """Test that a wrongly typed configuration value is reported, not raised."""
        config = tmp_path / "inner.yaml"
        config.write_text("cache_size: big\n", encoding="utf-8")

        assert tool.main(["--config", str(config), "inner!(x)"]) == 1
        assert "cache_size must be int" in capsys.readouterr().err
