"""Unit tests for the 'tensor' command."""

import json

import pytest
from click.testing import CliRunner

from scopeview.cli.commands.tensor import tensor


@pytest.fixture
def write_value(tmp_path):
    def _write(value):
        path = tmp_path / "value.json"
        path.write_text(json.dumps(value))
        return str(path)
    return _write


class TestTensorCommand:
    def test_inline(self, write_value):
        result = CliRunner().invoke(tensor, [write_value({"Only": ["I32", [2, 2], [1, 2, 3, 4]]})])

        assert result.exit_code == 0
        assert "[[1, 2], [3, 4]]" in result.output

    def test_unknown(self, write_value):
        result = CliRunner().invoke(tensor, [write_value("Unknown")])
        assert "depends on input" in result.output

    def test_large_value_lists_actions(self, write_value):
        result = CliRunner().invoke(tensor, [write_value({"Only": ["F32", [8], list(range(8))]})])

        assert result.exit_code == 0
        assert "shape:[8] F32" in result.output
        assert "reveal, export" in result.output

    def test_nested_content_reported(self, write_value):
        result = CliRunner().invoke(tensor, [write_value({"Only": ["F32", [2], [[1, 2], [3, 4]]]})])

        assert result.exit_code == 1
        assert "content item 0 is not a scalar" in result.output

    def test_threshold_option(self, write_value):
        path = write_value({"Only": ["F32", [3], [1, 2, 3]]})
        result = CliRunner().invoke(tensor, [path, "--threshold", "2"])
        assert "shape:[3] F32" in result.output

    def test_export(self, write_value, tmp_path):
        out_dir = tmp_path / "exports"
        path = write_value({"Only": ["I32", [2, 2], [1, 2, 3, 4]]})
        result = CliRunner().invoke(tensor, [path, "--export", str(out_dir)])

        assert result.exit_code == 0
        assert json.loads((out_dir / "tensor.json").read_text()) == [[1, 2], [3, 4]]

    def test_mismatch_fails(self, write_value):
        result = CliRunner().invoke(tensor, [write_value({"Only": ["F32", [3], [1, 2]]})])

        assert result.exit_code == 1
        assert "shape holds 3 elements" in result.output
