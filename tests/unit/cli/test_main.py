"""Unit tests for the CLI entry point."""

from click.testing import CliRunner

from scopeview.cli.main import main


class TestMain:
    def test_help_lists_commands(self):
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        for name in ("render", "inspect", "tensor"):
            assert name in result.output

    def test_config_applies(self, graph_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("display_threshold: 0\n")
        value = tmp_path / "value.json"
        value.write_text('{"Only": ["F32", [2], [1, 2]]}')

        result = CliRunner().invoke(main, ["--config", str(config), "tensor", str(value)])

        assert result.exit_code == 0
        assert "shape:[2] F32" in result.output

    def test_bad_config(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("display_threshold: -4\n")
        value = tmp_path / "value.json"
        value.write_text('"Unknown"')

        result = CliRunner().invoke(main, ["--config", str(config), "tensor", str(value)])
        assert result.exit_code != 0
