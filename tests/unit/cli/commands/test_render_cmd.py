"""Unit tests for the 'render' command."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from scopeview.cli.commands.render import render
from scopeview.config import ViewerConfig


class TestRenderCommand:
    def test_writes_html(self, graph_file, tmp_path):
        output = tmp_path / "out.html"
        result = CliRunner().invoke(render, [str(graph_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
        assert "Generated" in result.output
        assert "3 nodes, 1 scopes, 2 edges" in result.output

    def test_json_mode(self, graph_file):
        result = CliRunner().invoke(render, [str(graph_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        ids = {item["data"]["id"] for item in data["elements"]}
        assert {"scope:dense", "node:input", "edge:1"} <= ids

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(render, [str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_dangling_edge_reported(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({
            "nodes": [{"id": 0, "name": "a", "op": "Const"}],
            "edges": [{"id": 7, "scr_node_id": 0, "dst_node_id": 3}],
        }))
        result = CliRunner().invoke(render, [str(path), "--json"])

        assert result.exit_code == 1
        assert "Unknown node id 3 referenced by edge 7" in result.output

    def test_unsupported_suffix(self, graph_file, tmp_path):
        result = CliRunner().invoke(render, [str(graph_file), "-o", str(tmp_path / "g.svg")])
        assert result.exit_code == 1

    @patch("scopeview.cli.commands.render.open_visualization")
    def test_open(self, mock_open, graph_file, tmp_path):
        result = CliRunner().invoke(render, [str(graph_file), "-o", str(tmp_path / "g.html"), "--open"])

        assert result.exit_code == 0
        mock_open.assert_called_once()

    def test_configured_window_reaches_page(self, graph_file, tmp_path):
        output = tmp_path / "g.html"
        result = CliRunner().invoke(render, [str(graph_file), "-o", str(output)],
                                    obj=ViewerConfig(debounce_window=0.25))

        assert result.exit_code == 0
        assert "const DOUBLE_CLICK_MS = 250;" in output.read_text()

    @patch("scopeview.render.html.webbrowser.open")
    def test_open_uses_configured_window(self, mock_browser, graph_file, tmp_path):
        output = tmp_path / "g.html"
        result = CliRunner().invoke(render, [str(graph_file), "-o", str(output), "--open"],
                                    obj=ViewerConfig(debounce_window=0.25))

        assert result.exit_code == 0
        mock_browser.assert_called_once()
        assert "const DOUBLE_CLICK_MS = 250;" in output.read_text()
