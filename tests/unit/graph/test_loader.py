"""Unit tests for raw graph loading."""

import json

import pytest

from scopeview.core.errors import GraphModelError
from scopeview.graph.loader import load_raw_graph, parse_raw_graph


class TestLoader:
    def test_wire_field_names(self, tmp_path):
        payload = {
            "nodes": [
                {"id": 0, "name": "a/x", "op": "Const", "op_name": "Const", "other": {}},
                {"id": 1, "name": "a/y", "op": "Relu", "op_name": "Relu", "other": {"k": 1}},
            ],
            "edges": [
                {"id": 0, "scr_node_id": 0, "dst_node_id": 1, "label": [3], "other": {}},
            ],
        }
        path = tmp_path / "graph.json"
        path.write_text(json.dumps(payload))

        raw = load_raw_graph(path)

        assert len(raw.nodes) == 2
        assert raw.nodes[1].other == {"k": 1}
        assert raw.edges[0].source_node_id == 0
        assert raw.edges[0].target_node_id == 1
        assert raw.edges[0].label == [3]

    def test_malformed_record_names_location(self):
        with pytest.raises(GraphModelError) as exc:
            parse_raw_graph({"nodes": [{"id": 0, "op": "Const"}], "edges": []})
        assert "nodes.0.name" in str(exc.value)

    def test_not_an_object(self):
        with pytest.raises(GraphModelError):
            parse_raw_graph([1, 2, 3])

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("{not json")
        with pytest.raises(GraphModelError):
            load_raw_graph(path)
