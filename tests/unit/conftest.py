"""Shared fixtures."""

import json

import pytest


@pytest.fixture
def graph_file(tmp_path):
    """A small raw graph JSON file in the engine's wire format."""
    payload = {
        "nodes": [
            {"id": 0, "name": "input", "op": "Placeholder", "op_name": "Placeholder", "other": {}},
            {"id": 1, "name": "dense/kernel", "op": "Const", "op_name": "Const",
             "other": {"value": {"Only": ["F32", [2], [0.5, 1.5]]}}},
            {"id": 2, "name": "dense/matmul", "op": "MatMul", "op_name": "MatMul", "other": {}},
        ],
        "edges": [
            {"id": 0, "scr_node_id": 0, "dst_node_id": 2, "label": [1, 2], "other": {}},
            {"id": 1, "scr_node_id": 1, "dst_node_id": 2, "other": {}},
        ],
    }
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(payload))
    return path
