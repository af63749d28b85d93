"""
Standalone HTML view of a built graph model.

Embeds the flat element collection into a page driven by cytoscape.js and
its expand-collapse extension. Metanodes start collapsed; a double click
toggles one, a click on a leaf or edge highlights it and shows its
metadata in the side panel.
"""

import json
import logging
import webbrowser
from pathlib import Path
from typing import Any, Union

from ..config import DEBOUNCE_WINDOW_SECONDS, HIGHLIGHT_COLOR
from ..graph.builder import GraphModel
from ..interaction.renderer import HIGHLIGHT_CLASS

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>scopeview</title>
    <script src="https://unpkg.com/cytoscape@3.28.1/dist/cytoscape.min.js"></script>
    <script src="https://unpkg.com/dagre@0.8.5/dist/dagre.min.js"></script>
    <script src="https://unpkg.com/cytoscape-dagre@2.5.0/cytoscape-dagre.js"></script>
    <script src="https://unpkg.com/cytoscape-expand-collapse@4.1.0/cytoscape-expand-collapse.js"></script>
    <style>
        :root {
            --bg-base: #0a0a0a;
            --bg-elevated: #111111;
            --border-subtle: #262626;
            --text-primary: #fafafa;
            --text-secondary: #a1a1aa;
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            --font-mono: "SF Mono", "Fira Code", monospace;
        }
        * { box-sizing: border-box; }
        body {
            margin: 0;
            height: 100vh;
            display: flex;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: var(--font-sans);
        }
        #cy { flex: 1; }
        #inspector {
            width: 360px;
            border-left: 1px solid var(--border-subtle);
            background: var(--bg-elevated);
            padding: 16px;
            overflow-y: auto;
            font-size: 13px;
        }
        #inspector h2 { font-size: 14px; margin: 0 0 12px 0; }
        #inspector pre {
            font-family: var(--font-mono);
            color: var(--text-secondary);
            white-space: pre-wrap;
            word-break: break-all;
        }
    </style>
</head>
<body>
    <div id="cy"></div>
    <div id="inspector"><h2>Nothing selected</h2><pre></pre></div>
    <script>
        const graphData = __GRAPH_DATA__;
        const DOUBLE_CLICK_MS = __DOUBLE_CLICK_MS__;
        const HIGHLIGHT = "__HIGHLIGHT_CLASS__";

        const cy = cytoscape({
            container: document.getElementById("cy"),
            elements: graphData.elements,
            style: [
                { selector: "node", style: {
                    "label": "data(label)", "background-color": "data(color)",
                    "color": "#fafafa", "font-size": 10, "text-valign": "center" } },
                { selector: "node[kind = 'metanode']", style: {
                    "shape": "round-rectangle", "text-valign": "top", "background-opacity": 0.25 } },
                { selector: "edge", style: {
                    "label": "data(label)", "curve-style": "bezier", "target-arrow-shape": "triangle",
                    "line-color": "data(color)", "target-arrow-color": "data(color)",
                    "color": "#a1a1aa", "font-size": 8 } },
                { selector: "." + HIGHLIGHT, style: {
                    "border-width": 3, "border-color": "__HIGHLIGHT_COLOR__",
                    "line-color": "__HIGHLIGHT_COLOR__", "target-arrow-color": "__HIGHLIGHT_COLOR__" } }
            ],
            layout: { name: "dagre" }
        });

        const api = cy.expandCollapse({ layoutBy: { name: "dagre", animate: true }, fisheye: false, animate: true });
        api.collapseAll();

        const inspector = document.getElementById("inspector");
        let highlighted = null;
        let pending = null;

        function clearHighlight() {
            if (highlighted) { highlighted.removeClass(HIGHLIGHT); highlighted = null; }
            inspector.querySelector("h2").textContent = "Nothing selected";
            inspector.querySelector("pre").textContent = "";
        }

        function highlight(ele) {
            if (highlighted) { highlighted.removeClass(HIGHLIGHT); }
            highlighted = ele;
            ele.addClass(HIGHLIGHT);
            inspector.querySelector("h2").textContent = ele.data("path") || ele.id();
            inspector.querySelector("pre").textContent = JSON.stringify(ele.data(), null, 2);
        }

        cy.on("tap", function (evt) {
            const target = evt.target;
            const isMeta = target !== cy && target.isNode() && target.data("kind") === "metanode";
            if (isMeta) {
                if (pending) {
                    clearTimeout(pending);
                    pending = null;
                    if (api.isExpandable(target)) { api.expand(target); } else { api.collapse(target); }
                } else {
                    pending = setTimeout(function () { pending = null; clearHighlight(); }, DOUBLE_CLICK_MS);
                }
                return;
            }
            if (pending) { clearTimeout(pending); pending = null; }
            if (target === cy) { clearHighlight(); } else { highlight(target); }
        });
    </script>
</body>
</html>
"""


def generate_html(model: GraphModel, double_click_window: float = DEBOUNCE_WINDOW_SECONDS) -> str:
    """Generate the HTML page for a graph model."""
    json_data = json.dumps(model.to_dict(), default=str)
    return (
        HTML_TEMPLATE
        .replace("__GRAPH_DATA__", json_data)
        .replace("__DOUBLE_CLICK_MS__", str(int(round(double_click_window * 1000))))
        .replace("__HIGHLIGHT_CLASS__", HIGHLIGHT_CLASS)
        .replace("__HIGHLIGHT_COLOR__", HIGHLIGHT_COLOR)
    )


def write_html(model: GraphModel, output_path: Union[str, Path], **kwargs: Any) -> Path:
    out_file = Path(output_path)
    out_file.write_text(generate_html(model, **kwargs), encoding="utf-8")
    logger.debug(f"Wrote {len(model)} elements to {out_file}")
    return out_file


def open_visualization(model: GraphModel, output_path: str = "graph.html", **kwargs: Any) -> str:
    """Generate and open the visualization in the browser."""
    out_file = write_html(model, output_path, **kwargs)
    webbrowser.open(out_file.resolve().as_uri())
    return str(out_file)
