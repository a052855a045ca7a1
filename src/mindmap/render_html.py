#!/usr/bin/env python3
"""
Standalone Mind Map HTML Generator

Builds the mind map for a matter and writes a self-contained vis-network
page:
- seeded cluster layout so unrelated networks start apart
- bounded stabilization, then low-energy physics for smooth dragging
- hover tooltip that follows its node while it moves
- legend for node colours and edge styles

Usage:
    mindmap-html --input data/matters/42.json --output output/html/matter_42.html
    mindmap-html --matter 42 --output output/html/matter_42.html --hide addresses
"""

import argparse
import html
import json
import logging
from pathlib import Path

from .catalog import CATEGORIES, EntityCatalog
from .client import MindMapClient, MindMapFetchError
from .config import (
    API_BASE_URL,
    API_TOKEN,
    FIT_OPTIONS,
    INITIAL_OPTIONS,
    SETTLED_PHYSICS,
    STABILIZATION_ITERATIONS,
)
from .graph import build_graph
from .models import MindMapData
from .styles import COLORS
from .visibility import VisibilityFilter

VIS_NETWORK_URL = "https://unpkg.com/vis-network/standalone/umd/vis-network.min.js"

LEGEND = [
    ("company", "Company"),
    ("company_good", "Company with no ATO debt"),
    ("company_alert", "Company with ATO debt or court cases"),
    ("ceased_company", "Ceased company"),
    ("person", "Person (Director/Office Holder/Secretary)"),
    ("ceased_person", "Former person"),
    ("shareholder", "Shareholder"),
    ("address", "Address"),
    ("court_case", "Court case"),
    ("bankruptcy", "Bankruptcy"),
    ("no_bankruptcy", "No bankruptcy"),
]


def load_json_data(filepath):
    """Load a matter payload: the response envelope or the bare data object."""
    with open(filepath, "r") as f:
        return json.load(f)


def split_payload(payload):
    """Return (matter name, data dict) from an envelope or a bare data object."""
    if "entities" in payload:
        return payload.get("matterName", ""), payload
    return payload.get("matterName", ""), payload.get("data") or {}


def _script_json(value):
    # Keep "</script>" inside strings from closing the tag
    return json.dumps(value).replace("</", "<\\/")


def generate_mindmap_html(graph, title, matter_name=""):
    """Generate the vis-network page for a built graph."""
    legend_items = "\n".join(
        f'            <div class="legend-item"><span class="swatch" style="background:{COLORS[key]["background"]}"></span>{label}</div>'
        for key, label in LEGEND
    )

    html_page = f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{html.escape(title)}</title>
    <link rel="icon" href="data:,">
    <script src="{VIS_NETWORK_URL}"></script>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #f9fafb; }}
        header {{ background: #fff; border-bottom: 1px solid #e5e7eb; padding: 16px 24px; }}
        header h1 {{ font-size: 22px; color: #111827; }}
        header p {{ color: #4b5563; margin-top: 4px; }}
        #graph-wrapper {{ position: relative; height: calc(100vh - 160px); }}
        #graph {{ width: 100%; height: 100%; background: #fff; border: 2px solid #e5e7eb; }}
        #tooltip {{
            position: absolute; display: none; z-index: 50;
            background: #111827; color: #fff; padding: 8px 12px; border-radius: 8px;
            max-width: 320px; font-size: 13px; line-height: 1.5;
            transform: translate(-50%, -100%); margin-top: -8px;
            box-shadow: 0 8px 24px rgba(0,0,0,0.25);
        }}
        #tooltip a {{ color: #93c5fd; }}
        #legend {{ background: #fff; border-top: 1px solid #e5e7eb; padding: 12px 24px; display: flex; flex-wrap: wrap; gap: 16px; font-size: 13px; color: #374151; }}
        .legend-item {{ display: flex; align-items: center; gap: 6px; }}
        .swatch {{ width: 14px; height: 14px; border-radius: 50%; display: inline-block; }}
        .edge-note {{ color: #6b7280; font-size: 12px; }}
    </style>
</head>
<body>
    <header>
        <h1>Knowledge Map</h1>
        <p>{html.escape(matter_name or "")}</p>
    </header>
    <div id="graph-wrapper">
        <div id="graph"></div>
        <div id="tooltip"></div>
    </div>
    <div id="legend">
{legend_items}
        <div class="edge-note">Solid = confirmed &middot; Dashed = former/ceased &middot; Dotted (XX%) = probable match (name only, no DOB)</div>
    </div>

    <script>
        const nodes = new vis.DataSet({_script_json(graph.nodes)});
        const edges = new vis.DataSet({_script_json(graph.edges)});
        const initialOptions = {_script_json(INITIAL_OPTIONS)};
        const settledPhysics = {_script_json(SETTLED_PHYSICS)};
        const fitOptions = {_script_json(FIT_OPTIONS)};
        const stabilizationIterations = {STABILIZATION_ITERATIONS};

        const container = document.getElementById('graph');
        const tooltip = document.getElementById('tooltip');
        const network = new vis.Network(container, {{ nodes, edges }}, initialOptions);

        // Tooltip follows the hovered node
        let hoveredNode = null;

        function updateTooltip() {{
            if (hoveredNode === null) return;
            const node = nodes.get(hoveredNode);
            const position = network.getPositions([hoveredNode])[hoveredNode];
            if (!node || !node.title || !position) return;
            const dom = network.canvasToDOM(position);
            tooltip.innerHTML = node.title;
            tooltip.style.left = dom.x + 'px';
            tooltip.style.top = (dom.y - 10) + 'px';
            tooltip.style.display = 'block';
        }}

        function hideTooltip() {{
            hoveredNode = null;
            tooltip.style.display = 'none';
        }}

        network.on('hoverNode', (params) => {{
            const node = nodes.get(params.node);
            if (!node || !node.title) {{
                hideTooltip();
                return;
            }}
            hoveredNode = params.node;
            updateTooltip();
        }});
        network.on('blurNode', hideTooltip);
        container.addEventListener('mousemove', updateTooltip);
        container.addEventListener('mouseleave', hideTooltip);

        // Two-phase layout: stabilize, then keep nodes still but let edges reroute
        let settled = false;

        function settle() {{
            if (settled) return;
            settled = true;
            network.setOptions(settledPhysics);
        }}

        network.on('stabilizationProgress', (params) => {{
            if (params.iterations >= stabilizationIterations) settle();
            updateTooltip();
        }});
        network.on('stabilizationEnd', () => {{
            if (settled) return;
            network.fit(fitOptions);
            settle();
            updateTooltip();
        }});
        network.on('dragStart', () => {{
            network.setOptions(settledPhysics);
            updateTooltip();
        }});
        network.on('dragEnd', () => {{
            network.redraw();
            updateTooltip();
        }});
    </script>
</body>
</html>'''

    return html_page


def generate_visualization(payload, output_path, hidden=(), title=None):
    """Build the graph for a payload and write the HTML page."""
    matter_name, data = split_payload(payload)
    catalog = EntityCatalog(MindMapData.model_validate(data))
    visibility = VisibilityFilter(**{category: False for category in hidden})
    graph = build_graph(catalog, visibility)

    print(f"Built graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges, {graph.component_count} clusters")

    page = generate_mindmap_html(graph, title or f"Knowledge Map - {matter_name or 'Matter'}", matter_name)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w") as f:
        f.write(page)

    print(f"Generated mind map: {output_file}")
    return str(output_file)


def main():
    parser = argparse.ArgumentParser(description="Generate a standalone matter mind map page")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", "-i", help="Mind map JSON file (response envelope or data object)")
    source.add_argument("--matter", "-m", type=int, help="Matter id to fetch from the API")
    parser.add_argument("--output", "-o", required=True, help="Output HTML file")
    parser.add_argument("--hide", action="append", default=[], choices=CATEGORIES,
                        help="Hide an entity category (repeatable)")
    parser.add_argument("--api-url", default=API_BASE_URL, help="API base URL for --matter")
    parser.add_argument("--title", help="Page title")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.input:
        payload = load_json_data(args.input)
        print(f"Loaded {args.input}")
    else:
        client = MindMapClient(base_url=args.api_url, token=API_TOKEN)
        try:
            response = client.fetch(args.matter)
        except MindMapFetchError as exc:
            print(f"Error: {exc.message}")
            raise SystemExit(1)
        payload = {
            "matterName": response.matter_name or "",
            "data": response.data.model_dump(mode="json", by_alias=True, exclude_none=True),
        }
        print(f"Fetched matter {args.matter}")

    generate_visualization(payload, args.output, hidden=args.hide, title=args.title)


if __name__ == "__main__":
    main()
