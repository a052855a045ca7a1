"""
Mind map settings.

Environment-driven defaults for the client, the API server and the HTML
exporter, plus the layout and physics constants used when building a graph.
"""

import os

# API / client
API_BASE_URL = os.environ.get("MINDMAP_API_URL", "http://localhost:3001")
API_TOKEN = os.environ.get("MINDMAP_API_TOKEN") or None
HTTP_TIMEOUT = float(os.environ.get("MINDMAP_HTTP_TIMEOUT", "30"))

# API server
DATA_DIR = os.environ.get("MINDMAP_DATA_DIR", "data/matters")
SERVER_PORT = int(os.environ.get("MINDMAP_PORT", "8085"))

FETCH_ERROR_MESSAGE = "Failed to load mind map data"

# Labels
WRAP_LENGTH = 12  # Max characters per label line
ADDRESS_LABEL_MAX = 25
CASE_LABEL_LINE = 15
TOOLTIP_CASE_LIMIT = 3  # Court cases listed in a company tooltip
TOOLTIP_LINK_LIMIT = 5  # Linked entities listed in an address tooltip

# Cluster seeding
CLUSTER_SPACING = 800  # Distance from origin to each cluster center
NODE_RADIUS_STEP = 15  # Radius grows with component size...
MAX_CLUSTER_RADIUS = 150  # ...up to this cap

# Tooltip
TOOLTIP_OFFSET_Y = 10  # Pixels above the node

# Physics: initial high-energy stabilization
STABILIZATION_ITERATIONS = 200

INITIAL_OPTIONS = {
    "physics": {
        "enabled": True,
        "stabilization": {
            "enabled": True,
            "iterations": STABILIZATION_ITERATIONS,
            "fit": True,
        },
        "barnesHut": {
            "gravitationalConstant": -2000,
            "centralGravity": 0.1,
            "springLength": 300,
            "springConstant": 0.04,
            "damping": 0.15,
            "avoidOverlap": 1.2,
        },
        "maxVelocity": 50,
        "minVelocity": 0.1,
        "solver": "barnesHut",
        "timestep": 0.5,
    },
    "layout": {
        "improvedLayout": True,
        "hierarchical": {"enabled": False},
    },
    "interaction": {
        "hover": True,
        "tooltipDelay": 100,
        "zoomView": True,
        "dragView": True,
        "dragNodes": True,
        "navigationButtons": True,
        "keyboard": True,
    },
    "edges": {
        "smooth": {
            "enabled": True,
            "type": "continuous",
            "roundness": 0.5,
            "forceDirection": "none",
        },
        "endPointOffset": {"to": 0},
        "selectionWidth": 3,
        "font": {
            "align": "middle",
            "color": "#2D3748",
            "size": 12,
            "face": "Arial",
            "strokeWidth": 2,
            "strokeColor": "#FFFFFF",
            "background": "#FFFFFF",
            "bold": "bold",
            "vadjust": 0,
        },
        "labelHighlightBold": True,
        "shadow": {"enabled": True, "color": "rgba(0,0,0,0.1)", "size": 3, "x": 1, "y": 1},
        "selfReferenceSize": 20,
    },
    "nodes": {
        "borderWidth": 2,
        "shadow": {"enabled": True, "color": "rgba(0,0,0,0.2)", "size": 5, "x": 2, "y": 2},
    },
}

# Physics: low-energy mode after stabilization. Settled nodes stay put but
# edges still reroute while a node is dragged.
SETTLED_PHYSICS = {
    "physics": {
        "enabled": True,
        "stabilization": {"enabled": False},
        "barnesHut": {
            "gravitationalConstant": -100,
            "centralGravity": 0.02,
            "springLength": 300,
            "springConstant": 0.005,
            "damping": 0.9,
            "avoidOverlap": 1.2,
        },
        "maxVelocity": 5,
        "minVelocity": 0.05,
        "solver": "barnesHut",
        "timestep": 0.2,
    },
}

FIT_OPTIONS = {"animation": False}
