"""
Matter Mind Map - knowledge graph construction for matter entities.

Usage:
    from mindmap import EntityCatalog, build_graph, VisibilityFilter

    catalog = EntityCatalog.from_payload(response["data"])
    graph = build_graph(catalog, VisibilityFilter(addresses=False))
    graph.nodes, graph.edges  # descriptors with seed x/y
"""

__version__ = "0.1.0"

from .catalog import CATEGORIES, EntityCatalog
from .client import MindMapClient, MindMapFetchError
from .clustering import assign_seed_positions, find_components, seed_positions
from .graph import MindMapGraph, build_graph
from .page import MindMapPage, PageState, open_mind_map
from .session import MindMapSession, SessionError
from .text_wrap import wrap
from .tooltip import Tooltip, TooltipCoordinator
from .visibility import VisibilityFilter

__all__ = [
    "CATEGORIES",
    "EntityCatalog",
    "MindMapClient",
    "MindMapFetchError",
    "assign_seed_positions",
    "find_components",
    "seed_positions",
    "MindMapGraph",
    "build_graph",
    "MindMapPage",
    "PageState",
    "open_mind_map",
    "MindMapSession",
    "SessionError",
    "wrap",
    "Tooltip",
    "TooltipCoordinator",
    "VisibilityFilter",
]
