"""
Full graph build for one matter.

Every data change or visibility toggle runs build_graph again from the
catalog; nothing is patched in place.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .clustering import assign_seed_positions
from .edges import relationship_edges
from .nodes import (
    address_node,
    bankruptcy_node,
    company_facts,
    company_node,
    person_node,
    shareholder_node,
)
from .visibility import VisibilityFilter

logger = logging.getLogger(__name__)


@dataclass
class MindMapGraph:
    """Node and edge descriptors ready for the render engine."""

    nodes: list = field(default_factory=list)
    edges: list = field(default_factory=list)
    components: dict = field(default_factory=dict)

    def __post_init__(self):
        self._index = {node["id"]: node for node in self.nodes}

    def node(self, node_id) -> Optional[dict]:
        return self._index.get(node_id)

    def tooltip(self, node_id) -> Optional[str]:
        node = self._index.get(node_id)
        return node.get("title") if node else None

    @property
    def component_count(self):
        return len(set(self.components.values()))

    def data(self):
        """The {nodes, edges} payload handed to the render engine."""
        return {"nodes": self.nodes, "edges": self.edges}


def build_graph(catalog, visibility=None) -> MindMapGraph:
    """Build nodes, edges and seed positions for the visible categories."""
    if visibility is None:
        visibility = VisibilityFilter()

    nodes = []
    edges = []
    node_ids = set()
    edge_ids = set()
    seen_cases = set()

    def add_node(node):
        if node["id"] in node_ids:
            logger.debug("Node %s already on the graph", node["id"])
            return
        node_ids.add(node["id"])
        nodes.append(node)

    def add_edge(edge):
        # The same fact referenced twice collapses into one edge
        if edge["id"] in edge_ids:
            logger.debug("Dropping duplicate edge %s", edge["id"])
            return
        edge_ids.add(edge["id"])
        edges.append(edge)

    if visibility["companies"]:
        for company in catalog.companies:
            add_node(company_node(company))
            fact_nodes, fact_edges = company_facts(company, seen_cases)
            for node in fact_nodes:
                add_node(node)
            for edge in fact_edges:
                add_edge(edge)

    if visibility["persons"]:
        for person in catalog.persons:
            add_node(person_node(person))

    if visibility["shareholders"]:
        for shareholder in catalog.shareholders:
            add_node(shareholder_node(shareholder))

    if visibility["addresses"]:
        for address in catalog.addresses:
            node = address_node(address, node_ids, catalog)
            if node is not None:
                add_node(node)

    if visibility["bankruptcies"]:
        for bankruptcy in catalog.bankruptcies:
            add_node(bankruptcy_node(bankruptcy))

    for edge in relationship_edges(catalog.relationships, node_ids, catalog):
        add_edge(edge)

    components = assign_seed_positions(nodes, edges)
    graph = MindMapGraph(nodes=nodes, edges=edges, components=components)

    logger.info(
        "Built mind map: %d nodes, %d edges, %d clusters (hidden: %s)",
        len(nodes), len(edges), graph.component_count,
        ", ".join(visibility.hidden()) or "none",
    )
    return graph
