"""
Connected-component clustering and seed layout.

The physics solver only applies local attraction and repulsion, so two
unrelated sub-networks that start interleaved stay tangled. Before handing
the graph over, each connected component gets its own center on a large
circle and its members are spread on a small circle around that center.
"""

import logging
from collections import defaultdict

import networkx as nx
import numpy as np

from .config import CLUSTER_SPACING, MAX_CLUSTER_RADIUS, NODE_RADIUS_STEP

logger = logging.getLogger(__name__)


def build_adjacency(nodes, edges):
    """Undirected view of the materialized graph, in node order."""
    G = nx.Graph()
    G.add_nodes_from(node["id"] for node in nodes)
    for edge in edges:
        if edge["from"] in G and edge["to"] in G:
            G.add_edge(edge["from"], edge["to"])
    return G


def find_components(nodes, edges, G=None):
    """Map node id -> component id.

    Components are numbered in the order their first node appears; members
    are recorded in depth-first preorder from that node.
    """
    if G is None:
        G = build_adjacency(nodes, edges)

    component_of = {}
    component_id = 0
    for node_id in G.nodes:
        if node_id in component_of:
            continue
        # dfs_preorder_nodes walks with an explicit stack
        for member in nx.dfs_preorder_nodes(G, node_id):
            component_of[member] = component_id
        component_id += 1
    return component_of


def component_members(component_of):
    """Group node ids by component id, keeping traversal order."""
    members = defaultdict(list)
    for node_id, component_id in component_of.items():
        members[component_id].append(node_id)
    return dict(members)


def seed_positions(component_of, spacing=CLUSTER_SPACING,
                   radius_step=NODE_RADIUS_STEP, max_radius=MAX_CLUSTER_RADIUS):
    """Initial (x, y) per node that keeps components apart."""
    members = component_members(component_of)
    n_components = max(len(members), 1)

    positions = {}
    for component_id, node_ids in members.items():
        angle = 2 * np.pi * component_id / n_components
        cx = spacing * np.cos(angle)
        cy = spacing * np.sin(angle)

        size = len(node_ids)
        radius = min(size * radius_step, max_radius)
        node_angles = 2 * np.pi * np.arange(size) / size
        xs = cx + radius * np.cos(node_angles)
        ys = cy + radius * np.sin(node_angles)

        for node_id, x, y in zip(node_ids, xs, ys):
            positions[node_id] = (float(x), float(y))

    return positions


def assign_seed_positions(nodes, edges):
    """Cluster the graph and write seed x/y into each node descriptor."""
    G = build_adjacency(nodes, edges)
    component_of = find_components(nodes, edges, G)
    positions = seed_positions(component_of)

    for node in nodes:
        node["x"], node["y"] = positions[node["id"]]

    logger.debug(
        "Seeded %d nodes across %d components",
        len(positions), len(set(component_of.values())),
    )
    return component_of
