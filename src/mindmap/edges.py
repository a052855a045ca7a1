"""
Edge construction.

Turns relationship records and derived facts (tax debt, court cases) into
edge descriptors for the render engine. Edge ids are built from
(from, to, type, label) so that parallel edges between the same pair stay
distinct, e.g. a person who is both director and secretary of one company.
"""

import logging
import re

from .formatting import format_date, format_percentage
from .styles import (
    EDGE_COLOR_RULES,
    EDGE_COLORS,
    EDGE_DASH_RULES,
    SOLID,
    edge_color,
    first_match,
)

logger = logging.getLogger(__name__)

SYNTHETIC_SMOOTH = {
    "enabled": True,
    "type": "dynamic",
    "roundness": 0.2,
    "forceDirection": "none",
}


def normalize_label(label):
    return re.sub(r"\s+", "_", label or "")


def edge_id(source, target, rel_type, label):
    return f"edge_{source}_{target}_{rel_type}_{normalize_label(label)}"


def bankruptcy_label(bankruptcy):
    """Edge label for a bankruptcy check: its start date or "no bankruptcy"."""
    if bankruptcy is not None and bankruptcy.is_bankrupt and bankruptcy.from_date:
        return f"from - {format_date(bankruptcy.from_date)}"
    return "no bankruptcy"


def relationship_label(rel, catalog):
    if rel.type == "bankruptcy":
        return bankruptcy_label(catalog.bankruptcy(rel.target))
    if rel.uncertain and rel.similarity_percentage is not None:
        return f"{rel.label} ({format_percentage(rel.similarity_percentage)}%)"
    if rel.uncertain:
        return f"{rel.label} (?)"
    return rel.label


def relationship_edge(rel, catalog):
    """Edge descriptor for one relationship record."""
    label = relationship_label(rel, catalog)
    dashes = first_match(EDGE_DASH_RULES, rel)
    if isinstance(dashes, list):
        dashes = list(dashes)
    return {
        "id": edge_id(rel.source, rel.target, rel.type, label),
        "from": rel.source,
        "to": rel.target,
        "label": label,
        "category": rel.type,
        "arrows": "to",
        "arrowStrikethrough": False,
        "color": edge_color(EDGE_COLOR_RULES, rel),
        "width": 1.5 if rel.uncertain else 2,
        "dashes": dashes,
    }


def relationship_edges(relationships, node_ids, catalog):
    """Edges for relationships whose two endpoints are both materialized."""
    edges = []
    skipped = 0
    for rel in relationships:
        if rel.source in node_ids and rel.target in node_ids:
            edges.append(relationship_edge(rel, catalog))
        else:
            skipped += 1
    if skipped:
        logger.debug("Skipped %d relationships with hidden endpoints", skipped)
    return edges


def _synthetic_edge(id_, source, target, label, palette):
    return {
        "id": id_,
        "from": source,
        "to": target,
        "label": label,
        "arrows": "to",
        "color": dict(EDGE_COLORS[palette]),
        "width": 2,
        "dashes": SOLID,
        "smooth": dict(SYNTHETIC_SMOOTH),
    }


def ato_edge(company_id, ato_node_id, zero_debt):
    edge = _synthetic_edge(
        f"edge_{company_id}_{ato_node_id}_ATO",
        company_id,
        ato_node_id,
        "ATO",
        "ato_zero" if zero_debt else "ato_debt",
    )
    edge["category"] = "ato"
    return edge


def court_case_edge(company_id, case_node_id, case_number):
    edge = _synthetic_edge(
        f"edge_{company_id}_{case_node_id}_{normalize_label(case_number)}",
        company_id,
        case_node_id,
        case_number,
        "court_case",
    )
    edge["category"] = "court_case"
    return edge
