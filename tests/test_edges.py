"""Tests for relationship edges."""

import pytest

from mindmap.edges import (
    bankruptcy_label,
    edge_id,
    normalize_label,
    relationship_edge,
    relationship_edges,
    relationship_label,
)
from mindmap.formatting import format_aud, format_date, format_percentage
from mindmap.models import Relationship
from mindmap.styles import DOTTED, EDGE_COLORS


def rel(**fields):
    fields.setdefault("from", "C1")
    fields.setdefault("to", "P1")
    return Relationship.model_validate(fields)


class TestEdgeStyle:
    @pytest.mark.parametrize("fields, palette", [
        ({"type": "ppsr_security", "label": "PPSR Security"}, "ppsr"),
        ({"type": "PPSR_DIRECTOR", "label": "Former PPSR"}, "ppsr"),
        ({"type": "bankruptcy"}, "bankruptcy"),
        ({"type": "ceased_director", "label": "Director"}, "former"),
        ({"type": "director", "label": "Former Director"}, "former"),
        ({"type": "officeholder", "label": "Past Secretary"}, "former"),
        ({"type": "director", "label": "Director"}, "current"),
    ])
    def test_color(self, catalog, fields, palette):
        assert relationship_edge(rel(**fields), catalog)["color"] == EDGE_COLORS[palette]

    def test_uncertain_is_dotted(self, catalog):
        edge = relationship_edge(rel(type="ceased_director", uncertain=True), catalog)
        assert edge["dashes"] == DOTTED
        assert edge["width"] == 1.5

    def test_former_type_is_dashed(self, catalog):
        edge = relationship_edge(rel(type="ceased_director", label="Former Director"), catalog)
        assert edge["dashes"] is True
        assert edge["width"] == 2

    def test_former_label_alone_is_solid(self, catalog):
        edge = relationship_edge(rel(type="director", label="Former Director"), catalog)
        assert edge["dashes"] is False

    def test_descriptor(self, catalog):
        edge = relationship_edge(rel(type="director", label="Director"), catalog)
        assert edge == {
            "id": "edge_C1_P1_director_Director",
            "from": "C1",
            "to": "P1",
            "label": "Director",
            "category": "director",
            "arrows": "to",
            "arrowStrikethrough": False,
            "color": EDGE_COLORS["current"],
            "width": 2,
            "dashes": False,
        }

    def test_dotted_pattern_is_a_copy(self, catalog):
        edge = relationship_edge(rel(type="director", uncertain=True), catalog)
        edge["dashes"].append(9)
        assert DOTTED == [2, 6]


class TestLabels:
    def test_uncertain_with_similarity(self, catalog):
        assert relationship_label(rel(label="Director", uncertain=True, similarityPercentage=85), catalog) == "Director (85%)"
        assert relationship_label(rel(label="Director", uncertain=True, similarityPercentage=85.5), catalog) == "Director (85.5%)"

    def test_uncertain_without_similarity(self, catalog):
        assert relationship_label(rel(label="Director", uncertain=True), catalog) == "Director (?)"

    def test_plain(self, catalog):
        assert relationship_label(rel(label="Secretary"), catalog) == "Secretary"

    def test_bankruptcy_edges(self, catalog):
        assert relationship_label(rel(**{"from": "P1", "to": "B1", "type": "bankruptcy"}), catalog) == "from - 15/01/2020"
        assert relationship_label(rel(**{"from": "P2", "to": "B2", "type": "bankruptcy"}), catalog) == "no bankruptcy"
        # Unknown target
        assert relationship_label(rel(**{"from": "P2", "to": "B9", "type": "bankruptcy"}), catalog) == "no bankruptcy"

    def test_bankruptcy_without_date(self):
        assert bankruptcy_label(None) == "no bankruptcy"


class TestEdgeIds:
    def test_whitespace_runs_collapse(self):
        assert normalize_label("Managing   Director\tand CEO") == "Managing_Director_and_CEO"
        assert normalize_label(None) == ""

    def test_parallel_edges_distinct(self, catalog):
        director = relationship_edge(rel(type="director", label="Director"), catalog)
        secretary = relationship_edge(rel(type="secretary", label="Secretary"), catalog)
        assert director["id"] != secretary["id"]
        assert edge_id("C1", "P1", "director", "Managing Director") == "edge_C1_P1_director_Managing_Director"

    def test_id_uses_display_label(self, catalog):
        edge = relationship_edge(rel(type="director", label="Director", uncertain=True, similarityPercentage=85), catalog)
        assert edge["id"] == "edge_C1_P1_director_Director_(85%)"


class TestRelationshipEdges:
    def test_requires_both_endpoints(self, catalog):
        relationships = [
            rel(type="director", label="Director"),
            rel(**{"from": "C1", "to": "X9", "type": "director"}),
            rel(**{"from": "C9", "to": "P1", "type": "director"}),
        ]
        edges = relationship_edges(relationships, {"C1", "P1"}, catalog)
        assert [(e["from"], e["to"]) for e in edges] == [("C1", "P1")]


class TestFormatting:
    @pytest.mark.parametrize("amount, expected", [
        (12345.6, "$12,346"),
        (0.5, "$1"),
        (0, "$0"),
        (None, "$0"),
        (-5, "-$5"),
        (1000000, "$1,000,000"),
    ])
    def test_aud(self, amount, expected):
        assert format_aud(amount) == expected

    def test_dates(self):
        assert format_date("2020-01-15") == "15/01/2020"
        assert format_date("2024-03-01T10:30:00.000Z") == "01/03/2024"
        assert format_date("sometime") == "sometime"

    def test_percentage(self):
        assert format_percentage(85.0) == "85"
        assert format_percentage(72.25) == "72.25"
