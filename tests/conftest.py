"""Shared fixtures for mind map tests."""

import pytest

from mindmap.catalog import EntityCatalog
from mindmap.graph import build_graph


def sample_data():
    """A small matter: two linked company networks plus one isolated company."""
    return {
        "entities": {
            "companies": [
                {
                    "id": "C1",
                    "name": "Acme Holdings Pty Ltd",
                    "acn": "111 222 333",
                    "status": "Registered",
                    "atoData": {
                        "amount": 12500.4,
                        "status": "Outstanding",
                        "ato_updated_at": "2024-03-01T00:00:00Z",
                    },
                    "courtCases": [
                        {
                            "uuid": "case-1",
                            "case_number": "NSD 123/2024",
                            "case_type": "CORPORATIONS - WINDING UP APPLICATION",
                            "court_name": "Federal Court",
                            "state": "NSW",
                        }
                    ],
                },
                {
                    "id": "C2",
                    "name": "Beta Trading",
                    "status": "Registered",
                    "courtCases": [
                        {
                            "uuid": "case-1",
                            "case_number": "NSD 123/2024",
                            "case_type": "CORPORATIONS - WINDING UP APPLICATION",
                        }
                    ],
                },
                {"id": "C3", "name": "Old Co", "status": "Ceased"},
                {"id": "C4", "name": "Island Pty Ltd", "status": "Registered", "atoData": {"amount": 0}},
            ],
            "persons": [
                {"id": "P1", "name": "Jane Citizen", "roles": [{"type": "director"}], "dob": "1970-01-01"},
                {
                    "id": "P2",
                    "name": "John Former",
                    "roles": [{"type": "director", "originalType": "ceased_director"}],
                },
            ],
            "shareholders": [
                {"id": "S1", "name": "Holdco Pty Ltd", "shares": "100 ORD"},
            ],
            "addresses": [
                {
                    "id": "A1",
                    "address": "1 George St",
                    "suburb": "Sydney",
                    "state": "NSW",
                    "postcode": "2000",
                    "linkedEntityIds": ["C1", "P1"],
                },
                {"id": "A2", "address": "5 Nowhere Rd", "linkedEntityId": "X9"},
            ],
            "bankruptcies": [
                {"id": "B1", "name": "Jane Citizen", "hasBankruptcy": True, "from": "2020-01-15"},
                {"id": "B2", "name": "John Former", "hasBankruptcy": False},
            ],
        },
        "relationships": [
            {"from": "C1", "to": "P1", "type": "director", "label": "Director"},
            {"from": "C1", "to": "P1", "type": "secretary", "label": "Secretary"},
            {"from": "C2", "to": "P2", "type": "ceased_director", "label": "Former Director"},
            {"from": "C1", "to": "S1", "type": "shareholder", "label": "Shareholder"},
            {"from": "C1", "to": "A1", "type": "registered_office", "label": "Registered Office"},
            {"from": "P1", "to": "B1", "type": "bankruptcy", "label": "Bankruptcy check"},
            {"from": "P2", "to": "B2", "type": "bankruptcy", "label": "Bankruptcy check"},
            {
                "from": "C3",
                "to": "P1",
                "type": "director",
                "label": "Director",
                "uncertain": True,
                "similarityPercentage": 85,
            },
            {"from": "C1", "to": "C2", "type": "ppsr_security", "label": "PPSR Security"},
            {"from": "C1", "to": "X9", "type": "director", "label": "Director"},
        ],
        "stats": {
            "totalCompanies": 4,
            "totalPersons": 2,
            "totalDirectors": 2,
            "totalShareholders": 1,
            "totalSecretaries": 1,
            "totalOfficeHolders": 0,
            "totalAddresses": 2,
            "totalRelationships": 10,
        },
    }


class FakeEngine:
    """In-memory stand-in for the force-directed render engine."""

    def __init__(self, container, data, options):
        self.container = container
        self.data = data
        self.options = options
        self.handlers = {}
        self.calls = []
        self.destroyed = False
        self.positions = {
            node["id"]: {"x": node["x"], "y": node["y"]} for node in data["nodes"]
        }

    def on(self, event, handler):
        self.handlers[event] = handler

    def emit(self, event, **params):
        self.handlers[event](params)

    def set_data(self, data):
        self.calls.append(("set_data", data))
        self.data = data

    def set_options(self, options):
        self.calls.append(("set_options", options))

    def fit(self, options=None):
        self.calls.append(("fit", options))

    def get_positions(self, node_ids):
        return {i: self.positions[i] for i in node_ids if i in self.positions}

    def canvas_to_dom(self, point):
        return {"x": point["x"] / 2 + 100, "y": point["y"] / 2 + 50}

    def redraw(self):
        self.calls.append(("redraw", None))

    def destroy(self):
        self.destroyed = True

    def call_names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def payload():
    return sample_data()


@pytest.fixture
def catalog(payload):
    return EntityCatalog.from_payload(payload)


@pytest.fixture
def graph(catalog):
    return build_graph(catalog)


@pytest.fixture
def engines():
    """Engines created by engine_factory, in creation order."""
    return []


@pytest.fixture
def engine_factory(engines):
    def factory(container, data, options):
        engine = FakeEngine(container, data, options)
        engines.append(engine)
        return engine
    return factory
