"""Tests for the mind map page lifecycle."""

from mindmap.client import MindMapFetchError
from mindmap.models import MindMapResponse
from mindmap.page import MindMapPage, PageState, open_mind_map


class StubClient:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def fetch(self, matter_id):
        self.calls.append(matter_id)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def response_for(payload, **extra):
    return MindMapResponse.model_validate({
        "success": True,
        "data": payload,
        "matterName": "Acme Matter",
        "matterId": 42,
        **extra,
    })


class TestMindMapPage:
    def test_initial_state(self, engine_factory):
        page = MindMapPage(42, engine_factory, client=StubClient(None))
        assert page.state is PageState.LOADING
        assert page.back_url == "/matter-reports/42"
        assert page.company_count == 0
        assert page.person_count == 0

    def test_load_success(self, payload, engine_factory, engines):
        client = StubClient(response_for(payload))
        page = open_mind_map(42, engine_factory, client=client, container="graph")

        assert client.calls == [42]
        assert page.state is PageState.READY
        assert page.error is None
        assert page.matter_name == "Acme Matter"
        assert page.company_count == 4
        assert page.person_count == 2
        assert page.session.is_open
        assert engines[0].container == "graph"

    def test_person_count_falls_back_to_directors(self, payload, engine_factory):
        payload["stats"]["totalPersons"] = 0
        payload["stats"]["totalDirectors"] = 3
        page = open_mind_map(42, engine_factory, client=StubClient(response_for(payload)))
        assert page.person_count == 3

    def test_load_failure(self, engine_factory, engines):
        client = StubClient(MindMapFetchError("Matter not found", 404))
        page = open_mind_map(42, engine_factory, client=client)

        assert page.state is PageState.ERROR
        assert page.error == "Matter not found"
        assert page.session is None
        assert engines == []

    def test_reload_replaces_session(self, payload, engine_factory, engines):
        page = open_mind_map(42, engine_factory, client=StubClient(response_for(payload)))
        first = page.session

        page.reload()

        assert engines[0].destroyed
        assert not engines[1].destroyed
        assert page.session is not first
        assert page.state is PageState.READY

    def test_reload_after_failure(self, payload, engine_factory):
        client = StubClient(MindMapFetchError())
        page = open_mind_map(42, engine_factory, client=client)
        assert page.state is PageState.ERROR

        client.result = response_for(payload)
        page.reload()
        assert page.state is PageState.READY
        assert page.error is None

    def test_toggle_category(self, payload, engine_factory):
        page = open_mind_map(42, engine_factory, client=StubClient(response_for(payload)))
        page.toggle_category("addresses")
        assert page.session.graph.node("A1") is None

    def test_toggle_without_session(self, engine_factory):
        page = open_mind_map(42, engine_factory, client=StubClient(MindMapFetchError()))
        page.toggle_category("addresses")
        assert page.session is None

    def test_close(self, payload, engine_factory, engines):
        page = open_mind_map(42, engine_factory, client=StubClient(response_for(payload)))
        page.close()

        assert page.state is PageState.CLOSED
        assert page.session is None
        assert engines[0].destroyed

    def test_tooltip_callback_reaches_session(self, payload, engine_factory, engines):
        published = []
        page = open_mind_map(
            42, engine_factory, client=StubClient(response_for(payload)), on_tooltip=published.append
        )
        engines[0].emit("hoverNode", node="C1")
        assert published[-1].content == page.session.graph.tooltip("C1")
