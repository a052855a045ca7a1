"""
The mind map screen for one matter.

Loading -> ready (session open) or loading -> error (message shown, no
graph). Only one fetch is ever in flight for a page.
"""

import logging
from enum import Enum

from .catalog import EntityCatalog
from .client import MindMapClient, MindMapFetchError
from .session import MindMapSession

logger = logging.getLogger(__name__)


class PageState(Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    CLOSED = "closed"


class MindMapPage:
    def __init__(self, matter_id, engine_factory, client=None, container=None, on_tooltip=None):
        self.matter_id = matter_id
        self.client = client if client is not None else MindMapClient()
        self.state = PageState.LOADING
        self.error = None
        self.matter_name = ""
        self.stats = None
        self.session = None
        self._engine_factory = engine_factory
        self._container = container
        self._on_tooltip = on_tooltip

    @property
    def back_url(self):
        return f"/matter-reports/{self.matter_id}"

    @property
    def company_count(self):
        return self.stats.total_companies if self.stats else 0

    @property
    def person_count(self):
        if not self.stats:
            return 0
        return self.stats.total_persons or self.stats.total_directors

    def load(self):
        """Fetch the matter's data and open a graph session on it."""
        self.close_session()
        self.state = PageState.LOADING
        self.error = None

        try:
            response = self.client.fetch(self.matter_id)
        except MindMapFetchError as exc:
            logger.warning("Mind map for matter %s unavailable: %s", self.matter_id, exc.message)
            self.error = exc.message
            self.state = PageState.ERROR
            return self

        self.matter_name = response.matter_name or ""
        self.stats = response.data.stats
        catalog = EntityCatalog(response.data)
        self.session = MindMapSession(
            catalog,
            self._engine_factory,
            container=self._container,
            on_tooltip=self._on_tooltip,
        ).open()
        self.state = PageState.READY
        return self

    reload = load

    def toggle_category(self, category):
        if self.session is None:
            return
        self.session.toggle_category(category)

    def close_session(self):
        if self.session is not None:
            self.session.close()
            self.session = None

    def close(self):
        self.close_session()
        self.state = PageState.CLOSED


def open_mind_map(matter_id, engine_factory, client=None, container=None, on_tooltip=None):
    """Open the mind map for a matter; check ``.state`` for the outcome."""
    return MindMapPage(
        matter_id,
        engine_factory,
        client=client,
        container=container,
        on_tooltip=on_tooltip,
    ).load()
