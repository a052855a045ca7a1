"""
Graph session: the one owner of a render engine instance.

A session is opened once the matter's data is available, builds the graph,
constructs the engine and wires its events. Layout runs in two phases:
a bounded high-energy stabilization, then a permanent switch to low-energy
physics so settled nodes stay still while edges can still reroute when a
node is dragged. Closing destroys the engine; a closed session is done.
"""

import copy
import logging

from .config import FIT_OPTIONS, INITIAL_OPTIONS, SETTLED_PHYSICS, STABILIZATION_ITERATIONS
from .engine import (
    BLUR_NODE,
    DRAG_END,
    DRAG_START,
    HOVER_NODE,
    POINTER_LEAVE,
    POINTER_MOVE,
    STABILIZATION_END,
    STABILIZATION_PROGRESS,
)
from .graph import build_graph
from .tooltip import TooltipCoordinator
from .visibility import VisibilityFilter

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    pass


class MindMapSession:
    def __init__(self, catalog, engine_factory, container=None, visibility=None, on_tooltip=None):
        self.catalog = catalog
        self.visibility = visibility if visibility is not None else VisibilityFilter()
        self.graph = None
        self.tooltip = None
        self.settled = False
        self._engine_factory = engine_factory
        self._container = container
        self._on_tooltip = on_tooltip
        self._engine = None
        self._closed = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_open(self):
        return self._engine is not None

    @property
    def engine(self):
        self._require_open()
        return self._engine

    def _require_open(self):
        if self._engine is None:
            raise SessionError("Mind map session is not open")

    def open(self):
        """Build the graph and construct the engine."""
        if self._closed:
            raise SessionError("Mind map session was closed; open a new one")
        if self._engine is not None:
            raise SessionError("Mind map session is already open")

        self.graph = build_graph(self.catalog, self.visibility)
        self._engine = self._engine_factory(
            self._container, self.graph.data(), copy.deepcopy(INITIAL_OPTIONS)
        )
        self.settled = False
        self.tooltip = TooltipCoordinator(
            content_of=self._tooltip_content,
            position_of=self._position_of,
            project=self._project,
            publish=self._on_tooltip,
        )

        on = self._engine.on
        on(HOVER_NODE, self._handle_hover)
        on(BLUR_NODE, self._handle_blur)
        on(POINTER_LEAVE, self._handle_blur)
        on(POINTER_MOVE, self._handle_tick)
        on(STABILIZATION_PROGRESS, self._handle_progress)
        on(STABILIZATION_END, self._handle_stabilized)
        on(DRAG_START, self._handle_drag_start)
        on(DRAG_END, self._handle_drag_end)

        logger.info(
            "Opened mind map session: %d nodes, %d edges",
            len(self.graph.nodes), len(self.graph.edges),
        )
        return self

    def close(self):
        """Destroy the engine. Safe to call more than once."""
        if self._engine is not None:
            self._engine.destroy()
            self._engine = None
            logger.info("Closed mind map session")
        if self.tooltip is not None:
            self.tooltip.blur()
        self._closed = True

    # Visibility

    def toggle_category(self, category):
        self.visibility.toggle(category)
        self.rebuild()

    def set_category_visible(self, category, visible):
        if self.visibility[category] == bool(visible):
            return
        self.visibility.set(category, visible)
        self.rebuild()

    def rebuild(self):
        """Replace the engine's data with a fresh build."""
        self._require_open()
        self.graph = build_graph(self.catalog, self.visibility)
        self._engine.set_data(self.graph.data())
        self._engine.set_options(copy.deepcopy(SETTLED_PHYSICS))
        self._engine.fit(dict(FIT_OPTIONS))

        if self.tooltip.node_id is not None and self.graph.node(self.tooltip.node_id) is None:
            self.tooltip.blur()

    def refit(self):
        """Re-fit the view, e.g. after the container was resized."""
        self._require_open()
        self._engine.set_options(copy.deepcopy(SETTLED_PHYSICS))
        self._engine.fit(dict(FIT_OPTIONS))

    # Engine adapters for the tooltip

    def _tooltip_content(self, node_id):
        return self.graph.tooltip(node_id) if self.graph is not None else None

    def _position_of(self, node_id):
        if self._engine is None:
            return None
        position = self._engine.get_positions([node_id]).get(node_id)
        if position is None:
            return None
        return position["x"], position["y"]

    def _project(self, point):
        dom = self._engine.canvas_to_dom({"x": point[0], "y": point[1]})
        return dom["x"], dom["y"]

    # Event handlers

    def _settle(self):
        if self.settled or self._engine is None:
            return False
        self.settled = True
        self._engine.set_options(copy.deepcopy(SETTLED_PHYSICS))
        logger.debug("Switched to low-energy physics")
        return True

    def _handle_hover(self, params):
        node_id = params.get("node")
        if node_id is not None and self._engine is not None:
            self.tooltip.hover(node_id)

    def _handle_blur(self, params=None):
        self.tooltip.blur()

    def _handle_tick(self, params=None):
        self.tooltip.refresh()

    def _handle_progress(self, params):
        if params.get("iterations", 0) >= STABILIZATION_ITERATIONS:
            self._settle()
        self.tooltip.refresh()

    def _handle_stabilized(self, params=None):
        if self.settled or self._engine is None:
            return
        self._engine.fit(dict(FIT_OPTIONS))
        self._settle()
        self.tooltip.refresh()

    def _handle_drag_start(self, params=None):
        if self._engine is None:
            return
        self._engine.set_options(copy.deepcopy(SETTLED_PHYSICS))
        self.tooltip.refresh()

    def _handle_drag_end(self, params=None):
        if self._engine is None:
            return
        self._engine.redraw()
        self.tooltip.refresh()
