"""
Render engine boundary.

The force-directed engine (vis-network in the browser export) is an
external collaborator. The core only needs the handful of calls below and
a way to subscribe to its events; anything with this shape can back a
MindMapSession.
"""

from typing import Any, Callable, Mapping, Optional, Protocol

# Engine events
HOVER_NODE = "hoverNode"
BLUR_NODE = "blurNode"
STABILIZATION_PROGRESS = "stabilizationProgress"
STABILIZATION_END = "stabilizationEnd"
DRAG_START = "dragStart"
DRAG_END = "dragEnd"
# Pointer events on the engine's container, forwarded through the same hook
POINTER_MOVE = "mousemove"
POINTER_LEAVE = "mouseleave"

EVENTS = (
    HOVER_NODE,
    BLUR_NODE,
    STABILIZATION_PROGRESS,
    STABILIZATION_END,
    DRAG_START,
    DRAG_END,
    POINTER_MOVE,
    POINTER_LEAVE,
)

Point = Mapping[str, float]  # {"x": ..., "y": ...}
EventHandler = Callable[[Mapping[str, Any]], None]


class RenderEngine(Protocol):
    def set_data(self, data: Mapping[str, list]) -> None: ...

    def set_options(self, options: Mapping[str, Any]) -> None: ...

    def fit(self, options: Optional[Mapping[str, Any]] = None) -> None: ...

    def get_positions(self, node_ids: list) -> Mapping[str, Point]: ...

    def canvas_to_dom(self, point: Point) -> Point: ...

    def redraw(self) -> None: ...

    def destroy(self) -> None: ...

    def on(self, event: str, handler: EventHandler) -> None: ...


# construct(container, {"nodes": [...], "edges": [...]}, options) -> engine
EngineFactory = Callable[[Any, Mapping[str, list], Mapping[str, Any]], RenderEngine]
