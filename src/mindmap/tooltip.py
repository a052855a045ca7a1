"""
Floating tooltip that follows a moving node.

The coordinator is either idle or hovering one node. While hovering, each
tick re-reads the node's simulated position, projects it to screen space
and republishes the tooltip, so the overlay keeps up with physics settling
and dragging.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .config import TOOLTIP_OFFSET_Y

IDLE = "idle"
HOVERING = "hovering"

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class Tooltip:
    content: str
    x: float
    y: float


class TooltipCoordinator:
    def __init__(
        self,
        content_of: Callable[[str], Optional[str]],
        position_of: Callable[[str], Optional[Coordinate]],
        project: Callable[[Coordinate], Coordinate],
        publish: Optional[Callable[[Optional[Tooltip]], None]] = None,
    ):
        self._content_of = content_of
        self._position_of = position_of
        self._project = project
        self._publish = publish
        self.node_id = None
        self.current = None

    @property
    def state(self):
        return HOVERING if self.node_id is not None else IDLE

    def _emit(self, tooltip):
        if tooltip == self.current:
            return
        self.current = tooltip
        if self._publish is not None:
            self._publish(tooltip)

    def hover(self, node_id):
        """Start following node_id, if it has anything to show."""
        if not self._content_of(node_id):
            self.blur()
            return
        self.node_id = node_id
        self.refresh()

    def blur(self):
        self.node_id = None
        self._emit(None)

    def refresh(self):
        """Re-project the hovered node; call on every tick that may move it."""
        if self.node_id is None:
            return
        content = self._content_of(self.node_id)
        position = self._position_of(self.node_id)
        if not content or position is None:
            return
        x, y = self._project(position)
        self._emit(Tooltip(content=content, x=x, y=y - TOOLTIP_OFFSET_Y))
