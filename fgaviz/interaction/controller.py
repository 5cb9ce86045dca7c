"""Drag controller — hit-testing and the single active-node gesture.

States:
- IDLE: no gesture in progress
- DRAGGING_TYPE: a type node follows the pointer
- DRAGGING_CONDITION: a condition node follows the pointer

A gesture starts on pointer-down over a node and ends on pointer-up.
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import GraphNode, NodeKind
from fgaviz.layout.geometry import node_contains
from fgaviz.state import VisualizationState


log = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = auto()
    DRAGGING_TYPE = auto()
    DRAGGING_CONDITION = auto()


def find_node_at(
    state: VisualizationState, x: float, y: float,
    rules: ViewRules = VIEW_RULES,
) -> GraphNode | None:
    """Return the first node whose box contains (x, y).

    Types are checked before conditions, each in list order.  The first
    match wins, which is not necessarily the node drawn on top.  With no
    types the placeholder replaces the graph, so nothing can be hit.
    """
    if not state.types:
        return None
    for node in state.nodes:
        if node_contains(node, x, y, state.view, rules):
            return node
    return None


class DragController:
    """Owns the active node for the duration of one drag gesture."""

    def __init__(self, rules: ViewRules = VIEW_RULES):
        self.rules = rules
        self.state = DragState.IDLE
        self.active: GraphNode | None = None
        self._offset = (0.0, 0.0)

    @property
    def is_dragging(self) -> bool:
        return self.active is not None

    def pointer_down(self, vis: VisualizationState, x: float, y: float) -> bool:
        """Start a gesture if the pointer is over a node. Returns True on a hit."""
        node = find_node_at(vis, x, y, self.rules)
        if node is None:
            self.release()
            return False

        self.active = node
        self._offset = (x - node.x, y - node.y)
        self.state = (DragState.DRAGGING_TYPE if node.kind is NodeKind.TYPE
                      else DragState.DRAGGING_CONDITION)
        log.debug("Drag start on %s at (%.1f, %.1f)", node.key, x, y)
        return True

    def pointer_drag(self, x: float, y: float) -> bool:
        """Move the active node, clamped to non-negative coordinates.

        Returns True if a node moved (and the scene needs a redraw).
        """
        if self.active is None:
            return False
        dx, dy = self._offset
        self.active.x = max(0.0, x - dx)
        self.active.y = max(0.0, y - dy)
        return True

    def release(self) -> None:
        if self.active is not None:
            log.debug("Drag end on %s at (%.1f, %.1f)",
                      self.active.key, self.active.x, self.active.y)
        self.active = None
        self.state = DragState.IDLE
