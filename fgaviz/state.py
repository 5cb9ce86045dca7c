"""Visualization state — the one value every stage reads and writes.

Layout, render and interaction functions take a ``VisualizationState``
argument instead of reaching for globals.  Only ``Viewer`` (viewer.py)
owns an instance; it is touched from a single event sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fgaviz.config import VIEW_RULES
from fgaviz.dsl.models import ConditionNode, GraphNode, TypeNode


@dataclass
class ViewParams:
    """Uniform sizing applied to every node."""
    scale: float = VIEW_RULES.default_scale
    node_width: int = VIEW_RULES.default_node_width

    @property
    def scaled_width(self) -> int:
        return int(self.node_width * self.scale)


@dataclass
class VisualizationState:
    types: list[TypeNode] = field(default_factory=list)
    conditions: list[ConditionNode] = field(default_factory=list)
    view: ViewParams = field(default_factory=ViewParams)
    canvas_width: int = VIEW_RULES.canvas_width
    canvas_height: int = VIEW_RULES.canvas_height

    @property
    def nodes(self) -> list[GraphNode]:
        """Types first, then conditions, each in file order."""
        return [*self.types, *self.conditions]

    @property
    def is_empty(self) -> bool:
        return not self.types and not self.conditions
