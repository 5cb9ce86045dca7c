"""Layout engine — deterministic grid placement and canvas extent."""

from __future__ import annotations

import logging
import math

from shapely.ops import unary_union

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import GraphNode
from fgaviz.state import VisualizationState

from .geometry import node_box


log = logging.getLogger(__name__)


def grid_columns(total: int) -> int:
    """Number of grid columns for ``total`` nodes (``ceil(sqrt(total))``)."""
    if total <= 0:
        return 0
    return math.ceil(math.sqrt(total))


def grid_cell(index: int, columns: int) -> tuple[int, int]:
    """Return (col, row) of the node at ``index``."""
    return index % columns, index // columns


def grid_positions(
    count: int, rules: ViewRules = VIEW_RULES,
) -> list[tuple[float, float]]:
    """Logical top-left positions for ``count`` nodes, in index order.

    Depends only on the count and the spacing rules, never on where the
    nodes were before.
    """
    columns = grid_columns(count)
    positions = []
    for i in range(count):
        col, row = grid_cell(i, columns)
        positions.append((
            float(rules.origin_x + col * rules.spacing_x),
            float(rules.origin_y + row * rules.spacing_y),
        ))
    return positions


def apply_grid_layout(
    state: VisualizationState, rules: ViewRules = VIEW_RULES,
) -> None:
    """Place all types, then all conditions, on the grid."""
    nodes: list[GraphNode] = state.nodes
    for node, (x, y) in zip(nodes, grid_positions(len(nodes), rules)):
        node.x, node.y = x, y
    log.debug("Grid layout: %d nodes, %d columns",
              len(nodes), grid_columns(len(nodes)))


def required_extent(
    state: VisualizationState, rules: ViewRules = VIEW_RULES,
) -> tuple[int, int]:
    """Smallest surface that holds every node box plus the margin.

    Returns (0, 0) when there are no nodes.
    """
    nodes = state.nodes
    if not nodes:
        return 0, 0
    _, _, max_x, max_y = unary_union(
        [node_box(n, state.view, rules) for n in nodes]
    ).bounds
    return math.ceil(max_x + rules.margin), math.ceil(max_y + rules.margin)


def grow_canvas(
    state: VisualizationState, rules: ViewRules = VIEW_RULES,
) -> bool:
    """Grow the surface to the required extent; never shrink it.

    Returns True if the surface changed size.
    """
    need_w, need_h = required_extent(state, rules)
    grew = False
    if need_w > state.canvas_width:
        state.canvas_width = need_w
        grew = True
    if need_h > state.canvas_height:
        state.canvas_height = need_h
        grew = True
    if grew:
        log.debug("Canvas grown to %dx%d", state.canvas_width, state.canvas_height)
    return grew
