"""Node box geometry — sizes, bounding boxes, centers and hit tests."""

from __future__ import annotations

from shapely.geometry import Point, Polygon, box as shapely_box

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import ConditionNode, GraphNode, NodeKind, TypeNode
from fgaviz.state import ViewParams


def type_height(
    node: TypeNode, view: ViewParams, rules: ViewRules = VIEW_RULES,
) -> int:
    """Scaled height of a type box; grows with the relation count."""
    base = int(rules.type_base_height * view.scale)
    content = rules.type_header_pad + len(node.relations) * rules.relation_row_height
    return max(base, int(content * view.scale))


def condition_height(view: ViewParams, rules: ViewRules = VIEW_RULES) -> int:
    """Scaled height of a condition box, independent of its text."""
    return int(rules.condition_height * view.scale)


def node_size(
    node: GraphNode, view: ViewParams, rules: ViewRules = VIEW_RULES,
) -> tuple[int, int]:
    """Return (width, height) of a node at the current view parameters."""
    if node.kind is NodeKind.TYPE:
        return view.scaled_width, type_height(node, view, rules)
    return view.scaled_width, condition_height(view, rules)


def node_box(
    node: GraphNode, view: ViewParams, rules: ViewRules = VIEW_RULES,
) -> Polygon:
    """Axis-aligned bounding box of a node as a shapely polygon."""
    w, h = node_size(node, view, rules)
    return shapely_box(node.x, node.y, node.x + w, node.y + h)


def node_center(
    node: GraphNode, view: ViewParams, rules: ViewRules = VIEW_RULES,
) -> tuple[float, float]:
    w, h = node_size(node, view, rules)
    return (node.x + w / 2.0, node.y + h / 2.0)


def node_contains(
    node: GraphNode, x: float, y: float,
    view: ViewParams, rules: ViewRules = VIEW_RULES,
) -> bool:
    """True if (x, y) lies inside the node box, edges included."""
    return node_box(node, view, rules).covers(Point(x, y))


def center_index(
    types: list[TypeNode],
    conditions: list[ConditionNode],
    view: ViewParams,
    rules: ViewRules = VIEW_RULES,
) -> dict[str, tuple[float, float]]:
    """Map node key -> center.

    Types are keyed by name, conditions by ``"condition:" + name``.
    """
    centers: dict[str, tuple[float, float]] = {}
    for node in (*types, *conditions):
        centers[node.key] = node_center(node, view, rules)
    return centers
