"""Edge computation — derived from node state on every render, never stored."""

from __future__ import annotations

import math
from dataclasses import dataclass

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import CONDITION_KEY_PREFIX
from fgaviz.dsl.references import extract_condition_name, extract_type_name
from fgaviz.layout.geometry import center_index
from fgaviz.state import VisualizationState


Point2 = tuple[float, float]


@dataclass
class Edge:
    """A directed curved link from a type's relation to its target node."""

    source: str             # owning type key
    target: str             # node key (type name or "condition:<name>")
    relation: str
    is_computed: bool
    start: Point2
    end: Point2
    control: Point2         # quadratic-curve control point


def curve_control(start: Point2, end: Point2, scale: float,
                  rules: ViewRules = VIEW_RULES) -> Point2:
    """Control point offset diagonally (right / up) from the midpoint."""
    offset = rules.curve_offset * scale
    mid_x = (start[0] + end[0]) / 2
    mid_y = (start[1] + end[1]) / 2
    return (mid_x + offset, mid_y - offset)


def is_degenerate(start: Point2, end: Point2,
                  rules: ViewRules = VIEW_RULES) -> bool:
    eps = rules.degenerate_epsilon
    return abs(start[0] - end[0]) < eps and abs(start[1] - end[1]) < eps


def arrowhead(end: Point2, control: Point2, scale: float,
              rules: ViewRules = VIEW_RULES) -> list[Point2]:
    """Filled-triangle vertices, oriented along the curve tangent at ``end``.

    The tangent of a quadratic curve at its endpoint points from the
    control point to the endpoint.
    """
    angle = math.atan2(end[1] - control[1], end[0] - control[0])
    length = rules.arrow_length * scale
    wing = math.pi / 6
    return [
        end,
        (end[0] - length * math.cos(angle - wing), end[1] - length * math.sin(angle - wing)),
        (end[0] - length * math.cos(angle + wing), end[1] - length * math.sin(angle + wing)),
    ]


def quadratic_points(start: Point2, control: Point2, end: Point2,
                     steps: int = 24) -> list[Point2]:
    """Sample a quadratic Bézier curve into a polyline."""
    points = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        points.append((
            u * u * start[0] + 2 * u * t * control[0] + t * t * end[0],
            u * u * start[1] + 2 * u * t * control[1] + t * t * end[1],
        ))
    return points


def compute_edges(state: VisualizationState,
                  rules: ViewRules = VIEW_RULES) -> list[Edge]:
    """Resolve every reference token of every relation into edges.

    Unresolved tokens produce nothing.  Repeated tokens produce repeated
    edges.  A ``type with condition`` token also links to the condition
    node when one with that name exists.
    """
    centers = center_index(state.types, state.conditions, state.view, rules)
    scale = state.view.scale
    edges: list[Edge] = []

    for node in state.types:
        start = centers[node.key]
        for rel in node.relations:
            for ref in rel.references:
                targets = [extract_type_name(ref)]
                cond = extract_condition_name(ref)
                if cond is not None:
                    targets.append(CONDITION_KEY_PREFIX + cond)

                for target in targets:
                    end = centers.get(target)
                    if end is None or is_degenerate(start, end, rules):
                        continue
                    edges.append(Edge(
                        source=node.key,
                        target=target,
                        relation=rel.name,
                        is_computed=rel.is_computed,
                        start=start,
                        end=end,
                        control=curve_control(start, end, scale, rules),
                    ))
    return edges
