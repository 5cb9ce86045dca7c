"""Graph serialization — JSON-safe snapshot of the current scene model."""

from __future__ import annotations

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import ConditionNode, RelationEntry, TypeNode
from fgaviz.layout.geometry import node_size
from fgaviz.render.edges import compute_edges
from fgaviz.render.visualizer import GraphVisualizer
from fgaviz.state import ViewParams, VisualizationState


def _relation_to_dict(rel: RelationEntry) -> dict:
    return {
        "name": rel.name,
        "definition": rel.definition,
        "truncated": rel.truncated,
        "is_computed": rel.is_computed,
        "references": list(rel.references),
    }


def _type_to_dict(node: TypeNode, view: ViewParams, rules: ViewRules) -> dict:
    width, height = node_size(node, view, rules)
    return {
        "key": node.key,
        "name": node.name,
        "x": node.x,
        "y": node.y,
        "width": width,
        "height": height,
        "relations": [_relation_to_dict(r) for r in node.relations],
    }


def _condition_to_dict(node: ConditionNode, view: ViewParams, rules: ViewRules) -> dict:
    width, height = node_size(node, view, rules)
    return {
        "key": node.key,
        "name": node.name,
        "params": node.params,
        "expression": node.expression,
        "x": node.x,
        "y": node.y,
        "width": width,
        "height": height,
    }


def graph_to_dict(state: VisualizationState, rules: ViewRules = VIEW_RULES) -> dict:
    """Serialize nodes, freshly computed edges, view and canvas."""
    return {
        "types": [_type_to_dict(t, state.view, rules) for t in state.types],
        "conditions": [_condition_to_dict(c, state.view, rules) for c in state.conditions],
        "edges": [
            {
                "source": e.source,
                "target": e.target,
                "relation": e.relation,
                "is_computed": e.is_computed,
            }
            for e in compute_edges(state, rules)
        ],
        "view": {"scale": state.view.scale, "node_width": state.view.node_width},
        "canvas": {"width": state.canvas_width, "height": state.canvas_height},
        "legend": GraphVisualizer.legend(),
    }
