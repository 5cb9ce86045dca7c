"""Tests for the layout engine (grid placement, node geometry, canvas extent).

Validates:
  - Column count is ceil(sqrt(total)); cells fill row by row
  - Types are placed before conditions, each in file order
  - Layout ignores previous positions
  - Type height grows with relations; condition height is fixed
  - Canvas grows to fit and never shrinks
"""

from __future__ import annotations

import unittest

from fgaviz.dsl import ConditionNode, RelationEntry, TypeNode, parse_model
from fgaviz.layout import (
    apply_grid_layout, condition_height, grid_cell, grid_columns,
    grid_positions, grow_canvas, node_center, node_contains, node_size,
    required_extent, type_height,
)
from fgaviz.state import ViewParams, VisualizationState
from tests.model_fixture import SAMPLE_MODEL


def _type(name: str, relations: int = 0, x: float = 0.0, y: float = 0.0) -> TypeNode:
    rels = [RelationEntry(name=f"r{i}", definition="[user]") for i in range(relations)]
    return TypeNode(name=name, relations=rels, x=x, y=y)


class TestGrid(unittest.TestCase):

    def test_columns(self):
        self.assertEqual(grid_columns(0), 0)
        self.assertEqual(grid_columns(1), 1)
        self.assertEqual(grid_columns(4), 2)
        self.assertEqual(grid_columns(5), 3)
        self.assertEqual(grid_columns(10), 4)

    def test_five_nodes_cells(self):
        cols = grid_columns(5)
        self.assertEqual(cols, 3)
        self.assertEqual([grid_cell(i, cols) for i in range(5)],
                         [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1)])

    def test_five_nodes_positions(self):
        self.assertEqual(grid_positions(5), [
            (50.0, 50.0), (250.0, 50.0), (450.0, 50.0),
            (50.0, 230.0), (250.0, 230.0),
        ])

    def test_types_before_conditions(self):
        parsed = parse_model(SAMPLE_MODEL)
        state = VisualizationState(types=parsed.types, conditions=parsed.conditions)
        apply_grid_layout(state)
        positions = {n.key: (n.x, n.y) for n in state.nodes}
        self.assertEqual(positions["user"], (50.0, 50.0))
        self.assertEqual(positions["document"], (50.0, 230.0))
        self.assertEqual(positions["condition:time_valid"], (250.0, 230.0))

    def test_layout_ignores_previous_positions(self):
        a = VisualizationState(types=[_type("a"), _type("b")])
        b = VisualizationState(types=[_type("a", x=999, y=7), _type("b", x=3, y=400)])
        apply_grid_layout(a)
        apply_grid_layout(b)
        self.assertEqual([(n.x, n.y) for n in a.nodes], [(n.x, n.y) for n in b.nodes])

    def test_empty_layout_is_noop(self):
        state = VisualizationState()
        apply_grid_layout(state)
        self.assertEqual(state.nodes, [])


class TestNodeGeometry(unittest.TestCase):

    def test_type_height_minimum(self):
        view = ViewParams()
        self.assertEqual(type_height(_type("t", 0), view), 100)
        self.assertEqual(type_height(_type("t", 3), view), 100)

    def test_type_height_grows_with_relations(self):
        self.assertEqual(type_height(_type("t", 5), ViewParams()), 140)
        self.assertEqual(type_height(_type("t", 5), ViewParams(scale=0.5)), 70)
        self.assertEqual(type_height(_type("t", 0), ViewParams(scale=2.0)), 200)

    def test_condition_height_fixed(self):
        self.assertEqual(condition_height(ViewParams()), 90)
        self.assertEqual(condition_height(ViewParams(scale=1.5)), 135)
        cond = ConditionNode(name="c", params="x: int", expression="x" * 500)
        self.assertEqual(node_size(cond, ViewParams()), (160, 90))

    def test_width_scales(self):
        self.assertEqual(node_size(_type("t"), ViewParams(scale=1.5, node_width=200)),
                         (300, 150))

    def test_center(self):
        self.assertEqual(node_center(_type("t", x=50, y=50), ViewParams()), (130.0, 100.0))

    def test_contains_is_inclusive(self):
        node = _type("t", x=50, y=50)
        view = ViewParams()
        self.assertTrue(node_contains(node, 50, 50, view))
        self.assertTrue(node_contains(node, 210, 150, view))
        self.assertFalse(node_contains(node, 211, 150, view))
        self.assertFalse(node_contains(node, 49, 100, view))


class TestCanvasExtent(unittest.TestCase):

    def test_required_extent_single_node(self):
        state = VisualizationState(types=[_type("t", x=50, y=50)])
        self.assertEqual(required_extent(state), (260, 200))

    def test_required_extent_uses_largest_box(self):
        state = VisualizationState(
            types=[_type("t", 10, x=0, y=0)],
            conditions=[ConditionNode("c", "x: int", "x", x=300, y=0)],
        )
        # type is 240 tall, condition reaches x=460
        self.assertEqual(required_extent(state), (510, 290))

    def test_empty_extent(self):
        self.assertEqual(required_extent(VisualizationState()), (0, 0))

    def test_grows_but_never_shrinks(self):
        node = _type("t", x=1500, y=900)
        state = VisualizationState(types=[node])
        self.assertTrue(grow_canvas(state))
        self.assertEqual((state.canvas_width, state.canvas_height), (1710, 1050))

        node.x, node.y = 0, 0
        self.assertFalse(grow_canvas(state))
        self.assertEqual((state.canvas_width, state.canvas_height), (1710, 1050))

    def test_small_graph_keeps_initial_surface(self):
        state = VisualizationState(types=[_type("t", x=50, y=50)])
        self.assertFalse(grow_canvas(state))
        self.assertEqual((state.canvas_width, state.canvas_height), (1200, 800))


if __name__ == "__main__":
    unittest.main()
