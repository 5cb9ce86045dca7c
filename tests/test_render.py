"""Tests for the raster render engine.

Validates:
  - Empty type list takes the placeholder path
  - Draw order is edges, then types, then conditions
  - Node chrome uses the type / condition palettes
  - Truncation keeps at least five characters
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from fgaviz.dsl import parse_model
from fgaviz.layout import apply_grid_layout
from fgaviz.render import GraphVisualizer, truncate
from fgaviz.state import ViewParams, VisualizationState
from tests.model_fixture import NO_TYPES_MODEL, SAMPLE_MODEL


def _laid_out(text: str, **view) -> VisualizationState:
    parsed = parse_model(text)
    state = VisualizationState(types=parsed.types, conditions=parsed.conditions,
                               view=ViewParams(**view))
    apply_grid_layout(state)
    return state


class _RecordingVisualizer(GraphVisualizer):
    """Records the order of draw calls."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple[str, str]] = []

    def _draw_placeholder(self, draw):
        self.calls.append(("placeholder", ""))
        super()._draw_placeholder(draw)

    def _draw_edge(self, draw, edge, scale):
        self.calls.append(("edge", edge.target))
        super()._draw_edge(draw, edge, scale)

    def _draw_node(self, draw, node, state, accent, fill, body):
        self.calls.append((node.kind.value, node.key))
        super()._draw_node(draw, node, state, accent, fill, body)


class TestRenderPaths(unittest.TestCase):

    def test_placeholder_when_no_types(self):
        vis = _RecordingVisualizer()
        state = _laid_out(NO_TYPES_MODEL)
        self.assertEqual(len(state.conditions), 1)

        img = vis.render(state)
        self.assertEqual(vis.calls, [("placeholder", "")])
        self.assertEqual(img.size, (1200, 800))

    def test_placeholder_draws_text(self):
        img = GraphVisualizer().render(VisualizationState())
        region = img.crop((50, 35, 400, 52)).convert("RGB")
        self.assertTrue(any(px != (255, 255, 255) for px in region.getdata()))

    def test_draw_order(self):
        vis = _RecordingVisualizer()
        vis.render(_laid_out(SAMPLE_MODEL))
        kinds = [k for k, _ in vis.calls]
        first_type = kinds.index("type")
        first_cond = kinds.index("condition")
        self.assertTrue(all(k == "edge" for k in kinds[:first_type]))
        self.assertTrue(all(k == "type" for k in kinds[first_type:first_cond]))
        self.assertTrue(all(k == "condition" for k in kinds[first_cond:]))
        self.assertEqual(kinds.count("edge"), 18)

    def test_surface_size_matches_state(self):
        state = _laid_out(SAMPLE_MODEL)
        state.canvas_width, state.canvas_height = 1500, 900
        self.assertEqual(GraphVisualizer().render(state).size, (1500, 900))


class TestNodeChrome(unittest.TestCase):

    def setUp(self):
        self.state = _laid_out(SAMPLE_MODEL)
        self.img = GraphVisualizer().render(self.state).convert("RGB")

    def test_background_is_cleared(self):
        self.assertEqual(self.img.getpixel((5, 5)), (255, 255, 255))

    def test_type_header_is_blue(self):
        # user at (50, 50): left part of the header band, clear of the title
        self.assertEqual(self.img.getpixel((70, 58)), GraphVisualizer.COLORS['type'])

    def test_condition_header_is_red(self):
        # time_valid at (250, 230)
        self.assertEqual(self.img.getpixel((265, 234)), GraphVisualizer.COLORS['condition'])

    def test_type_body_fill(self):
        # user has no relations, so its body is plain fill
        self.assertEqual(self.img.getpixel((70, 120)), GraphVisualizer.COLORS['type_fill'])

    def test_shadow_below_box(self):
        px = self.img.getpixel((130, 152))     # 2px under the user box, inside shadow
        self.assertNotEqual(px, (255, 255, 255))
        self.assertLess(sum(px), 3 * 255)


class TestTruncation(unittest.TestCase):

    def test_short_text_untouched(self):
        self.assertEqual(truncate("abc", 5), "abc")
        self.assertEqual(truncate("abcde", 5), "abcde")

    def test_long_text_gets_marker(self):
        self.assertEqual(truncate("abcdefghij", 8), "abcdef..")

    def test_keeps_at_least_five_chars(self):
        self.assertEqual(truncate("abcdefghij", 3), "abcde..")
        self.assertEqual(truncate("abcdefghij", 6), "abcde..")

    def test_none(self):
        self.assertEqual(truncate(None, 10), "")

    def test_render_fills_truncated_definitions(self):
        text = "type user\ntype doc\n define viewer: " + " or ".join(["[user]"] * 20) + "\n"
        state = _laid_out(text, node_width=120)
        GraphVisualizer().render(state)
        rel = state.types[1].relations[0]
        self.assertTrue(rel.truncated.endswith(".."))
        self.assertLess(len(rel.truncated), len(rel.definition))
        self.assertTrue(rel.definition.startswith(rel.truncated[:-2]))

    def test_wider_nodes_show_more(self):
        text = "type doc\n define viewer: " + "x" * 200 + "\n"
        narrow = _laid_out(text, node_width=120)
        wide = _laid_out(text, node_width=300)
        GraphVisualizer().render(narrow)
        GraphVisualizer().render(wide)
        self.assertLess(len(narrow.types[0].relations[0].truncated),
                        len(wide.types[0].relations[0].truncated))


class TestLegend(unittest.TestCase):

    def test_entries(self):
        self.assertEqual(GraphVisualizer.legend(), [
            {"label": "Type", "color": "#4285F4"},
            {"label": "Condition", "color": "#B71C1C"},
            {"label": "Direct Relation", "color": "#1B5E20"},
            {"label": "Computed Relation", "color": "#E65100"},
        ])


class TestPngOutput(unittest.TestCase):

    def test_render_png_writes_rgb_file(self):
        state = _laid_out(SAMPLE_MODEL)
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "graph.png"
            GraphVisualizer().render_png(state, out)
            with Image.open(out) as img:
                self.assertEqual(img.format, "PNG")
                self.assertEqual(img.mode, "RGB")
                self.assertEqual(img.size, (1200, 800))


if __name__ == "__main__":
    unittest.main()
