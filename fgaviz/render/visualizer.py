"""
Model Graph Visualizer - draws the node/edge scene onto a raster surface.

Draw order is fixed: edges, then type nodes, then condition nodes, so
nodes always sit on top of the arrows that connect them.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from PIL import Image, ImageDraw, ImageFont

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.models import ConditionNode, GraphNode, NodeKind, TypeNode
from fgaviz.layout.geometry import node_size
from fgaviz.state import VisualizationState

from .edges import Edge, arrowhead, compute_edges, quadratic_points


log = logging.getLogger(__name__)

PLACEHOLDER_MESSAGE = "No types found. Enter a DSL model and click 'Refresh Graph'."

_SANS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf")
_SANS_BOLD = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf")
_MONO = ("DejaVuSansMono.ttf", "Courier New.ttf", "cour.ttf")
_MONO_BOLD = ("DejaVuSansMono-Bold.ttf", "Courier New Bold.ttf", "courbd.ttf")


@lru_cache(maxsize=64)
def load_font(candidates: tuple[str, ...], size: int) -> ImageFont.ImageFont:
    """First installed TrueType face from ``candidates``, else Pillow's default."""
    size = max(1, size)
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def truncate(text: str | None, max_len: int, min_keep: int = VIEW_RULES.min_visible_chars) -> str:
    """Shorten ``text`` to roughly ``max_len`` characters, ending in ``..``.

    At least ``min_keep`` characters survive before the marker.
    """
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max(min_keep, max_len - 2)] + ".."


BodyRenderer = Callable[[ImageDraw.ImageDraw, GraphNode, int, int, float], None]


class GraphVisualizer:
    """Render a VisualizationState into a PIL image."""

    # Color palette
    COLORS = {
        'background': (255, 255, 255),
        'placeholder': (128, 128, 128),
        'shadow': (0, 0, 0, 38),
        'header_text': (255, 255, 255),
        'type': (66, 133, 244),             # Blue header / border
        'type_fill': (248, 250, 255),
        'condition': (183, 28, 28),         # Red header / border
        'condition_fill': (255, 250, 250),
        'direct': (27, 94, 32),             # Dark green
        'computed': (230, 81, 0),           # Dark orange
        'definition': (80, 80, 80),
        'params': (100, 100, 100),
        'expression': (50, 50, 50),
    }

    EDGE_ALPHA = 204    # 0.8 opacity

    LEGEND = [
        ("Type", 'type'),
        ("Condition", 'condition'),
        ("Direct Relation", 'direct'),
        ("Computed Relation", 'computed'),
    ]

    def __init__(self, rules: ViewRules = VIEW_RULES):
        self.rules = rules

    @classmethod
    def legend(cls) -> list[dict]:
        """Legend entries as ``{"label", "color"}`` with hex colors."""
        return [
            {"label": label, "color": "#%02X%02X%02X" % cls.COLORS[key][:3]}
            for label, key in cls.LEGEND
        ]

    # ── Public entry ───────────────────────────────────────────────

    def render(self, state: VisualizationState) -> Image.Image:
        """Clear the surface and draw the whole scene."""
        img = Image.new('RGBA', (state.canvas_width, state.canvas_height),
                        self.COLORS['background'])
        draw = ImageDraw.Draw(img, 'RGBA')

        if not state.types:
            self._draw_placeholder(draw)
            return img

        scale = state.view.scale
        for edge in compute_edges(state, self.rules):
            self._draw_edge(draw, edge, scale)

        for node in state.types:
            self._draw_node(draw, node, state, self.COLORS['type'],
                            self.COLORS['type_fill'], self._draw_type_body)

        for cond in state.conditions:
            self._draw_node(draw, cond, state, self.COLORS['condition'],
                            self.COLORS['condition_fill'], self._draw_condition_body)

        return img

    def render_png(self, state: VisualizationState, output_path) -> None:
        img = self.render(state).convert('RGB')
        img.save(output_path, 'PNG')
        log.info("Generated %s (%dx%d)", output_path, img.width, img.height)

    # ── Placeholder ────────────────────────────────────────────────

    def _draw_placeholder(self, draw: ImageDraw.ImageDraw):
        font = load_font(_SANS, 14)
        draw.text((50, 50), PLACEHOLDER_MESSAGE, fill=self.COLORS['placeholder'],
                  font=font, anchor='ls')

    # ── Edges ──────────────────────────────────────────────────────

    def _draw_edge(self, draw: ImageDraw.ImageDraw, edge: Edge, scale: float):
        """Draw a curved directed arrow."""
        base = self.COLORS['computed'] if edge.is_computed else self.COLORS['direct']
        color = (*base, self.EDGE_ALPHA)
        width = max(1, round(2 * scale))

        curve = quadratic_points(edge.start, edge.control, edge.end)
        draw.line(curve, fill=color, width=width, joint='curve')
        draw.polygon(arrowhead(edge.end, edge.control, scale, self.rules), fill=color)

    # ── Nodes ──────────────────────────────────────────────────────

    def _draw_node(self, draw: ImageDraw.ImageDraw, node: GraphNode,
                   state: VisualizationState, accent: tuple, fill: tuple,
                   body: BodyRenderer):
        """Shared box chrome: shadow, body, border, header band, title."""
        rules = self.rules
        scale = state.view.scale
        width, height = node_size(node, state.view, rules)
        header = int(rules.header_height * scale)
        radius = int(rules.corner_radius * scale)
        x, y = node.x, node.y

        so = rules.shadow_offset
        draw.rounded_rectangle([x + so, y + so, x + so + width, y + so + height],
                               radius=radius, fill=self.COLORS['shadow'])
        draw.rounded_rectangle([x, y, x + width, y + height], radius=radius,
                               fill=fill, outline=accent,
                               width=max(1, round(2 * scale)))

        # Header band: rounded on top, square where it meets the body
        draw.rounded_rectangle([x, y, x + width, y + header], radius=radius, fill=accent)
        draw.rectangle([x, y + header * 0.6, x + width, y + header], fill=accent)

        if node.kind is NodeKind.TYPE:
            title, title_size = node.name, 13
        else:
            title, title_size = "condition: " + node.name, 12
        draw.text((x + width / 2.0, y + header / 2.0), title,
                  fill=self.COLORS['header_text'],
                  font=load_font(_SANS_BOLD, round(title_size * scale)), anchor='mm')

        body(draw, node, width, header, scale)

    def _draw_type_body(self, draw: ImageDraw.ImageDraw, node: TypeNode,
                        width: int, header: int, scale: float):
        """One line per relation: ``name: definition``, colored by category."""
        rules = self.rules
        label_font = load_font(_MONO_BOLD, round(11 * scale))
        def_font = load_font(_MONO, round(10 * scale))

        left = node.x + 10 * scale
        y = node.y + header + 18 * scale
        for rel in node.relations:
            color = self.COLORS['computed'] if rel.is_computed else self.COLORS['direct']
            draw.text((left, y), rel.name, fill=color, font=label_font, anchor='ls')

            name_px = len(rel.name) * rules.label_char_px * scale
            available = int((width - 20 * scale - name_px) / (rules.char_px * scale))
            rel.truncated = truncate(rel.definition, max(rules.min_visible_chars, available))
            draw.text((left + name_px, y), ": " + rel.truncated,
                      fill=self.COLORS['definition'], font=def_font, anchor='ls')
            y += 18 * scale

    def _draw_condition_body(self, draw: ImageDraw.ImageDraw, node: ConditionNode,
                             width: int, header: int, scale: float):
        """A parameter line and an expression line."""
        rules = self.rules
        left = node.x + 10 * scale
        available = int((width - 20 * scale) / (rules.char_px * scale))
        keep = rules.min_visible_chars

        params = "(" + truncate(node.params, max(keep, available - 2)) + ")"
        draw.text((left, node.y + header + 20 * scale), params,
                  fill=self.COLORS['params'], font=load_font(_MONO, round(10 * scale)),
                  anchor='ls')
        draw.text((left, node.y + header + 40 * scale),
                  truncate(node.expression, max(keep, available)),
                  fill=self.COLORS['expression'],
                  font=load_font(_MONO_BOLD, round(10 * scale)), anchor='ls')
