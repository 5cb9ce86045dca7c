"""Viewer — the operations a hosting UI calls.

One ``Viewer`` owns one ``VisualizationState`` and one drag controller.
Every operation runs synchronously to completion; mutating operations
grow the canvas and redraw the scene before returning.
"""

from __future__ import annotations

import logging

from PIL import Image

from fgaviz.config import VIEW_RULES, ViewRules
from fgaviz.dsl.parsing import parse_model
from fgaviz.interaction.controller import DragController, DragState
from fgaviz.layout.engine import apply_grid_layout, grow_canvas
from fgaviz.render.visualizer import GraphVisualizer
from fgaviz.state import ViewParams, VisualizationState


log = logging.getLogger(__name__)


class Viewer:
    def __init__(self, rules: ViewRules = VIEW_RULES,
                 visualizer: GraphVisualizer | None = None):
        self.rules = rules
        self.state = VisualizationState(
            canvas_width=rules.canvas_width,
            canvas_height=rules.canvas_height,
        )
        self.drag = DragController(rules)
        self.visualizer = visualizer or GraphVisualizer(rules)
        self.text = ""
        self._scene: Image.Image | None = None

    # ── Model ──────────────────────────────────────────────────────

    def refresh(self, text: str) -> None:
        """Rebuild the model from scratch, lay it out on the grid, redraw."""
        self.drag.release()
        parsed = parse_model(text)
        self.text = text
        self.state.types = parsed.types
        self.state.conditions = parsed.conditions
        apply_grid_layout(self.state, self.rules)
        self._redraw()
        log.info("Graph rendered: %d types, %d conditions",
                 len(self.state.types), len(self.state.conditions))

    # ── View parameters ────────────────────────────────────────────

    def set_scale(self, factor: float) -> None:
        self.state.view.scale = self.rules.clamp_scale(factor)
        self._redraw()

    def set_node_width(self, px: float) -> None:
        self.state.view.node_width = self.rules.clamp_node_width(px)
        self._redraw()

    def reset_view(self) -> None:
        """Restore default width and scale, then re-parse the current text."""
        self.state.view = ViewParams(
            scale=self.rules.default_scale,
            node_width=self.rules.default_node_width,
        )
        self.refresh(self.text)

    # ── Pointer events ─────────────────────────────────────────────

    def on_pointer_down(self, x: float, y: float) -> bool:
        return self.drag.pointer_down(self.state, x, y)

    def on_pointer_drag(self, x: float, y: float) -> bool:
        moved = self.drag.pointer_drag(x, y)
        if moved:
            self._redraw()
        return moved

    def on_pointer_up(self) -> None:
        self.drag.release()

    @property
    def drag_state(self) -> DragState:
        return self.drag.state

    # ── Output ─────────────────────────────────────────────────────

    def render(self) -> Image.Image:
        """The most recently drawn scene (drawn now if never drawn)."""
        if self._scene is None:
            self._redraw()
        return self._scene

    def _redraw(self) -> None:
        grow_canvas(self.state, self.rules)
        self._scene = self.visualizer.render(self.state)
