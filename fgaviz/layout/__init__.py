"""Layout — positions every node and sizes the drawing surface.

Submodules:
  geometry  Node sizes, bounding boxes, centers and hit tests.
  engine    Grid placement and monotonic canvas growth.
"""

from .engine import (
    grid_columns, grid_cell, grid_positions, apply_grid_layout,
    required_extent, grow_canvas,
)
from .geometry import (
    type_height, condition_height, node_size, node_box, node_center,
    node_contains, center_index,
)

__all__ = [
    # Engine
    "grid_columns", "grid_cell", "grid_positions", "apply_grid_layout",
    "required_extent", "grow_canvas",
    # Geometry
    "type_height", "condition_height", "node_size", "node_box",
    "node_center", "node_contains", "center_index",
]
