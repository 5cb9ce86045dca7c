"""Render — edges first, then type nodes, then condition nodes."""

from .edges import Edge, compute_edges, curve_control, arrowhead
from .visualizer import GraphVisualizer, PLACEHOLDER_MESSAGE, truncate

__all__ = [
    "Edge", "compute_edges", "curve_control", "arrowhead",
    "GraphVisualizer", "PLACEHOLDER_MESSAGE", "truncate",
]
