from .controller import DragController, DragState, find_node_at

__all__ = ["DragController", "DragState", "find_node_at"]
