"""Shared view constants for the model graph.

These values describe the logical grid, node box metrics and the allowed
range of the two view parameters.  The **layout** engine (grid placement,
canvas extent), the **render** engine (box sizes, fonts, curvature) and
the **interaction** controller (hit boxes) all derive their sizes from
this single source of truth.

Change a value here and every stage will stay in sync automatically.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ViewRules:
    """Logical geometry of the graph.

    All distances are in unscaled pixels unless noted.
    """

    spacing_x: int = 200
    """Horizontal distance between grid columns."""

    spacing_y: int = 180
    """Vertical distance between grid rows."""

    origin_x: int = 50
    origin_y: int = 50

    margin: int = 50
    """Free space kept to the right of and below the outermost node."""

    type_base_height: int = 100
    """Minimum type-node height before scaling."""

    type_header_pad: int = 40
    relation_row_height: int = 20
    """Per-relation height used when sizing a type node."""

    condition_height: int = 90
    """Fixed condition-node height before scaling."""

    header_height: int = 32
    corner_radius: int = 12
    shadow_offset: int = 4

    char_px: float = 6.0
    """Approximate width of one body-font character."""

    label_char_px: float = 7.0
    """Approximate width of one bold relation-name character."""

    min_visible_chars: int = 5
    """Truncated text keeps at least this many characters."""

    curve_offset: float = 30.0
    arrow_length: float = 12.0
    degenerate_epsilon: float = 1.0
    """Edges whose endpoints are closer than this are skipped."""

    default_scale: float = 1.0
    min_scale: float = 0.5
    max_scale: float = 2.0

    default_node_width: int = 160
    min_node_width: int = 120
    max_node_width: int = 300

    canvas_width: int = 1200
    canvas_height: int = 800
    """Initial drawing surface size."""

    # ── Derived helpers ────────────────────────────────────────────

    def clamp_scale(self, factor: float) -> float:
        return max(self.min_scale, min(self.max_scale, float(factor)))

    def clamp_node_width(self, px: float) -> int:
        return int(max(self.min_node_width, min(self.max_node_width, px)))


# Module-level singleton, importable everywhere.
VIEW_RULES = ViewRules()


# ── Environment ────────────────────────────────────────────────────

ROOT = Path(__file__).resolve().parents[1]


def load_env(root: Path = ROOT) -> None:
    """Populate os.environ from .env / .env.local without overriding."""
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v


@dataclass(frozen=True)
class ServerSettings:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def server_settings() -> ServerSettings:
    """Read host settings from the environment (after load_env)."""
    return ServerSettings(
        host=os.environ.get("FGAVIZ_HOST", "127.0.0.1"),
        port=int(os.environ.get("FGAVIZ_PORT", "8000")),
        log_level=os.environ.get("FGAVIZ_LOG_LEVEL", "INFO").upper(),
    )
