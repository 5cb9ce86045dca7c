"""
fgaviz — entry point.

Usage:
    python -m fgaviz serve                       # start web server on :8000
    python -m fgaviz serve --port 3000
    python -m fgaviz render model.fga --out graph.png [--scale 1.5] [--width 200]
"""

import logging
import sys
from pathlib import Path

USAGE = (
    "Usage: python -m fgaviz serve [--port PORT] [--host HOST]\n"
    "       python -m fgaviz render MODEL [--out PNG] [--scale S] [--width PX]"
)


def _option(args: list[str], name: str) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return None


def _render(args: list[str]) -> int:
    from fgaviz.viewer import Viewer

    if not args or args[0].startswith("--"):
        print("render: missing MODEL path")
        print(USAGE)
        return 1

    model_path = Path(args[0])
    if not model_path.exists():
        print(f"render: no such file: {model_path}")
        return 1

    out = Path(_option(args, "--out") or model_path.with_suffix(".png").name)
    viewer = Viewer()
    scale = _option(args, "--scale")
    width = _option(args, "--width")
    if scale is not None:
        viewer.state.view.scale = viewer.rules.clamp_scale(float(scale))
    if width is not None:
        viewer.state.view.node_width = viewer.rules.clamp_node_width(float(width))
    viewer.refresh(model_path.read_text(encoding="utf-8"))

    viewer.visualizer.render_png(viewer.state, out)
    print(f"✓ Generated {out} ({len(viewer.state.types)} types, "
          f"{len(viewer.state.conditions)} conditions)")
    return 0


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        port = _option(args, "--port")
        host = _option(args, "--host")

        from fgaviz.web.server import main as serve
        serve(host=host, port=int(port) if port else None)
    elif cmd == "render":
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        sys.exit(_render(args[1:]))
    else:
        print(f"Unknown command: {cmd}")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
