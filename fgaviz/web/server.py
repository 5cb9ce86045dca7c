"""
FastAPI web server — hosts one graph viewer and forwards UI events to it.
"""

from __future__ import annotations

import io
import logging
import threading
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from fgaviz.config import load_env, server_settings
from fgaviz.dsl.formatting import format_model
from fgaviz.dsl.samples import DEFAULT_MODEL
from fgaviz.serialization import graph_to_dict
from fgaviz.viewer import Viewer


load_env()

log = logging.getLogger("fgaviz.server")

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="fgaviz")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.middleware("http")
async def _no_cache_static(request, call_next):
    """Prevent browser from caching JS / CSS / scene images during development."""
    response = await call_next(request)
    if request.url.path.startswith(("/static/", "/api/graph.png")):
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    return response

# ── Viewer state (persists across requests) ────────────────────────

_viewer = Viewer()
_viewer_lock = threading.Lock()     # sync routes run on a worker pool


def reset_viewer() -> Viewer:
    """Replace the hosted viewer with a fresh one (used by /api/reset and tests)."""
    global _viewer
    with _viewer_lock:
        _viewer = Viewer()
    return _viewer


# ── Models ─────────────────────────────────────────────────────────

class ModelTextRequest(BaseModel):
    dsl: str


class ViewUpdateRequest(BaseModel):
    scale: float | None = Field(default=None, gt=0)
    node_width: float | None = Field(default=None, gt=0)


class PointerRequest(BaseModel):
    x: float
    y: float


def _snapshot(viewer: Viewer) -> dict:
    return {
        "drag_state": viewer.drag_state.name.lower(),
        "graph": graph_to_dict(viewer.state, viewer.rules),
    }


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/")
def index():
    return FileResponse(
        STATIC_DIR / "index.html",
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )


@app.get("/api/sample")
def sample_model():
    return {"dsl": DEFAULT_MODEL}


@app.post("/api/reset")
def reset_session():
    """Drop the current graph and start from an empty viewer."""
    reset_viewer()
    log.info("Viewer reset")
    return {"status": "ok"}


@app.post("/api/refresh")
def refresh_graph(req: ModelTextRequest):
    """Re-parse the model text and lay out a fresh graph."""
    with _viewer_lock:
        _viewer.refresh(req.dsl)
        return _snapshot(_viewer)


@app.post("/api/view")
def update_view(req: ViewUpdateRequest):
    """Change scale and/or node width; positions are kept."""
    if req.scale is None and req.node_width is None:
        log.warning("Empty view update rejected")
        raise HTTPException(400, "Nothing to update: pass scale and/or node_width.")
    with _viewer_lock:
        if req.scale is not None:
            _viewer.set_scale(req.scale)
        if req.node_width is not None:
            _viewer.set_node_width(req.node_width)
        return _snapshot(_viewer)


@app.post("/api/view/reset")
def reset_view():
    """Default width and scale, fresh grid layout of the current text."""
    with _viewer_lock:
        _viewer.reset_view()
        return _snapshot(_viewer)


@app.post("/api/pointer/down")
def pointer_down(req: PointerRequest):
    with _viewer_lock:
        hit = _viewer.on_pointer_down(req.x, req.y)
        return {"hit": hit, **_snapshot(_viewer)}


@app.post("/api/pointer/drag")
def pointer_drag(req: PointerRequest):
    with _viewer_lock:
        moved = _viewer.on_pointer_drag(req.x, req.y)
        return {"moved": moved, **_snapshot(_viewer)}


@app.post("/api/pointer/up")
def pointer_up():
    with _viewer_lock:
        _viewer.on_pointer_up()
        return _snapshot(_viewer)


@app.get("/api/graph")
def get_graph():
    with _viewer_lock:
        return _snapshot(_viewer)


@app.get("/api/graph.png")
def get_graph_image():
    """The current scene as a PNG."""
    with _viewer_lock:
        img = _viewer.render().convert("RGB")
    buf = io.BytesIO()
    img.save(buf, "PNG")
    return Response(content=buf.getvalue(), media_type="image/png")


@app.post("/api/format")
def format_text(req: ModelTextRequest):
    """Re-indent model text and move conditions to the end."""
    return {"dsl": format_model(req.dsl)}


# ── Entry point ────────────────────────────────────────────────────

def main(host: str | None = None, port: int | None = None):
    import uvicorn
    settings = server_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "fgaviz.web.server:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
