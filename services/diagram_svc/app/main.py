"""Kroki Diagram SVC — v0.1.0

HTTP front for the Kroki diagram operations.

Endpoints
---------
GET  /health
GET  /metrics
GET  /tools
POST /api/diagrams/url       {type, content, outputFormat?}
POST /api/diagrams/download  {type, content, outputPath, outputFormat?, scale?}

Env vars:
  ALLOWED_ORIGINS     — comma-separated CORS origins (default: http://localhost:3001)
  DIAGRAM_OUTPUT_DIR  — directory downloads are written under; outputPath is
                        resolved against it and may not leave it (default: diagrams)
"""
import logging
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request as StarletteRequest
from starlette.responses import JSONResponse, PlainTextResponse

from kroki_bridge.observability.metrics import MetricsRegistry
from kroki_bridge.render.errors import (
    DiagramError,
    InlineRenderError,
    InvalidParamsError,
    RemoteDecodeError,
    TransportFailure,
)
from kroki_bridge.render.orchestrator import DiagramRenderer
from kroki_bridge.render.transport import KrokiClient
from kroki_bridge.tools.registry import diagram_tools

log = logging.getLogger(__name__)

VERSION = "0.1.0"

app = FastAPI(title="Kroki Diagram SVC", version=VERSION)

OUTPUT_DIR = os.getenv("DIAGRAM_OUTPUT_DIR", "diagrams")

raw_allowed = os.getenv("ALLOWED_ORIGINS", "http://localhost:3001")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[x.strip() for x in raw_allowed.split(",") if x.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def _global_exc_handler(request: StarletteRequest, exc: Exception):
    """Convert unhandled exceptions into a JSONResponse so CORS headers still apply."""
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc) or "Internal Server Error"},
    )


metrics = MetricsRegistry()
tools = diagram_tools()

# ── Kroki client (overridable in tests) ───────────────────────────────────────
_client: KrokiClient | None = None


def get_kroki_client() -> KrokiClient:
    global _client
    if _client is None:
        _client = KrokiClient()
    return _client


def get_renderer(client: KrokiClient = Depends(get_kroki_client)) -> DiagramRenderer:
    return DiagramRenderer(client=client)


# ── Models ────────────────────────────────────────────────────────────────────


class DiagramUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    content: str
    output_format: str | None = Field(default=None, alias="outputFormat")


class DiagramDownloadRequest(DiagramUrlRequest):
    output_path: str = Field(alias="outputPath")
    scale: float = 1.0


def resolve_output_path(output_path: str) -> str:
    """Resolve ``output_path`` under OUTPUT_DIR, rejecting anything outside it."""
    if not output_path.strip():
        return output_path
    root = Path(OUTPUT_DIR).resolve()
    target = (root / output_path).resolve()
    if target == root or not target.is_relative_to(root):
        raise InvalidParamsError(f"outputPath must point to a file inside {root}", output_path=output_path)
    return str(target)


def _status_for(exc: DiagramError) -> int:
    if isinstance(exc, InvalidParamsError):
        return 400
    if isinstance(exc, (RemoteDecodeError, InlineRenderError)):
        return 422
    if isinstance(exc, TransportFailure):
        return 502
    return 500


def _raise_http(exc: DiagramError, operation: str) -> None:
    metrics.inc("kroki_diagram_failures_total", operation=operation, code=exc.code)
    raise HTTPException(status_code=_status_for(exc), detail=exc.to_dict()) from exc


# ── Endpoints ─────────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": "diagram_svc", "version": VERSION}


@app.get("/metrics", response_class=PlainTextResponse)
def get_metrics() -> PlainTextResponse:
    metrics.inc("kroki_diagram_metrics_scrapes_total")
    return PlainTextResponse(metrics.render_prometheus(), media_type="text/plain; version=0.0.4")


@app.get("/tools")
def list_tools() -> dict:
    return {"tools": tools.list_tools()}


@app.post("/api/diagrams/url")
def generate_diagram_url(req: DiagramUrlRequest, renderer: DiagramRenderer = Depends(get_renderer)) -> dict:
    """Return a Kroki link for the diagram; fails if Kroki cannot render it."""
    metrics.inc("kroki_diagram_requests_total", operation="url")
    try:
        with metrics.track_ms("kroki_diagram_url_duration"):
            url = renderer.generate_url(req.type, req.content, req.output_format)
    except DiagramError as exc:
        _raise_http(exc, "url")
    return {"url": url, "type": req.type, "outputFormat": req.output_format or "svg"}


@app.post("/api/diagrams/download")
def download_diagram(req: DiagramDownloadRequest, renderer: DiagramRenderer = Depends(get_renderer)) -> dict:
    """Render the diagram and save it under the service output directory."""
    metrics.inc("kroki_diagram_requests_total", operation="download")
    try:
        with metrics.track_ms("kroki_diagram_download_duration"):
            output_path = resolve_output_path(req.output_path)
            result = renderer.download(
                req.type,
                req.content,
                output_path,
                output_format=req.output_format,
                scale=req.scale,
            )
    except DiagramError as exc:
        _raise_http(exc, "download")
    return {
        "path": output_path,
        "outputFormat": result.output_format,
        "bytes": result.size,
        "message": f"Diagram saved to {output_path}",
    }
