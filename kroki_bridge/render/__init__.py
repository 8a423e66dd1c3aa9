"""kroki_bridge.render — Kroki-backed diagram rendering.

Turns diagram source into a Kroki link or a rendered file, and turns Kroki's
error responses (HTML pages, error text drawn inside an SVG, non-2xx bodies)
into diagnostics a person can act on.

Usage
-----
    from kroki_bridge.render import DiagramRenderer

    renderer = DiagramRenderer()
    url = renderer.generate_url("mermaid", "graph TD; A-->B;")
    renderer.download("plantuml", "@startuml\\nA -> B\\n@enduml", "/tmp/seq.png")
"""
from kroki_bridge.render.encoder import encode
from kroki_bridge.render.errors import (
    DiagramError,
    InlineRenderError,
    InternalUnexpectedError,
    InvalidParamsError,
    RemoteDecodeError,
    TransportFailure,
)
from kroki_bridge.render.models import DIAGRAM_TYPES, OUTPUT_FORMATS, DiagramRequest, RenderResult
from kroki_bridge.render.orchestrator import DiagramRenderer
from kroki_bridge.render.transport import KrokiClient, RawResponse

__all__ = [
    "DIAGRAM_TYPES",
    "OUTPUT_FORMATS",
    "DiagramError",
    "DiagramRenderer",
    "DiagramRequest",
    "InlineRenderError",
    "InternalUnexpectedError",
    "InvalidParamsError",
    "KrokiClient",
    "RawResponse",
    "RemoteDecodeError",
    "RenderResult",
    "TransportFailure",
    "encode",
]
