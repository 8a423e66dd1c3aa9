"""Kroki diagram tool — shareable diagram links and rendered diagram files.

Used by agents that need to publish or save diagrams (mermaid, plantuml,
graphviz and the other grammars Kroki renders). Rendering happens on the
Kroki server; these functions only encode, fetch, check and save.

Env vars:
  KROKI_BASE_URL — Kroki server base (default: https://kroki.io)
  KROKI_TIMEOUT  — HTTP timeout seconds (default: 30)
"""

import logging

from kroki_bridge.render.errors import DiagramError
from kroki_bridge.render.orchestrator import DiagramRenderer
from kroki_bridge.render.transport import KrokiClient

log = logging.getLogger(__name__)


def _renderer(client: KrokiClient | None) -> DiagramRenderer:
    return DiagramRenderer(client=client)


def generate_url(
    diagram_type: str,
    content: str,
    output_format: str = "svg",
    client: KrokiClient | None = None,
) -> dict:
    """Build a Kroki URL for a diagram, after checking that it renders.

    Args:
      diagram_type:  Grammar name, e.g. "mermaid", "plantuml", "graphviz"
      content:       Diagram source text
      output_format: svg | png | pdf | jpeg | base64 (default svg)

    Returns:
      {"url": str|None, "type": str, "output_format": str, "error": str|None, "code": str|None}
    """
    result = {"url": None, "type": diagram_type, "output_format": output_format, "error": None, "code": None}
    try:
        result["url"] = _renderer(client).generate_url(diagram_type, content, output_format)
    except DiagramError as e:
        log.warning("kroki generate_url failed type=%s: %s", diagram_type, e.code)
        result.update(error=str(e), code=e.code)
    return result


def download(
    diagram_type: str,
    content: str,
    output_path: str,
    output_format: str | None = None,
    scale: float = 1.0,
    client: KrokiClient | None = None,
) -> dict:
    """Render a diagram through Kroki and save it to a local file.

    Args:
      diagram_type:  Grammar name
      content:       Diagram source text
      output_path:   Destination file; parent directories are created
      output_format: Explicit format; defaults to the file extension, then svg
      scale:         SVG size multiplier, >= 0.1 (default 1.0)

    Returns:
      {"saved": bool, "path": str, "output_format": str|None, "bytes": int,
       "error": str|None, "code": str|None}
    """
    try:
        rendered = _renderer(client).download(diagram_type, content, output_path, output_format, scale)
    except DiagramError as e:
        log.warning("kroki download failed type=%s path=%s: %s", diagram_type, output_path, e.code)
        return {"saved": False, "path": output_path, "output_format": output_format, "bytes": 0,
                "error": str(e), "code": e.code}
    return {"saved": True, "path": output_path, "output_format": rendered.output_format,
            "bytes": rendered.size, "error": None, "code": None}
