"""Kroki diagram MCP server (stdio).

Exposes ``generate_diagram_url`` and ``download_diagram`` as Model Context
Protocol tools. Errors propagate as exceptions so the SDK reports them as
tool errors carrying the diagnostic text.

Env vars:
  KROKI_BASE_URL        — Kroki server base (default: https://kroki.io)
  KROKI_TIMEOUT         — HTTP timeout seconds (default: 30)
  DIAGRAM_SVC_LOG_LEVEL — log level for stderr logging (default: INFO)
"""

import logging
import os
import sys
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from kroki_bridge.render.models import DIAGRAM_TYPES, OUTPUT_FORMATS
from kroki_bridge.render.orchestrator import DiagramRenderer
from kroki_bridge.tools.registry import diagram_tools

log = logging.getLogger(__name__)

_tools = diagram_tools()
mcp = FastMCP("kroki-server")

# replaced in tests
renderer = DiagramRenderer()


@mcp.tool(description=_tools.describe("generate_diagram_url"))
def generate_diagram_url(
    type: Annotated[str, Field(description=f"Diagram type, one of: {', '.join(DIAGRAM_TYPES)}")],
    content: Annotated[str, Field(description="The diagram source in the selected grammar")],
    outputFormat: Annotated[
        str | None, Field(description=f"One of: {', '.join(OUTPUT_FORMATS)} (default svg)")
    ] = None,
) -> str:
    return renderer.generate_url(type, content, outputFormat)


@mcp.tool(description=_tools.describe("download_diagram"))
def download_diagram(
    type: Annotated[str, Field(description=f"Diagram type, one of: {', '.join(DIAGRAM_TYPES)}")],
    content: Annotated[str, Field(description="The diagram source in the selected grammar")],
    outputPath: Annotated[str, Field(description="Destination file path including extension")],
    outputFormat: Annotated[
        str | None, Field(description="Output format; defaults to the outputPath extension, then svg")
    ] = None,
    scale: Annotated[float, Field(description="Size multiplier for SVG output", ge=0.1)] = 1.0,
) -> str:
    renderer.download(type, content, outputPath, output_format=outputFormat, scale=scale)
    return f"Diagram saved to {outputPath}"


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.getenv("DIAGRAM_SVC_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Kroki MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
