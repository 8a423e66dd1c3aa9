import math
from dataclasses import dataclass

from pydantic import BaseModel

DIAGRAM_TYPES = (
    "mermaid",
    "plantuml",
    "graphviz",
    "c4plantuml",
    "excalidraw",
    "erd",
    "svgbob",
    "nomnoml",
    "wavedrom",
    "blockdiag",
    "seqdiag",
    "actdiag",
    "nwdiag",
    "packetdiag",
    "rackdiag",
    "umlet",
    "ditaa",
    "vega",
    "vegalite",
)

OUTPUT_FORMATS = ("svg", "png", "pdf", "jpeg", "base64")

# base64 output is fetched as svg and wrapped locally
VECTOR_FORMATS = ("svg", "base64")

DEFAULT_FORMAT = "svg"
MIN_SCALE = 0.1

# file extensions that name a format differently
EXTENSION_ALIASES = {"jpg": "jpeg", "b64": "base64"}


def wire_format(output_format: str) -> str:
    """Format segment sent to Kroki for a requested output format."""
    return "svg" if output_format == "base64" else output_format


class DiagramRequest(BaseModel):
    diagram_type: str
    content: str
    output_format: str = DEFAULT_FORMAT
    scale: float = 1.0
    output_path: str | None = None

    @property
    def scale_is_valid(self) -> bool:
        return math.isfinite(self.scale) and self.scale >= MIN_SCALE


@dataclass(frozen=True)
class RenderResult:
    content: bytes
    output_format: str
    url: str
    content_type: str = ""
    path: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)
