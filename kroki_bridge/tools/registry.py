from kroki_bridge.render.models import DIAGRAM_TYPES, OUTPUT_FORMATS


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, str] = {}

    def register(self, name: str, description: str) -> None:
        self._tools[name] = description

    def describe(self, name: str) -> str:
        return self._tools[name]

    def list_tools(self) -> dict[str, str]:
        return dict(self._tools)


def diagram_tools() -> ToolRegistry:
    """Return the registry of Kroki diagram tools."""
    registry = ToolRegistry()
    types = ", ".join(DIAGRAM_TYPES)
    formats = ", ".join(OUTPUT_FORMATS)
    registry.register(
        "generate_diagram_url",
        "Generate a Kroki URL for a diagram after checking that it renders. "
        f"Diagram types: {types}. Output formats: {formats} (default svg).",
    )
    registry.register(
        "download_diagram",
        "Render a diagram through Kroki and save it to a local file. The format comes from "
        "outputFormat, else the file extension, else svg; scale resizes SVG output (min 0.1).",
    )
    return registry
