import httpx

from kroki_bridge.render.transport import KrokiClient
from kroki_bridge.tools.kroki_tool import download, generate_url
from kroki_bridge.tools.registry import diagram_tools

from kroki_samples import DECODE_ERROR_PAGE, PLAIN_SVG


def _kroki(status: int, content: bytes) -> KrokiClient:
    return KrokiClient(
        base_url="https://kroki.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(status, content=content)),
    )


def test_generate_url_ok() -> None:
    result = generate_url("graphviz", "digraph { a -> b }", client=_kroki(200, PLAIN_SVG))
    assert result["error"] is None
    assert result["url"].startswith("https://kroki.test/graphviz/svg/")


def test_generate_url_reports_error_instead_of_raising() -> None:
    result = generate_url("nope", "x", client=_kroki(200, PLAIN_SVG))
    assert result["url"] is None
    assert result["code"] == "invalid_params"
    assert "Invalid diagram type" in result["error"]


def test_download_ok(tmp_path) -> None:
    target = tmp_path / "a.svg"
    result = download("mermaid", "graph TD; A-->B;", str(target), client=_kroki(200, PLAIN_SVG))
    assert result["saved"] is True
    assert result["bytes"] == len(PLAIN_SVG)
    assert target.exists()


def test_download_failure(tmp_path) -> None:
    target = tmp_path / "a.svg"
    result = download("plantuml", "bad", str(target), client=_kroki(200, DECODE_ERROR_PAGE))
    assert result["saved"] is False
    assert result["code"] == "remote_decode_error"
    assert str(target) in result["error"]
    assert not target.exists()


def test_registry_describes_tools() -> None:
    tools = diagram_tools().list_tools()
    assert "mermaid" in tools["generate_diagram_url"]
    assert "download_diagram" in tools
