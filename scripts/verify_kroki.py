"""Live smoke check of the Kroki diagram tools against a real Kroki server."""
import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

results = {}
PASS = "✅"
FAIL = "❌"


# ── 1. Registry ───────────────────────────────────────────────────────────────
try:
    from kroki_bridge.tools.registry import diagram_tools
    tools = diagram_tools().list_tools()
    results["registry"] = (PASS, f"{len(tools)} tools: {', '.join(tools.keys())}")
except Exception as e:
    results["registry"] = (FAIL, str(e))


# ── 2. Link generation ────────────────────────────────────────────────────────
try:
    from kroki_bridge.tools.kroki_tool import generate_url
    r = generate_url("mermaid", "graph TD; A-->B;")
    assert r["error"] is None, r["error"]
    assert "/mermaid/svg/" in r["url"]
    results["generate_url"] = (PASS, f"url: {r['url'][:60]}...")
except Exception as e:
    results["generate_url"] = (FAIL, str(e))


# ── 3. Download with scaling ──────────────────────────────────────────────────
try:
    from kroki_bridge.tools.kroki_tool import download
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "nested", "diagram.svg")
        r = download("graphviz", "digraph G { a -> b }", path, scale=2.0)
        assert r["saved"] is True, r["error"]
        assert os.path.getsize(path) == r["bytes"]
    results["download"] = (PASS, f"{r['bytes']} bytes svg")
except Exception as e:
    results["download"] = (FAIL, str(e))


# ── 4. Broken source is reported, nothing written ────────────────────────────
try:
    from kroki_bridge.tools.kroki_tool import download
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "broken.svg")
        r = download("plantuml", "@startuml\nthis is -> -> not valid\n@enduml", path)
        assert r["saved"] is False
        assert not os.path.exists(path)
    results["diagnostics"] = (PASS, f"{r['code']}: {r['error'].splitlines()[0][:60]}")
except Exception as e:
    results["diagnostics"] = (FAIL, str(e))


for name, (status, note) in results.items():
    print(f"{status} {name:<16} {note}")

sys.exit(0 if all(status == PASS for status, _ in results.values()) else 1)
