"""Kroki source encoding — deflate + URL-safe base64.

The token is write-only: it is embedded in the request path and never
decoded on this side.
"""

import base64
import zlib


def encode(source: str) -> str:
    """Encode diagram source text into a Kroki path token.

    Same input always yields the same token. Empty text is allowed and still
    produces a valid token.
    """
    compressed = zlib.compress(source.encode("utf-8"), 9)
    return base64.b64encode(compressed).decode("ascii").replace("+", "-").replace("/", "_")
