"""Markup scraping rules for Kroki error responses.

Kroki reports failures in three shapes: an HTML error page, a plain-text
body on a non-2xx status, or an SVG that renders the error text inside the
image (mermaid and a few other grammars do this with HTTP 200). Every regex
and marker phrase that depends on that upstream markup lives here; when the
upstream pages change, bump ``POLICY_VERSION`` and update this module only.
"""

import html
import re

POLICY_VERSION = 1

# chars inspected when sniffing an HTML document
HTML_SNIFF_CHARS = 100
# plain body text at or above this length is not appended to the headline
BODY_TEXT_LIMIT = 300

DECODE_FAILURE_PHRASES = (
    "unable to decode",
    "cannot decode",
    "could not decode",
    "failed to decode",
)

# a doctype alone is enough: long public identifiers push <html past the window
_HTML_START_RE = re.compile(r"^<(?:!doctype\s+html\b|html[\s>])", re.IGNORECASE)
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_BODY_RE = re.compile(r"<body[^>]*>(.*?)(?:</body>|\Z)", re.IGNORECASE | re.DOTALL)
_HEAD_RE = re.compile(r"<head[^>]*>.*?</head>", re.IGNORECASE | re.DOTALL)
_PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", re.IGNORECASE | re.DOTALL)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")

_ERROR_CLASS_TEXT_RE = re.compile(
    r"<text\b[^>]*\bclass\s*=\s*([\"'])(?:[^\"']*\s)?error(?:\s[^\"']*)?\1[^>]*>(.*?)</text>",
    re.IGNORECASE | re.DOTALL,
)
_RED_FILL_TEXT_RE = re.compile(
    r"<text\b[^>]*\bfill\s*=\s*([\"'])\s*(?:red|#f00|#ff0000)\s*\1[^>]*>(.*?)</text>",
    re.IGNORECASE | re.DOTALL,
)


def looks_like_html(content_type: str, text: str) -> bool:
    if "html" in (content_type or "").lower():
        return True
    return bool(_HTML_START_RE.match(text[:HTML_SNIFF_CHARS].lstrip()))


def _inline_text(markup: str) -> str:
    text = _BR_RE.sub("\n", markup)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    return "\n".join(line.strip() for line in text.strip().splitlines())


def find_inline_error(svg_text: str) -> str | None:
    """Return the error text an SVG renders about itself, or None."""
    for pattern in (_ERROR_CLASS_TEXT_RE, _RED_FILL_TEXT_RE):
        messages = [_inline_text(m.group(2)) for m in pattern.finditer(svg_text)]
        messages = [m for m in messages if m]
        if messages:
            return "\n".join(messages)
    return None


def extract_title(document: str) -> str:
    match = _TITLE_RE.search(document)
    if not match:
        return ""
    return _WS_RE.sub(" ", html.unescape(_TAG_RE.sub("", match.group(1)))).strip()


def extract_body(document: str) -> str:
    """Markup between the body tags, or the document minus its head."""
    match = _BODY_RE.search(document)
    if match:
        return match.group(1)
    return _HEAD_RE.sub("", document)


def extract_preformatted(body: str) -> str:
    match = _PRE_RE.search(body)
    return match.group(1).strip() if match else ""


def mentions_decode_failure(*fragments: str) -> bool:
    haystack = " ".join(fragments).lower()
    return any(phrase in haystack for phrase in DECODE_FAILURE_PHRASES)


def strip_markup(markup: str) -> str:
    text = _SCRIPT_STYLE_RE.sub(" ", markup)
    text = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", html.unescape(text)).strip()
