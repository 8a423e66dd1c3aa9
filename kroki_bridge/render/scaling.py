"""Best-effort resizing of rendered SVG documents.

Only the width/height attributes of the first ``<svg>`` opening tag are
rewritten; the viewBox keeps the drawing proportional. Any failure returns
the input unchanged.
"""

import logging
import re

log = logging.getLogger(__name__)

_SVG_OPEN_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_DIMENSION_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+(?:[eE][+-]?[0-9]+)?)\s*([a-zA-Z%]*)\s*$")


def _attribute_re(name: str) -> re.Pattern:
    # the lookbehind keeps stroke-width and friends out
    return re.compile(rf"(?<![\w:-])({name}\s*=\s*)([\"'])(.*?)\2", re.IGNORECASE | re.DOTALL)


_WIDTH_RE = _attribute_re("width")
_HEIGHT_RE = _attribute_re("height")


def _scale_dimension(value: str, scale: float) -> str:
    match = _DIMENSION_RE.match(value)
    if not match:
        raise ValueError(f"unparseable dimension {value!r}")
    number, unit = match.groups()
    return f"{float(number) * scale:.2f}{unit or 'px'}"


def _scale_tag(tag: str, scale: float) -> str:
    for pattern in (_WIDTH_RE, _HEIGHT_RE):
        match = pattern.search(tag)
        if not match:
            continue
        prefix, quote, value = match.groups()
        replacement = f"{prefix}{quote}{_scale_dimension(value, scale)}{quote}"
        tag = tag[: match.start()] + replacement + tag[match.end():]
    return tag


def apply_scale(content: bytes, scale: float, output_format: str = "svg") -> bytes:
    """Multiply the root SVG width/height by ``scale``.

    No-op for any format other than svg (base64 included) and for scale 1.0.
    """
    if output_format != "svg" or scale == 1.0:
        return content
    try:
        document = content.decode("utf-8")
        match = _SVG_OPEN_TAG_RE.search(document)
        if not match:
            return content
        scaled_tag = _scale_tag(match.group(0), scale)
    except (UnicodeDecodeError, ValueError) as exc:
        log.debug("Skipping SVG scaling: %s", exc)
        return content
    return (document[: match.start()] + scaled_tag + document[match.end():]).encode("utf-8")
