from kroki_bridge.render.classifier import HtmlError, InlineImageError, Success, TransportError
from kroki_bridge.render.extractor import (
    DECODE_FAILURE_HEADLINE,
    UNKNOWN_HEADLINE,
    extract,
)

from kroki_samples import DECODE_ERROR_PAGE, NOT_FOUND_PAGE, PLAIN_DECODE_ERROR


def test_decode_failure_headline_and_details() -> None:
    diagnostic = extract(HtmlError(content=DECODE_ERROR_PAGE))
    assert diagnostic.kind == "decode_failure"
    assert diagnostic.title == DECODE_FAILURE_HEADLINE
    assert "could not decode" in diagnostic.text
    assert diagnostic.detail == "Incorrect header check at position 0"
    assert "Details:\nIncorrect header check" in diagnostic.text


def test_decode_failure_in_title_only() -> None:
    page = b"<html><head><title>Unable to decode</title></head><body></body></html>"
    diagnostic = extract(HtmlError(content=page))
    assert diagnostic.kind == "decode_failure"
    assert diagnostic.detail is None


def test_short_body_is_appended_to_title() -> None:
    diagnostic = extract(HtmlError(content=NOT_FOUND_PAGE))
    assert diagnostic.kind == "html_error"
    assert diagnostic.text == "404 Not Found (The requested diagram type is not available.)"


def test_long_body_is_omitted() -> None:
    page = b"<html><head><title>Server Error</title></head><body><div>" + b"noise " * 200 + b"</div></body></html>"
    diagnostic = extract(HtmlError(content=page))
    assert diagnostic.text == "Server Error"


def test_nothing_recognizable_gives_unknown() -> None:
    diagnostic = extract(HtmlError(content=b"<html><body>  </body></html>"))
    assert diagnostic.kind == "unknown"
    assert diagnostic.title == UNKNOWN_HEADLINE


def test_inline_error_gets_review_instruction() -> None:
    diagnostic = extract(InlineImageError(message="bad syntax"))
    assert diagnostic.kind == "inline_error"
    assert "bad syntax" in diagnostic.text
    assert "review the diagram source" in diagnostic.text


def test_html_transport_error_is_extracted() -> None:
    diagnostic = extract(TransportError(status_code=400, content=DECODE_ERROR_PAGE, content_type="text/html"))
    assert diagnostic.kind == "decode_failure"


def test_extract_never_raises() -> None:
    assert extract(Success(content=b"")).kind == "unknown"
    assert extract(HtmlError(content=b"\xff\xfe<html>\x00")).kind in {"unknown", "html_error"}


def test_plain_text_decode_failure_keeps_body_as_details() -> None:
    diagnostic = extract(TransportError(status_code=400, content=PLAIN_DECODE_ERROR, content_type="text/plain"))
    assert diagnostic.kind == "decode_failure"
    assert diagnostic.detail == PLAIN_DECODE_ERROR.decode()


def test_plain_text_without_decode_marker_is_unknown() -> None:
    diagnostic = extract(TransportError(status_code=400, content=b"Error 400: Syntax Error? (line: 1)"))
    assert diagnostic.kind == "unknown"
