"""Human-readable diagnostics for classified Kroki errors.

``extract`` never raises: anything it cannot make sense of becomes the
generic "unknown error" headline.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from kroki_bridge.render import error_policy
from kroki_bridge.render.classifier import (
    ClassificationOutcome,
    HtmlError,
    InlineImageError,
    TransportError,
    is_html_document,
)

log = logging.getLogger(__name__)

DECODE_FAILURE_HEADLINE = (
    "Kroki could not decode the diagram source. Check that the content is valid "
    "for the selected diagram type and that it was sent unmodified."
)
UNKNOWN_HEADLINE = "Unknown error returned by Kroki"
INLINE_ERROR_SUFFIX = "Please review the diagram source and fix the reported problem before rendering again."

DiagnosticKind = Literal["decode_failure", "html_error", "inline_error", "unknown"]


@dataclass(frozen=True)
class DiagnosticMessage:
    kind: DiagnosticKind
    title: str
    detail: str | None = None

    @property
    def text(self) -> str:
        if self.detail:
            return f"{self.title}\n\nDetails:\n{self.detail}"
        return self.title

    def __str__(self) -> str:
        return self.text


def extract(outcome: ClassificationOutcome) -> DiagnosticMessage:
    try:
        if isinstance(outcome, InlineImageError):
            return _from_inline(outcome.message)
        if isinstance(outcome, TransportError) and not is_html_document(outcome):
            return _from_plain(outcome.text())
        if isinstance(outcome, (HtmlError, TransportError)):
            return _from_html(outcome.text())
    except Exception:
        log.exception("Diagnostic extraction failed for %s", type(outcome).__name__)
    return DiagnosticMessage(kind="unknown", title=UNKNOWN_HEADLINE)


def _from_inline(message: str) -> DiagnosticMessage:
    return DiagnosticMessage(
        kind="inline_error",
        title=f"Diagram contains an error: {message.strip()}\n\n{INLINE_ERROR_SUFFIX}",
    )


def _from_plain(text: str) -> DiagnosticMessage:
    """Plain-text error bodies only carry a diagnosis when they name a decode failure."""
    plain = text.strip()
    if error_policy.mentions_decode_failure(plain):
        detail = plain if len(plain) <= error_policy.BODY_TEXT_LIMIT else None
        return DiagnosticMessage(kind="decode_failure", title=DECODE_FAILURE_HEADLINE, detail=detail)
    return DiagnosticMessage(kind="unknown", title=UNKNOWN_HEADLINE)


def _from_html(document: str) -> DiagnosticMessage:
    title = error_policy.extract_title(document)
    body = error_policy.extract_body(document)

    if error_policy.mentions_decode_failure(title, body):
        details = error_policy.extract_preformatted(body)
        return DiagnosticMessage(kind="decode_failure", title=DECODE_FAILURE_HEADLINE, detail=details or None)

    plain = error_policy.strip_markup(body)
    if not title and not plain:
        return DiagnosticMessage(kind="unknown", title=UNKNOWN_HEADLINE)

    headline = title or UNKNOWN_HEADLINE
    if plain and plain != title and len(plain) < error_policy.BODY_TEXT_LIMIT:
        headline = f"{headline} ({plain})"
    return DiagnosticMessage(kind="html_error", title=headline)
