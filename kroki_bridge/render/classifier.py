"""Response classification for Kroki renders.

Kroki answers HTTP 200 for some grammars even when the diagram failed to
parse, drawing the error inside an otherwise valid SVG, so the status code
alone never decides success. Decision order, first match wins:

  1. non-2xx status                    -> TransportError
  2. HTML content type or HTML prelude -> HtmlError
  3. svg/base64 with error text nodes  -> InlineImageError
  4. anything else                     -> Success

Binary formats (png, pdf, jpeg) are not introspected for embedded errors.
"""

from dataclasses import dataclass
from typing import Union

from kroki_bridge.render import error_policy
from kroki_bridge.render.models import VECTOR_FORMATS
from kroki_bridge.render.transport import RawResponse


@dataclass(frozen=True)
class Success:
    content: bytes
    content_type: str = ""


@dataclass(frozen=True)
class HtmlError:
    content: bytes
    status_code: int = 200

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class InlineImageError:
    message: str


@dataclass(frozen=True)
class TransportError:
    status_code: int
    body_snippet: str | None = None
    content: bytes = b""
    content_type: str = ""

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


ClassificationOutcome = Union[Success, HtmlError, InlineImageError, TransportError]


def classify(response: RawResponse, output_format: str) -> ClassificationOutcome:
    if not response.is_success:
        return TransportError(
            status_code=response.status_code,
            body_snippet=response.text_snippet(),
            content=response.content,
            content_type=response.content_type,
        )

    prelude = response.content[: error_policy.HTML_SNIFF_CHARS * 4].decode("utf-8", errors="ignore")
    if error_policy.looks_like_html(response.content_type, prelude):
        return HtmlError(content=response.content, status_code=response.status_code)

    if output_format in VECTOR_FORMATS:
        message = error_policy.find_inline_error(response.text())
        if message:
            return InlineImageError(message=message)

    return Success(content=response.content, content_type=response.content_type)


def is_html_document(outcome: TransportError) -> bool:
    """True when a failed response carries an HTML page worth extracting."""
    return error_policy.looks_like_html(outcome.content_type, outcome.text()[: error_policy.HTML_SNIFF_CHARS * 4])
