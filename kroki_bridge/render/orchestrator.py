"""Diagram operations: shareable Kroki links and rendering to local files.

Each call is a straight pipeline:

    validate -> encode -> fetch -> classify -> (extract | scale) -> result

Validation always happens before the network is touched, and a file is only
written once the whole pipeline has succeeded.
"""

import base64
import logging
from pathlib import Path

from pydantic import ValidationError

from kroki_bridge.render.classifier import (
    ClassificationOutcome,
    HtmlError,
    InlineImageError,
    Success,
    TransportError,
    classify,
    is_html_document,
)
from kroki_bridge.render.encoder import encode
from kroki_bridge.render.errors import (
    DiagramError,
    InlineRenderError,
    InternalUnexpectedError,
    InvalidParamsError,
    RemoteDecodeError,
    TransportFailure,
)
from kroki_bridge.render.extractor import extract
from kroki_bridge.render.models import (
    DEFAULT_FORMAT,
    DIAGRAM_TYPES,
    EXTENSION_ALIASES,
    MIN_SCALE,
    OUTPUT_FORMATS,
    DiagramRequest,
    RenderResult,
    wire_format,
)
from kroki_bridge.render.scaling import apply_scale
from kroki_bridge.render.transport import KrokiClient

log = logging.getLogger(__name__)


def build_request(**fields) -> DiagramRequest:
    try:
        return DiagramRequest(**fields)
    except ValidationError as exc:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
        raise InvalidParamsError(f"Invalid diagram request: {problems}") from exc


def validate_request(request: DiagramRequest) -> None:
    if request.diagram_type not in DIAGRAM_TYPES:
        raise InvalidParamsError(f"Invalid diagram type. Must be one of: {', '.join(DIAGRAM_TYPES)}")
    if request.output_format not in OUTPUT_FORMATS:
        raise InvalidParamsError(f"Invalid output format. Must be one of: {', '.join(OUTPUT_FORMATS)}")
    if not request.content.strip():
        raise InvalidParamsError("Diagram content must not be empty")
    if not request.scale_is_valid:
        raise InvalidParamsError(f"Invalid scale {request.scale}. Must be a number >= {MIN_SCALE}")


def format_from_path(output_path: str, output_format: str | None = None) -> str:
    """Explicit format, else the file extension, else svg."""
    if output_format:
        return output_format
    extension = Path(output_path).suffix.lstrip(".").lower()
    if not extension:
        return DEFAULT_FORMAT
    return EXTENSION_ALIASES.get(extension, extension)


def error_for_outcome(outcome: ClassificationOutcome) -> DiagramError:
    """Map a failed classification to the error raised to the caller."""
    if isinstance(outcome, InlineImageError):
        diagnostic = extract(outcome)
        return InlineRenderError(diagnostic.text, diagnostic=diagnostic)

    if isinstance(outcome, HtmlError):
        diagnostic = extract(outcome)
        if diagnostic.kind == "decode_failure":
            return RemoteDecodeError(diagnostic.text, diagnostic=diagnostic)
        return TransportFailure(
            f"Kroki returned an HTML error page instead of a diagram: {diagnostic.text}",
            status_code=outcome.status_code,
            diagnostic=diagnostic,
        )

    if isinstance(outcome, TransportError):
        if outcome.status_code == 400:
            diagnostic = extract(outcome)
            if diagnostic.kind == "decode_failure":
                return RemoteDecodeError(diagnostic.text, diagnostic=diagnostic)
            if not is_html_document(outcome):
                diagnostic = None
            detail = diagnostic.text if diagnostic is not None else outcome.body_snippet
            message = "Kroki rejected the diagram (HTTP 400); this is most likely a syntax error in the diagram source."
            if detail:
                message = f"{message}\n\nDetails:\n{detail}"
            return TransportFailure(
                message,
                status_code=400,
                body_snippet=outcome.body_snippet,
                diagnostic=diagnostic,
            )
        message = f"Kroki request failed with HTTP {outcome.status_code}"
        if outcome.body_snippet:
            message = f"{message}: {outcome.body_snippet}"
        return TransportFailure(message, status_code=outcome.status_code, body_snippet=outcome.body_snippet)

    return InternalUnexpectedError(f"Unexpected classification outcome: {type(outcome).__name__}")


def write_diagram_file(output_path: str, content: bytes) -> Path:
    """Write ``content`` to ``output_path``, creating parent directories.

    A write that fails part-way removes the partial file.
    """
    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        target.write_bytes(content)
    except OSError:
        target.unlink(missing_ok=True)
        raise
    return target


class DiagramRenderer:
    """Runs the two diagram operations against a Kroki client."""

    def __init__(self, client: KrokiClient | None = None) -> None:
        self.client = client or KrokiClient()

    def _fetch_outcome(self, request: DiagramRequest) -> ClassificationOutcome:
        response = self.client.fetch(request.diagram_type, request.output_format, encode(request.content))
        return classify(response, request.output_format)

    def _run(self, request: DiagramRequest) -> Success:
        try:
            outcome = self._fetch_outcome(request)
        except DiagramError:
            raise
        except Exception as exc:
            log.exception("Unexpected failure rendering %s diagram", request.diagram_type)
            raise InternalUnexpectedError(f"Unexpected error while rendering diagram: {exc}") from exc
        if isinstance(outcome, Success):
            return outcome
        error = error_for_outcome(outcome)
        log.warning(
            "Kroki render failed type=%s format=%s code=%s",
            request.diagram_type,
            request.output_format,
            error.code,
        )
        raise error

    def generate_url(self, diagram_type: str, content: str, output_format: str | None = None) -> str:
        """Return a Kroki link for the diagram after checking it renders."""
        request = build_request(
            diagram_type=diagram_type,
            content=content,
            output_format=output_format or DEFAULT_FORMAT,
        )
        validate_request(request)
        # base64 only wraps svg, so svg is the probe for it
        probe = request.model_copy(update={"output_format": wire_format(request.output_format)})
        self._run(probe)
        url = self.client.url_for(request.diagram_type, request.output_format, encode(request.content))
        log.info("Generated %s diagram url format=%s", request.diagram_type, request.output_format)
        return url

    def render(self, request: DiagramRequest) -> RenderResult:
        validate_request(request)
        success = self._run(request)
        content = apply_scale(success.content, request.scale, request.output_format)
        if request.output_format == "base64":
            content = base64.b64encode(content)
        url = self.client.url_for(request.diagram_type, request.output_format, encode(request.content))
        return RenderResult(
            content=content,
            output_format=request.output_format,
            url=url,
            content_type=success.content_type,
            path=request.output_path,
        )

    def download(
        self,
        diagram_type: str,
        content: str,
        output_path: str,
        output_format: str | None = None,
        scale: float = 1.0,
    ) -> RenderResult:
        """Render the diagram and save it to ``output_path``."""
        if not output_path or not output_path.strip():
            raise InvalidParamsError("outputPath must not be empty")
        try:
            request = build_request(
                diagram_type=diagram_type,
                content=content,
                output_format=format_from_path(output_path, output_format),
                scale=scale,
                output_path=output_path,
            )
            result = self.render(request)
        except DiagramError as exc:
            raise exc.annotate(output_path) from exc
        try:
            write_diagram_file(output_path, result.content)
        except OSError as exc:
            raise InternalUnexpectedError(
                f"Failed to write diagram file: {exc}", output_path=output_path
            ) from exc
        log.info("Diagram saved to %s (%s bytes, %s)", output_path, result.size, result.output_format)
        return result
