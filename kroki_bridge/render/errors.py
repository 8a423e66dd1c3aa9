"""Error taxonomy for diagram rendering operations."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kroki_bridge.render.extractor import DiagnosticMessage


class DiagramError(Exception):
    """Base error for the rendering operations. ``code`` is stable."""

    code = "diagram_error"

    def __init__(
        self,
        message: str,
        *,
        diagnostic: DiagnosticMessage | None = None,
        output_path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic
        self.output_path = output_path

    def __str__(self) -> str:
        if self.output_path:
            return f"{self.message}\n\nTarget file: {self.output_path}"
        return self.message

    def annotate(self, output_path: str) -> "DiagramError":
        """Return a copy of this error that references the intended target file."""
        annotated = copy.copy(self)
        annotated.output_path = output_path
        annotated.args = (str(annotated),)
        return annotated

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": str(self),
            "details": self.diagnostic.detail if self.diagnostic else None,
        }


class InvalidParamsError(DiagramError, ValueError):
    """Raised when the diagram type, format, content or scale is invalid."""

    code = "invalid_params"


class RemoteDecodeError(DiagramError):
    """Raised when Kroki could not decode or parse the diagram source."""

    code = "remote_decode_error"


class InlineRenderError(DiagramError):
    """Raised when Kroki rendered an image whose content is an error message."""

    code = "inline_render_error"


class TransportFailure(DiagramError):
    """Raised for non-2xx responses and network-level failures."""

    code = "transport_failure"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body_snippet: str | None = None,
        diagnostic: DiagnosticMessage | None = None,
        output_path: str | None = None,
    ) -> None:
        super().__init__(message, diagnostic=diagnostic, output_path=output_path)
        self.status_code = status_code
        self.body_snippet = body_snippet

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["status_code"] = self.status_code
        if payload["details"] is None:
            payload["details"] = self.body_snippet
        return payload


class InternalUnexpectedError(DiagramError):
    """Raised for failures that fit none of the other categories."""

    code = "internal_error"
