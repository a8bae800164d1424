"""
Error types shared across modules.

Every error carries a machine-readable code and the HTTP status the API
layer should answer with. The app-level handler turns them into
``{"message", "error", "code", "details", "request_id"}`` bodies.
"""

from typing import Any


class PdfHelperError(Exception):
    """Base class for all PdfHelper errors."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        error: str | None = None,
        details: dict[str, Any] | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        self.details = details or {}
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.error is not None:
            data["error"] = self.error
        if self.details:
            data["details"] = self.details
        return data


class ValidationError(PdfHelperError):
    """Missing/empty field, empty or oversized batch, unsafe path."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(PdfHelperError):
    """Requested document does not exist in storage."""

    code = "NOT_FOUND"
    http_status = 404


class RendererError(PdfHelperError):
    """Browser launch, page creation or PDF rendering failed."""

    code = "RENDERER_ERROR"


class StorageError(PdfHelperError):
    """Writing or reading a stored document failed."""

    code = "STORAGE_ERROR"


class GenerationError(PdfHelperError):
    """Aggregate failure of a single or bulk generation request."""

    code = "GENERATION_FAILED"
