"""
Request validation for document generation.

Runs on the raw JSON body before any renderer is launched.
"""

from typing import Any

from pdfhelper.shared.errors import ValidationError

from .schemas import DocumentRequest

REQUIRED_FIELDS_MESSAGE = "docName, docHtml is required"


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_document(payload: Any, index: int | None = None) -> DocumentRequest:
    """
    Validate one ``{docName, docHtml, docPath?}`` object.

    Args:
        payload: Decoded JSON value
        index: Position in a bulk request, used in the error message

    Raises:
        ValidationError: MISSING_FIELD when docName or docHtml is absent/empty,
            INVALID_FIELD when docPath is not a string
    """
    suffix = f" (at index {index})" if index is not None else ""
    details = {"index": index} if index is not None else {}

    if not isinstance(payload, dict):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE + suffix, code="MISSING_FIELD", details=details)

    name = payload.get("docName")
    html = payload.get("docHtml")
    if not _is_filled(name) or not _is_filled(html):
        missing = [field for field, value in (("docName", name), ("docHtml", html)) if not _is_filled(value)]
        raise ValidationError(
            REQUIRED_FIELDS_MESSAGE + suffix,
            code="MISSING_FIELD",
            details={**details, "missing": missing},
        )

    path = payload.get("docPath")
    if path is None:
        path = ""
    elif not isinstance(path, str):
        raise ValidationError("docPath must be a string" + suffix, code="INVALID_FIELD", details=details)

    return DocumentRequest(docName=name, docHtml=html, docPath=path)


def validate_batch(payload: Any, max_items: int) -> list[DocumentRequest]:
    """
    Validate a whole bulk request, in order, first failure wins.

    Raises:
        ValidationError: EMPTY_BATCH, BATCH_TOO_LARGE or MISSING_FIELD
    """
    if not isinstance(payload, list) or len(payload) == 0:
        raise ValidationError("Docs minimum is 1 length", code="EMPTY_BATCH")

    if len(payload) > max_items:
        raise ValidationError(
            f"Docs maximum is {max_items} length",
            code="BATCH_TOO_LARGE",
            details={"max": max_items, "received": len(payload)},
        )

    return [validate_document(doc, index=i) for i, doc in enumerate(payload)]
