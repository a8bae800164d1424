"""Identifier helpers."""

import uuid


def generate_request_id() -> str:
    """Return a short random request id, e.g. ``req_3f2a9c0d1b7e``."""
    return f"req_{uuid.uuid4().hex[:12]}"
