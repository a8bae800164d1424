"""Shared lightweight types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Per-request values attached to log records and error bodies."""

    request_id: str
