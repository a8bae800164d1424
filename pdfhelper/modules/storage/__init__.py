"""Storage module - persist generated documents under the output root."""

from .service import StorageSink

__all__ = ["StorageSink"]
