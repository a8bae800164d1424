"""Preview module - serve stored PDFs inline."""

from .router import router
from .service import PreviewService

__all__ = ["router", "PreviewService"]
