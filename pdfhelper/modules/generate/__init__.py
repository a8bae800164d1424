"""Generate module - single and bulk HTML to PDF generation."""

from .router import router
from .schemas import BulkGenerateResponse, DocumentRequest, GenerateResponse, RenderResult
from .service import GenerateService

__all__ = [
    "router",
    "GenerateService",
    "DocumentRequest",
    "GenerateResponse",
    "BulkGenerateResponse",
    "RenderResult",
]
