"""Preview module routes."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse

from .service import PreviewService

router = APIRouter(prefix="/preview", tags=["preview"])


def get_service() -> PreviewService:
    """Dependency injection for service."""
    return PreviewService()


@router.get(
    "/pdf",
    response_class=FileResponse,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The stored PDF"},
        400: {"description": "docName is missing"},
        404: {"description": "Document not found"},
    },
)
async def preview_pdf(
    doc_name: str | None = Query(None, alias="docName", description="Stored file name"),
    doc_path: str | None = Query(None, alias="docPath", description="Optional subdirectory"),
    service: PreviewService = Depends(get_service),
) -> FileResponse:
    """Stream a previously generated PDF for inline display."""
    path = service.retrieve(doc_name, doc_path)

    # Starlette switches to filename*=utf-8'' for names outside ASCII
    return FileResponse(
        path=path,
        media_type="application/pdf",
        filename=doc_name,
        content_disposition_type="inline",
    )
