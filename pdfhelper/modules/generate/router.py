"""
Generate module router.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from .schemas import BulkGenerateResponse, GenerateResponse
from .service import GenerateService

router = APIRouter(prefix="/generate", tags=["generate"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Missing docName/docHtml, empty or oversized batch"},
    500: {"description": "Renderer or storage failure"},
}


def get_service() -> GenerateService:
    """Dependency injection for service."""
    return GenerateService()


@router.post("/pdf", response_model=GenerateResponse, responses=ERROR_RESPONSES)
async def generate_pdf(
    payload: Any = Body(
        None,
        examples=[{"docName": "312100001.pdf", "docHtml": "<h1>Invoice</h1>"}],
    ),
    service: GenerateService = Depends(get_service),
) -> GenerateResponse:
    """
    Generate a single PDF.

    Body: ``{docName, docHtml, docPath?}``. The file is stored at
    ``<save_path>/<docPath>/<docName>``, replacing any previous version.
    """
    return await service.generate(payload)


@router.post("/bulk/pdf", response_model=BulkGenerateResponse, responses=ERROR_RESPONSES)
async def generate_bulk_pdf(
    payload: Any = Body(
        None,
        examples=[[
            {"docName": "312100001.pdf", "docHtml": "<h1>Invoice 1</h1>"},
            {"docName": "312100002.pdf", "docHtml": "<h1>Invoice 2</h1>", "docPath": "2024"},
        ]],
    ),
    service: GenerateService = Depends(get_service),
) -> BulkGenerateResponse:
    """
    Generate multiple PDFs with one shared browser.

    Body: array of ``{docName, docHtml, docPath?}``. A failure aborts the
    remaining documents; files already written are kept.
    """
    return await service.generate_bulk(payload)
