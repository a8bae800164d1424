"""
Generate module schemas.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


SUCCESS_STATUS = "00"


class GenerationStage(str, Enum):
    """Last stage a generation request reached."""

    RECEIVED = "received"
    VALIDATED = "validated"
    SESSION_OPEN = "session_open"
    PAGE_RENDERED = "page_rendered"
    STORED = "stored"
    RESPONDED = "responded"


class DocumentRequest(BaseModel):
    """One validated document to render. Immutable once accepted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="docName", min_length=1, description="File name, e.g. 312100001.pdf")
    html: str = Field(..., alias="docHtml", min_length=1, description="Source markup")
    path: str = Field(default="", alias="docPath", description="Optional subdirectory under the output root")


class RenderResult(BaseModel):
    """Outcome of one successfully stored document in a bulk request."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = SUCCESS_STATUS
    doc_name: str = Field(..., alias="docName")
    doc_path: str = Field(..., alias="docPath", description="Stored path relative to the output root")


class GenerateResponse(BaseModel):
    """Response after generating a single document."""
    message: str


class BulkGenerateResponse(BaseModel):
    """Response after generating a batch of documents."""
    message: str
    result: list[RenderResult] = Field(default_factory=list)
