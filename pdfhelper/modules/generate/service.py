"""
Generate service - drives validation, the renderer session and storage.

Single flow:
    validate -> open session -> new page -> render -> close session -> store

Bulk flow:
    validate whole batch -> open one session -> per document in input order
    (new page -> render -> close page -> store) -> close session

Bulk generation is deliberately non-atomic: when a document fails, files
already stored for earlier documents stay on disk, no results are returned,
and the remaining documents are not rendered.
"""

from pathlib import Path
from typing import Any

from starlette.concurrency import run_in_threadpool

from pdfhelper.config import Settings, get_settings
from pdfhelper.modules.render import SessionFactory, session_factory_from_settings
from pdfhelper.modules.storage import StorageSink
from pdfhelper.shared.errors import GenerationError, PdfHelperError, ValidationError
from pdfhelper.shared.logging import get_logger

from .schemas import (
    SUCCESS_STATUS,
    BulkGenerateResponse,
    DocumentRequest,
    GenerateResponse,
    GenerationStage,
    RenderResult,
)
from .validation import validate_batch, validate_document

logger = get_logger(__name__)


class GenerateService:
    """Service for generating PDF documents from HTML."""

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: SessionFactory | None = None,
        storage: StorageSink | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session_factory = session_factory or session_factory_from_settings(self.settings)
        self.storage = storage or StorageSink(self.settings.save_path)

    async def generate(self, payload: Any) -> GenerateResponse:
        """Render one document and store it."""
        self._advance(GenerationStage.RECEIVED, "document")
        doc = validate_document(payload)
        target = self.storage.resolve(doc.name, doc.path)
        stage = self._advance(GenerationStage.VALIDATED, doc.name)

        try:
            async with self.session_factory() as session:
                stage = self._advance(GenerationStage.SESSION_OPEN, doc.name)
                page = await session.new_page()
                pdf_bytes = await page.render_to_pdf(doc.html)
                stage = self._advance(GenerationStage.PAGE_RENDERED, doc.name)

            await run_in_threadpool(self.storage.write, target, pdf_bytes)
            stage = self._advance(GenerationStage.STORED, doc.name)
        except Exception as e:
            raise self._failure("Failed to generate PDF", stage, e, doc=doc) from e

        self._advance(GenerationStage.RESPONDED, doc.name)
        return GenerateResponse(message="Successfully generated PDF")

    async def generate_bulk(self, payload: Any) -> BulkGenerateResponse:
        """
        Render a batch of documents with one shared renderer session.

        Returns one RenderResult per input document, in input order. Any
        render or write failure aborts the rest of the batch.
        """
        self._advance(GenerationStage.RECEIVED, "batch")
        docs = validate_batch(payload, self.settings.max_generate_bulk)
        targets = self._resolve_all(docs)

        stage = GenerationStage.VALIDATED
        index: int | None = None
        results: list[RenderResult] = []

        logger.info(f"Bulk generation of {len(docs)} documents")

        try:
            async with self.session_factory() as session:
                for index, (doc, target) in enumerate(zip(docs, targets)):
                    stage = self._advance(GenerationStage.SESSION_OPEN, doc.name)
                    page = await session.new_page()
                    pdf_bytes = await page.render_to_pdf(doc.html)
                    await page.close()
                    stage = self._advance(GenerationStage.PAGE_RENDERED, doc.name)

                    await run_in_threadpool(self.storage.write, target, pdf_bytes)
                    stage = self._advance(GenerationStage.STORED, doc.name)

                    results.append(RenderResult(
                        status=SUCCESS_STATUS,
                        doc_name=doc.name,
                        doc_path=self.storage.relative(target),
                    ))
        except Exception as e:
            doc = docs[index] if index is not None else None
            if results:
                logger.warning(
                    f"Bulk generation aborted after {len(results)} stored documents; "
                    "stored files are kept"
                )
            raise self._failure("Failed to generate bulk PDF", stage, e, doc=doc, index=index) from e

        logger.info(f"Bulk generation finished: {len(results)} documents")
        return BulkGenerateResponse(message="Successfully generated bulk PDF", result=results)

    def _resolve_all(self, docs: list[DocumentRequest]) -> list[Path]:
        """Resolve every target path up front so a bad path fails before rendering."""
        targets = []
        for i, doc in enumerate(docs):
            try:
                targets.append(self.storage.resolve(doc.name, doc.path))
            except ValidationError as e:
                raise ValidationError(
                    f"{e.message} (at index {i})",
                    code=e.code,
                    error=e.error,
                    details={**e.details, "index": i},
                ) from e
        return targets

    def _advance(self, stage: GenerationStage, label: str) -> GenerationStage:
        logger.debug(f"{label}: {stage.value}")
        return stage

    def _failure(
        self,
        message: str,
        stage: GenerationStage,
        exc: Exception,
        doc: DocumentRequest | None = None,
        index: int | None = None,
    ) -> GenerationError:
        if isinstance(exc, PdfHelperError):
            error = exc.error or exc.message
        else:
            error = str(exc)

        details: dict[str, Any] = {"stage": stage.value}
        if index is not None:
            details["index"] = index
        if doc is not None:
            details["docName"] = doc.name

        logger.error(f"{message} after stage '{stage.value}': {error}", exc_info=exc)
        return GenerationError(message, error=error, details=details)
