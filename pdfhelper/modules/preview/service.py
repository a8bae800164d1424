"""Preview service - look up stored documents."""

from pathlib import Path

from pdfhelper.config import get_settings
from pdfhelper.modules.storage import StorageSink
from pdfhelper.shared.errors import NotFoundError, ValidationError
from pdfhelper.shared.logging import get_logger

logger = get_logger(__name__)


class PreviewService:
    """Service for locating previously generated documents."""

    def __init__(self, storage: StorageSink | None = None) -> None:
        self.storage = storage or StorageSink(get_settings().save_path)

    def retrieve(self, name: str | None, path: str | None = "") -> Path:
        """
        Resolve a stored document.

        Args:
            name: Document file name (docName)
            path: Optional subdirectory (docPath)

        Returns:
            Path to the stored file
        """
        if not name or not name.strip():
            raise ValidationError("docName is required", code="MISSING_FIELD")

        target = self.storage.resolve(name, path or "")

        if not self.storage.exists(target):
            logger.info(f"Document not found: {target}")
            raise NotFoundError("Document not found", details={"docName": name, "docPath": path or ""})

        return target
