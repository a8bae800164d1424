"""
Storage sink - generated documents on the local filesystem.

Documents live at ``<root>/<docPath>/<docName>``. There is no index or
manifest; presence is a filesystem lookup.
"""

import os
import tempfile
from pathlib import Path

from pdfhelper.shared.errors import StorageError, ValidationError
from pdfhelper.shared.logging import get_logger

logger = get_logger(__name__)


class StorageSink:
    """Resolves logical document names to paths and persists bytes."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def resolve(self, name: str, path: str = "") -> Path:
        """
        Compose ``root / path / name`` and make sure it stays under root.

        Raises:
            ValidationError: if the result escapes the root or is the root.
        """
        try:
            target = (self.root / (path or "") / name).resolve()
        except (ValueError, OSError) as e:
            # e.g. embedded null byte
            raise ValidationError(
                "docName/docPath is not a valid file path",
                error=str(e),
                details={"docName": name, "docPath": path},
            ) from e

        try:
            rel = target.relative_to(self.root)
        except ValueError:
            raise ValidationError(
                "docName/docPath must stay inside the output directory",
                details={"docName": name, "docPath": path},
            ) from None

        if rel == Path("."):
            raise ValidationError("docName must name a file", details={"docName": name})

        return target

    def relative(self, target: Path) -> str:
        """Posix subpath of ``target`` below root."""
        return target.relative_to(self.root).as_posix()

    def write(self, target: Path, data: bytes) -> Path:
        """
        Atomically write ``data`` to ``target``, replacing any existing file.

        Writes to a temp file in the same directory, then renames.
        """
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=f".tmp_{target.name}_")
        except OSError as e:
            raise StorageError("Failed to write document", error=str(e)) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, target)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError("Failed to write document", error=str(e)) from e

        logger.info(f"Stored {len(data)} bytes at {target}")
        return target

    def exists(self, target: Path) -> bool:
        return target.is_file()
