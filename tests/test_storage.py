"""Tests for the storage sink."""

from pathlib import Path

import pytest

from pdfhelper.modules.storage import StorageSink
from pdfhelper.shared.errors import StorageError, ValidationError


class TestResolve:

    def test_name_only(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        assert sink.resolve("a.pdf") == temp_dir.resolve() / "a.pdf"

    def test_with_subdirectory(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        target = sink.resolve("a.pdf", "2024/invoices")

        assert target == temp_dir.resolve() / "2024" / "invoices" / "a.pdf"
        assert sink.relative(target) == "2024/invoices/a.pdf"

    @pytest.mark.parametrize("name,path", [
        ("../escape.pdf", ""),
        ("a.pdf", "../../elsewhere"),
        ("/etc/passwd", ""),
        ("a\x00.pdf", ""),
        ("a.pdf", "sub\x00dir"),
    ])
    def test_rejects_paths_outside_root(self, temp_dir: Path, name: str, path: str) -> None:
        sink = StorageSink(temp_dir)
        with pytest.raises(ValidationError):
            sink.resolve(name, path)

    def test_rejects_root_itself(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        with pytest.raises(ValidationError):
            sink.resolve(".", "")


class TestWrite:

    def test_creates_parent_directories(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        target = sink.resolve("a.pdf", "nested/dir")

        sink.write(target, b"%PDF-1.4")

        assert target.read_bytes() == b"%PDF-1.4"
        assert sink.exists(target)

    def test_overwrites_existing_file(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        target = sink.resolve("a.pdf")

        sink.write(target, b"first")
        sink.write(target, b"second")

        assert target.read_bytes() == b"second"

    def test_leaves_no_temp_files(self, temp_dir: Path) -> None:
        sink = StorageSink(temp_dir)
        sink.write(sink.resolve("a.pdf"), b"data")

        assert [p.name for p in temp_dir.iterdir()] == ["a.pdf"]

    def test_failure_raises_storage_error(self, temp_dir: Path) -> None:
        (temp_dir / "blocker").write_text("not a directory")
        sink = StorageSink(temp_dir)
        target = sink.resolve("a.pdf", "blocker")

        with pytest.raises(StorageError):
            sink.write(target, b"data")

    def test_exists_is_false_for_directories(self, temp_dir: Path) -> None:
        (temp_dir / "sub").mkdir()
        sink = StorageSink(temp_dir)
        assert sink.exists(temp_dir / "sub") is False
