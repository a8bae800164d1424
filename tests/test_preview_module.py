"""Tests for preview module."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pdfhelper.modules.preview import PreviewService
from pdfhelper.modules.storage import StorageSink
from pdfhelper.shared.errors import NotFoundError, ValidationError


class TestPreviewRoute:

    def test_preview_streams_stored_pdf(self, client: TestClient, temp_dir: Path) -> None:
        (temp_dir / "a.pdf").write_bytes(b"%PDF-1.4 stored")

        resp = client.get("/preview/pdf", params={"docName": "a.pdf"})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-disposition"] == 'inline; filename="a.pdf"'
        assert resp.content == b"%PDF-1.4 stored"

    def test_preview_non_ascii_name(self, client: TestClient, temp_dir: Path) -> None:
        client.post("/generate/pdf", json={"docName": "文件.pdf", "docHtml": "<p>你好</p>"})
        assert (temp_dir / "文件.pdf").exists()

        resp = client.get("/preview/pdf", params={"docName": "文件.pdf"})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-disposition"] == (
            "inline; filename*=utf-8''%E6%96%87%E4%BB%B6.pdf"
        )

    def test_preview_with_doc_path(self, client: TestClient, temp_dir: Path) -> None:
        (temp_dir / "2024").mkdir()
        (temp_dir / "2024" / "b.pdf").write_bytes(b"%PDF-1.4 nested")

        resp = client.get("/preview/pdf", params={"docName": "b.pdf", "docPath": "2024"})

        assert resp.status_code == 200
        assert resp.content == b"%PDF-1.4 nested"

    def test_preview_missing_document(self, client: TestClient) -> None:
        resp = client.get("/preview/pdf", params={"docName": "missing.pdf"})

        assert resp.status_code == 404
        assert resp.json()["message"] == "Document not found"

    def test_preview_requires_doc_name(self, client: TestClient) -> None:
        resp = client.get("/preview/pdf")

        assert resp.status_code == 400
        assert resp.json()["message"] == "docName is required"

    def test_preview_rejects_path_escape(self, client: TestClient, temp_dir: Path) -> None:
        resp = client.get("/preview/pdf", params={"docName": "../secret.pdf"})
        assert resp.status_code == 400

    def test_preview_rejects_null_byte(self, client: TestClient) -> None:
        resp = client.get("/preview/pdf", params={"docName": "a\x00.pdf"})
        assert resp.status_code == 400

    def test_generate_then_preview(self, client: TestClient) -> None:
        client.post("/generate/pdf", json={"docName": "a.pdf", "docHtml": "<h1>Hi</h1>"})

        resp = client.get("/preview/pdf", params={"docName": "a.pdf"})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert b"<h1>Hi</h1>" in resp.content


class TestPreviewService:

    def test_retrieve_returns_path(self, temp_dir: Path) -> None:
        (temp_dir / "a.pdf").write_bytes(b"x")
        service = PreviewService(storage=StorageSink(temp_dir))

        assert service.retrieve("a.pdf") == (temp_dir / "a.pdf").resolve()

    def test_retrieve_missing_raises_not_found(self, temp_dir: Path) -> None:
        service = PreviewService(storage=StorageSink(temp_dir))
        with pytest.raises(NotFoundError):
            service.retrieve("nope.pdf", "sub")

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_retrieve_requires_name(self, temp_dir: Path, name) -> None:
        service = PreviewService(storage=StorageSink(temp_dir))
        with pytest.raises(ValidationError):
            service.retrieve(name)
