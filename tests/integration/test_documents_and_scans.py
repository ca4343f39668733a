from datetime import datetime, timezone

import pytest

from docintel.database.repositories.documents_repository import DocumentsRepository
from docintel.database.repositories.scan_repository import ScanRepository
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.scoring.compiler import ScoreCompiler


@pytest.mark.integration
class TestDocumentsRepository:
    def test_mark_processed_with_error(self, seed_document: int) -> None:
        repo = DocumentsRepository()
        repo.mark_processed(seed_document, error="bad pdf")

        document = repo.find_by_id(seed_document)
        assert document.processed_at is not None
        assert document.processing_error == "bad pdf"

        repo.reset_processed(seed_document)
        assert repo.find_by_id(seed_document).processed_at is None

    def test_soft_deleted_document_is_not_found(self, seed_document: int) -> None:
        repo = DocumentsRepository()
        repo.soft_delete(seed_document)
        with pytest.raises(DocumentNotFoundError):
            repo.find_by_id(seed_document)


@pytest.mark.integration
class TestScanRepository:
    def test_result_round_trip(self, clean_tables: None) -> None:
        repo = ScanRepository()
        scan_id = repo.create(
            public_id="pub-1",
            owner_id=1,
            file_name="statement.pdf",
            mime_type="application/pdf",
            file_size_bytes=10,
            temp_path="/tmp/docintel-scans/x.pdf",
        )
        result = ScoreCompiler().compile(
            "pub-1",
            "consistent",
            [],
            timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

        repo.save_result(scan_id, result)

        stored = repo.find_by_public_id("pub-1")
        assert stored.status == "complete"
        assert stored.result is not None
        assert stored.result["recommendation"] == "accept"
        assert stored.completed_at is not None
        assert [s.public_id for s in repo.list_recent(1)] == ["pub-1"]

    def test_mark_failed(self, clean_tables: None) -> None:
        repo = ScanRepository()
        scan_id = repo.create(
            public_id="pub-2",
            owner_id=1,
            file_name="photo.png",
            mime_type="image/png",
            file_size_bytes=10,
            temp_path="/tmp/docintel-scans/y.png",
        )
        repo.mark_failed(scan_id, "Unreadable image")
        stored = repo.find_by_id(scan_id)
        assert stored.status == "failed"
        assert stored.error_message == "Unreadable image"
        assert stored.result is None
