from unittest.mock import MagicMock, patch

import pytest

from docintel.database.models import JobKind
from docintel.database.repositories.chunk_repository import ChunkRepository
from docintel.database.repositories.documents_repository import DocumentsRepository
from docintel.database.repositories.job_repository import JobRepository
from docintel.database.repositories.scan_repository import ScanRepository
from docintel.processor.exceptions import DocumentNotFoundError, ScanNotFoundError
from docintel.processor.models import Document


def _document_row() -> dict:
    return {
        "id": 1,
        "owner_id": 10,
        "original_name": "handbook.pdf",
        "mime_type": "application/pdf",
        "storage_disk": "local",
        "storage_path": "10/handbook.pdf",
        "processed_at": None,
        "processing_error": None,
        "is_active": True,
    }


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestDocumentsRepository:
    @patch("docintel.database.repositories.documents_repository.get_connection")
    def test_find_by_id_returns_document(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _document_row()

        result = DocumentsRepository().find_by_id(1)

        assert isinstance(result, Document)
        assert result.owner_id == 10
        assert result.storage_path == "10/handbook.pdf"

    @patch("docintel.database.repositories.documents_repository.get_connection")
    def test_find_by_id_raises_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document 999 not found"):
            DocumentsRepository().find_by_id(999)

    @patch("docintel.database.repositories.documents_repository.get_connection")
    def test_mark_processed_raises_when_no_row_updated(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(DocumentNotFoundError):
            DocumentsRepository().mark_processed(5, error="boom")

        mock_conn.commit.assert_not_called()


class TestChunkRepository:
    @patch("docintel.database.repositories.chunk_repository.get_connection")
    def test_list_embedded_converts_vectors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {
                "id": 4,
                "document_id": 1,
                "chunk_index": 0,
                "content": "text",
                "embedding": [1, 0.5],
                "original_name": "handbook.pdf",
            }
        ]

        (chunk,) = ChunkRepository().list_embedded()

        assert chunk.embedding == [1.0, 0.5]
        assert chunk.document_name == "handbook.pdf"

    @patch("docintel.database.repositories.chunk_repository.get_connection")
    def test_delete_by_document_returns_rowcount(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 3

        assert ChunkRepository().delete_by_document(1) == 3
        mock_conn.commit.assert_called_once()


class TestScanRepository:
    @patch("docintel.database.repositories.scan_repository.get_connection")
    def test_find_by_public_id_raises_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(ScanNotFoundError, match="pub-x"):
            ScanRepository().find_by_public_id("pub-x")


class TestJobRepositoryEnqueue:
    @patch("docintel.database.repositories.job_repository.get_connection")
    def test_inserts_new_job(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (43,)

        assert JobRepository(max_attempts=3).enqueue(JobKind.SCAN_DOCUMENT, 1) == 43
        assert mock_cursor.execute.call_count == 1
        sql, params = mock_cursor.execute.call_args.args
        assert "ON CONFLICT" in sql
        assert params == ("scan_document", 1)

    @patch("docintel.database.repositories.job_repository.get_connection")
    def test_conflict_returns_in_flight_job(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.side_effect = [None, (42,)]

        assert JobRepository(max_attempts=3).enqueue(JobKind.INDEX_DOCUMENT, 1) == 42
        assert mock_cursor.execute.call_count == 2

    @patch("docintel.database.repositories.job_repository.get_connection")
    def test_inserts_again_when_in_flight_job_finished(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.side_effect = [None, None, (44,)]

        assert JobRepository(max_attempts=3).enqueue(JobKind.INDEX_DOCUMENT, 1) == 44
        assert mock_cursor.execute.call_count == 3
