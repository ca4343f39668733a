from typing import Any

from psycopg.rows import dict_row

from docintel.database.connection import get_connection
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.processor.models import Document

_COLUMNS = """
    id, owner_id, original_name, mime_type, storage_disk, storage_path,
    processed_at, processing_error, is_active
"""


class DocumentsRepository:
    """Database operations for the documents table."""

    def create(
        self,
        owner_id: int,
        original_name: str,
        mime_type: str,
        storage_path: str,
        storage_disk: str = "local",
    ) -> int:
        """Insert a pending document and return its ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO documents
                        (owner_id, original_name, mime_type, storage_disk, storage_path)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (owner_id, original_name, mime_type, storage_disk, storage_path),
                )
                row = cur.fetchone()
            conn.commit()
        assert row is not None
        return int(row[0])

    def find_by_id(self, document_id: int) -> Document:
        """Find an active document by ID.

        Raises:
            DocumentNotFoundError: if no active document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s AND is_active",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_document(row)

    def mark_processed(self, document_id: int, error: str | None = None) -> None:
        """Stamp processed_at; error is stored when processing failed."""
        self._update(
            document_id,
            "SET processed_at = NOW(), processing_error = %s",
            (error,),
        )

    def reset_processed(self, document_id: int) -> None:
        self._update(
            document_id,
            "SET processed_at = NULL, processing_error = NULL",
            (),
        )

    def soft_delete(self, document_id: int) -> None:
        self._update(document_id, "SET is_active = FALSE", ())

    def _update(self, document_id: int, set_clause: str, params: tuple[Any, ...]) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"UPDATE documents {set_clause} WHERE id = %s AND is_active",
                    (*params, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()


def _to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=row["id"],
        owner_id=row["owner_id"],
        original_name=row["original_name"],
        mime_type=row["mime_type"],
        storage_disk=row["storage_disk"],
        storage_path=row["storage_path"],
        processed_at=row["processed_at"],
        processing_error=row["processing_error"],
        is_active=row["is_active"],
    )
