from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docintel.database.connection import get_connection
from docintel.database.models import ScanRecord
from docintel.processor.exceptions import ScanNotFoundError
from docintel.scoring.models import ScanResult

_COLUMNS = """
    id, public_id, owner_id, file_name, mime_type, file_size_bytes,
    temp_path, status, error_message, result, created_at, completed_at
"""


class ScanRepository:
    """Database operations for the document_scans table."""

    def create(
        self,
        *,
        public_id: str,
        owner_id: int,
        file_name: str,
        mime_type: str,
        file_size_bytes: int,
        temp_path: str,
    ) -> int:
        """Insert a scan request in the 'received' state and return its ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO document_scans
                        (public_id, owner_id, file_name, mime_type,
                         file_size_bytes, temp_path, status)
                    VALUES (%s, %s, %s, %s, %s, %s, 'received')
                    RETURNING id
                    """,
                    (public_id, owner_id, file_name, mime_type, file_size_bytes, temp_path),
                )
                row = cur.fetchone()
            conn.commit()
        assert row is not None
        return int(row[0])

    def find_by_id(self, scan_id: int) -> ScanRecord:
        """Find a scan request by ID.

        Raises:
            ScanNotFoundError: if no scan with this ID exists.
        """
        return self._find_one("id = %s", scan_id)

    def find_by_public_id(self, public_id: str) -> ScanRecord:
        return self._find_one("public_id = %s", public_id)

    def list_recent(self, owner_id: int, limit: int = 20) -> list[ScanRecord]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM document_scans
                    WHERE owner_id = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT %s
                    """,
                    (owner_id, limit),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def save_result(self, scan_id: int, result: ScanResult) -> None:
        self._complete(scan_id, "complete", None, Jsonb(result.to_dict()))

    def mark_failed(self, scan_id: int, error: str) -> None:
        self._complete(scan_id, "failed", error, None)

    def _complete(
        self,
        scan_id: int,
        status: str,
        error: str | None,
        result: Jsonb | None,
    ) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE document_scans
                    SET status = %s, error_message = %s, result = %s,
                        completed_at = NOW()
                    WHERE id = %s
                    """,
                    (status, error, result, scan_id),
                )
                if cur.rowcount == 0:
                    raise ScanNotFoundError(f"Scan {scan_id} not found")
            conn.commit()

    def _find_one(self, condition: str, value: Any) -> ScanRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM document_scans WHERE {condition}",
                    (value,),
                )
                row = cur.fetchone()
        if row is None:
            raise ScanNotFoundError(f"Scan {value} not found")
        return _to_record(row)


def _to_record(row: dict[str, Any]) -> ScanRecord:
    return ScanRecord(
        id=row["id"],
        public_id=row["public_id"],
        owner_id=row["owner_id"],
        file_name=row["file_name"],
        mime_type=row["mime_type"],
        file_size_bytes=row["file_size_bytes"],
        temp_path=row["temp_path"],
        status=row["status"],
        error_message=row["error_message"],
        result=row["result"],
        created_at=row["created_at"],
        completed_at=row["completed_at"],
    )
