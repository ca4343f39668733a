from typing import Any

import psycopg
from psycopg.rows import dict_row

from docintel.database.connection import get_connection
from docintel.database.models import JobKind, JobRecord


class JobRepository:
    """Database operations for the document_jobs table."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def enqueue(self, kind: JobKind, target_id: int) -> int:
        """Queue a job unless one is already pending or running for the same target.

        A partial unique index on (kind, target_id) keeps concurrent callers
        from creating a second in-flight job.

        Returns:
            ID of the new job, or of the in-flight job that made this a no-op.
        """
        with get_connection() as conn:
            while True:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO document_jobs (kind, target_id, status, attempts)
                        VALUES (%s, %s, 'pending', 0)
                        ON CONFLICT (kind, target_id)
                            WHERE status IN ('pending', 'processing')
                            DO NOTHING
                        RETURNING id
                        """,
                        (kind.value, target_id),
                    )
                    row = cur.fetchone()
                    if row is None:
                        cur.execute(
                            """
                            SELECT id FROM document_jobs
                            WHERE kind = %s AND target_id = %s
                              AND status IN ('pending', 'processing')
                            """,
                            (kind.value, target_id),
                        )
                        row = cur.fetchone()
                conn.commit()
                # None means the in-flight job finished in between; insert again.
                if row is not None:
                    return int(row[0])

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Claim the next pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, kind, target_id, status, attempts
                FROM document_jobs
                WHERE status = 'pending'
                  AND attempts < %s
                ORDER BY created_at, id
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE document_jobs
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return JobRecord(
            id=row["id"],
            kind=JobKind(row["kind"]),
            target_id=row["target_id"],
            status="processing",
            attempts=row["attempts"],
        )

    def mark_done(self, job_id: int) -> None:
        self._set_status(job_id, "done", None)

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job as permanently failed."""
        self._set_status(job_id, "failed", error)

    def increment_attempts(self, job_id: int) -> None:
        """Increment attempt count and return job to pending."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_jobs
                SET attempts = attempts + 1, status = 'pending',
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> JobRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, kind, target_id, status, attempts,
                           error_message, locked_at, created_at, updated_at
                    FROM document_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return JobRecord(
            id=row["id"],
            kind=JobKind(row["kind"]),
            target_id=row["target_id"],
            status=row["status"],
            attempts=row["attempts"],
            error_message=row["error_message"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _set_status(self, job_id: int, status: str, error: str | None) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_jobs
                SET status = %s, error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (status, error, job_id),
            )
            conn.commit()
