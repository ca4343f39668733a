import time
from concurrent.futures import ThreadPoolExecutor

import psycopg
import pytest

from docintel.database.connection import get_connection
from docintel.database.models import JobKind
from docintel.database.repositories.job_repository import JobRepository


@pytest.mark.integration
class TestJobRepositoryClaimNextJob:
    def test_claim_next_job_returns_and_locks_job(self, seed_document: int, db_conn) -> None:
        repo = JobRepository(max_attempts=3)
        job_id = repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)

        job = repo.claim_next_job(db_conn)

        assert job is not None
        assert job.id == job_id
        assert job.kind is JobKind.INDEX_DOCUMENT
        assert job.target_id == seed_document
        stored = repo.find_by_id(job_id)
        assert stored is not None
        assert stored.status == "processing"
        assert stored.locked_at is not None

    def test_claim_next_job_returns_none_when_no_pending_jobs(
        self, clean_tables: None, db_conn
    ) -> None:
        assert JobRepository(max_attempts=3).claim_next_job(db_conn) is None

    def test_claim_next_job_skips_job_with_attempts_at_max(
        self, seed_document: int, db_conn
    ) -> None:
        db_conn.execute(
            """
            INSERT INTO document_jobs (kind, target_id, status, attempts)
            VALUES ('index_document', %s, 'pending', 3)
            """,
            (seed_document,),
        )
        db_conn.commit()
        assert JobRepository(max_attempts=3).claim_next_job(db_conn) is None


@pytest.mark.integration
class TestJobRepositoryEnqueue:
    def test_in_flight_job_is_reused(self, seed_document: int) -> None:
        repo = JobRepository(max_attempts=3)
        first = repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)
        second = repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)
        assert first == second

    def test_finished_job_allows_new_one(self, seed_document: int) -> None:
        repo = JobRepository(max_attempts=3)
        first = repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)
        repo.mark_done(first)
        assert repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document) != first

    def test_concurrent_enqueue_creates_one_job(self, seed_document: int) -> None:
        repo = JobRepository(max_attempts=3)
        with ThreadPoolExecutor(max_workers=3) as pool:
            ids = list(
                pool.map(
                    lambda _: repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document), range(6)
                )
            )
        assert len(set(ids)) == 1

    def test_enqueue_waits_for_uncommitted_job(self, seed_document: int, db_conn) -> None:
        row = db_conn.execute(
            """
            INSERT INTO document_jobs (kind, target_id, status, attempts)
            VALUES ('index_document', %s, 'pending', 0)
            RETURNING id
            """,
            (seed_document,),
        ).fetchone()
        repo = JobRepository(max_attempts=3)

        with ThreadPoolExecutor(max_workers=1) as pool:
            future = pool.submit(repo.enqueue, JobKind.INDEX_DOCUMENT, seed_document)
            time.sleep(0.2)
            assert not future.done()
            db_conn.commit()
            assert future.result(timeout=5) == row[0]

    def test_second_in_flight_row_is_rejected(self, seed_document: int, db_conn) -> None:
        JobRepository(max_attempts=3).enqueue(JobKind.INDEX_DOCUMENT, seed_document)
        with pytest.raises(psycopg.errors.UniqueViolation):
            db_conn.execute(
                """
                INSERT INTO document_jobs (kind, target_id, status)
                VALUES ('index_document', %s, 'pending')
                """,
                (seed_document,),
            )
        db_conn.rollback()


@pytest.mark.integration
class TestJobRepositoryStatus:
    def test_mark_failed_updates_status_and_error_message(self, seed_document: int) -> None:
        repo = JobRepository(max_attempts=3)
        job_id = repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)

        repo.mark_failed(job_id, "error text")

        job = repo.find_by_id(job_id)
        assert job is not None
        assert job.status == "failed"
        assert job.error_message == "error text"

    def test_increment_attempts_returns_to_pending(self, seed_document: int, db_conn) -> None:
        repo = JobRepository(max_attempts=3)
        repo.enqueue(JobKind.INDEX_DOCUMENT, seed_document)
        job = repo.claim_next_job(db_conn)
        assert job is not None

        repo.increment_attempts(job.id)

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT status, attempts, locked_at FROM document_jobs WHERE id = %s",
                    (job.id,),
                )
                row = cur.fetchone()
        assert row == ("pending", 1, None)

    def test_find_by_id_returns_none_when_not_found(self, clean_tables: None) -> None:
        assert JobRepository(max_attempts=3).find_by_id(99999) is None
