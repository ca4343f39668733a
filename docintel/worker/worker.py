import time

import psycopg

from docintel.config.settings import Settings
from docintel.database.connection import get_connection
from docintel.database.models import JobRecord
from docintel.database.repositories.job_repository import JobRepository
from docintel.logging.logger import Log
from docintel.worker.job_runner import JobRunner


class Worker:
    """Background consumer of document_jobs: claim, dispatch, sleep when idle.

    Several workers may poll the same table; SKIP LOCKED hands each job to
    exactly one of them.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._poll_interval = settings.job_poll_interval_seconds
        self._stopping = False

    def stop(self) -> None:
        """Ask the loop to exit after the current job."""
        self._stopping = True

    def run(self, max_jobs: int | None = None) -> int:
        """Poll until interrupted, stopped, or `max_jobs` jobs have run.

        Returns:
            Number of jobs dispatched.
        """
        Log.info(f"Worker started, polling every {self._poll_interval}s")
        jobs_done = 0
        try:
            while not self._stopping:
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                job = self._try_claim_job()
                if job is None:
                    Log.debug("No jobs available, sleeping")
                    time.sleep(self._poll_interval)
                    continue
                self._job_runner.run(job)
                jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker stopped after {jobs_done} jobs")
        return jobs_done

    def _try_claim_job(self) -> JobRecord | None:
        """Claim the next pending job; database outages are retried on the next poll."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except (psycopg.Error, RuntimeError) as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None
