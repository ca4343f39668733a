from docintel.analysis.exceptions import MalformedAnalysisResponse
from docintel.config.settings import Settings
from docintel.database.models import JobKind, JobRecord
from docintel.database.repositories.job_repository import JobRepository
from docintel.extraction.exceptions import ExtractionError
from docintel.logging.logger import Log
from docintel.processor.exceptions import ProcessorError, ScanLoadError
from docintel.processor.processor import DocumentProcessor
from docintel.processor.scan_job import ScanJobHandler

# Retrying cannot change the outcome of these.
PERMANENT_ERRORS: tuple[type[Exception], ...] = (
    ExtractionError,
    ProcessorError,
    MalformedAnalysisResponse,
    FileNotFoundError,
)


class JobRunner:
    """Run one job, catch exceptions, and apply retry logic."""

    def __init__(
        self,
        processor: DocumentProcessor,
        scan_handler: ScanJobHandler,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._scan_handler = scan_handler
        self._job_repo = job_repo
        self._settings = settings

    def run(self, job: JobRecord) -> None:
        """Execute a single job with error handling."""
        Log.info(f"Running {job.kind.value} job {job.id} (attempt {job.attempts + 1})")
        try:
            if job.kind is JobKind.INDEX_DOCUMENT:
                self._processor.process(job.target_id, job.id)
            elif job.kind is JobKind.SCAN_DOCUMENT:
                self._scan_handler.handle(job.target_id)
            else:
                raise ValueError(f"Unknown job kind: {job.kind}")
            self._job_repo.mark_done(job.id)
            Log.info(f"Job {job.id} completed successfully")
        except Exception as exc:
            self._handle_failure(job, exc)

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Fail permanently or put the job back to pending for another attempt."""
        Log.error(f"Job {job.id} failed: {exc}")
        if not self._is_retryable(job, exc):
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} permanently failed: {type(exc).__name__}")
        elif job.attempts + 1 >= self._settings.max_job_attempts:
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} permanently failed after {job.attempts + 1} attempts")
        else:
            self._job_repo.increment_attempts(job.id)
            Log.warning(f"Job {job.id} will be retried (attempt {job.attempts + 1})")
            return
        if isinstance(exc, ScanLoadError):
            self._scan_handler.abandon(job.target_id, str(exc))

    @staticmethod
    def _is_retryable(job: JobRecord, exc: Exception) -> bool:
        # The scan temp file is consumed once scanning starts.
        if job.kind is JobKind.SCAN_DOCUMENT:
            return isinstance(exc, ScanLoadError)
        return not isinstance(exc, PERMANENT_ERRORS)
