from docintel.config.settings import Settings
from docintel.database.connection import apply_schema, close_pool, init_pool
from docintel.database.repositories.job_repository import JobRepository
from docintel.database.repositories.scan_repository import ScanRepository
from docintel.logging.logger import Log
from docintel.processor.processor import build_processor
from docintel.processor.scan_job import ScanJobHandler
from docintel.scanner.scanner import build_scanner
from docintel.worker.job_runner import JobRunner
from docintel.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting docintel worker ({settings.app_env})")
    init_pool(settings)

    try:
        apply_schema()
        processor = build_processor(settings)
        scan_handler = ScanJobHandler(build_scanner(settings), ScanRepository())
        job_repo = JobRepository(settings.max_job_attempts)
        job_runner = JobRunner(processor, scan_handler, job_repo, settings)
        worker = Worker(job_repo, job_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
