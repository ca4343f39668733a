from pathlib import Path

from docintel.database.repositories.scan_repository import ScanRepository
from docintel.logging.logger import Log
from docintel.processor.exceptions import ScanLoadError, ScanNotFoundError
from docintel.scanner.scanner import DocumentScanner
from docintel.scoring.models import ScanResult


class ScanJobHandler:
    """Runs a queued scan request and stores its outcome."""

    def __init__(self, scanner: DocumentScanner, scan_repo: ScanRepository) -> None:
        self._scanner = scanner
        self._scan_repo = scan_repo

    def handle(self, scan_id: int) -> ScanResult:
        """Scan the uploaded file and persist the result.

        Any failure after the scan started marks the request failed before
        the exception propagates.

        Raises:
            ScanNotFoundError: if the request does not exist.
            ScanLoadError: if the request could not be read; the upload is
                left in place for another attempt.
        """
        try:
            record = self._scan_repo.find_by_id(scan_id)
        except ScanNotFoundError:
            raise
        except Exception as exc:
            raise ScanLoadError(f"Could not load scan {scan_id}: {exc}") from exc

        try:
            result = self._scanner.scan(
                record.public_id, Path(record.temp_path), record.mime_type
            )
            self._scan_repo.save_result(scan_id, result)
        except Exception as exc:
            self._mark_failed(scan_id, str(exc))
            raise
        Log.info(f"Scan {record.public_id} stored (scan {scan_id})")
        return result

    def abandon(self, scan_id: int, error: str) -> None:
        """Give up on a scan that never started: drop its upload, mark it failed."""
        try:
            record = self._scan_repo.find_by_id(scan_id)
        except Exception as exc:
            Log.error(f"Scan {scan_id}: cannot load request to clean up: {exc}")
            return
        try:
            Path(record.temp_path).unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Scan {scan_id}: could not remove temp file {record.temp_path}: {exc}")
        self._mark_failed(scan_id, error)

    def _mark_failed(self, scan_id: int, error: str) -> None:
        try:
            self._scan_repo.mark_failed(scan_id, error)
        except Exception as exc:
            Log.error(f"Scan {scan_id}: could not record failure '{error}': {exc}")
