"""Request-side entry points: accept work, queue it, return immediately."""

import os
import shutil
import tempfile
import uuid
from pathlib import Path

from docintel.config.settings import Settings
from docintel.database.models import JobKind, ScanRecord
from docintel.database.repositories.chunk_repository import ChunkRepository
from docintel.database.repositories.documents_repository import DocumentsRepository
from docintel.database.repositories.job_repository import JobRepository
from docintel.database.repositories.scan_repository import ScanRepository
from docintel.embedding.factory import EmbedderFactory
from docintel.extraction.exceptions import UnsupportedMimeTypeError
from docintel.extraction.text_extractor import PDF_MIME_TYPE, PLAIN_TEXT_MIME_TYPES
from docintel.logging.logger import Log
from docintel.retrieval.models import ChunkMatch
from docintel.retrieval.retriever import Retriever

DOCUMENT_MIME_TYPES = frozenset({PDF_MIME_TYPE, "image/jpeg", "image/png"} | PLAIN_TEXT_MIME_TYPES)
SCAN_MIME_TYPES = frozenset({PDF_MIME_TYPE, "image/jpeg", "image/png"})

_SCAN_SUFFIXES = {PDF_MIME_TYPE: ".pdf", "image/jpeg": ".jpg", "image/png": ".png"}


def _normalize_mime(mime_type: str) -> str:
    return mime_type.split(";", 1)[0].strip().lower()


class IntakeService:
    """Accepts documents and scan uploads and queues them for the worker."""

    def __init__(
        self,
        *,
        doc_repo: DocumentsRepository,
        chunk_repo: ChunkRepository,
        scan_repo: ScanRepository,
        job_repo: JobRepository,
        retriever: Retriever,
        scan_temp_dir: Path,
    ) -> None:
        self._doc_repo = doc_repo
        self._chunk_repo = chunk_repo
        self._scan_repo = scan_repo
        self._job_repo = job_repo
        self._retriever = retriever
        self._scan_temp_dir = scan_temp_dir

    def submit_document(
        self,
        owner_id: int,
        original_name: str,
        mime_type: str,
        storage_path: str,
    ) -> int:
        """Register a knowledge-base document and queue it for indexing.

        Raises:
            UnsupportedMimeTypeError: if the file type cannot be indexed.
        """
        mime = _normalize_mime(mime_type)
        if mime not in DOCUMENT_MIME_TYPES:
            raise UnsupportedMimeTypeError(f"Unsupported file type: {mime_type}")
        document_id = self._doc_repo.create(owner_id, original_name, mime, storage_path)
        job_id = self._job_repo.enqueue(JobKind.INDEX_DOCUMENT, document_id)
        Log.info(f"Document {document_id} submitted by owner {owner_id}, job {job_id}")
        return document_id

    def delete_document(self, document_id: int) -> None:
        # Existence is checked first so a missing document leaves chunks untouched.
        self._doc_repo.find_by_id(document_id)
        deleted = self._chunk_repo.delete_by_document(document_id)
        self._doc_repo.soft_delete(document_id)
        Log.info(f"Document {document_id} deleted with {deleted} chunks")

    def reprocess_document(self, document_id: int) -> int:
        self._doc_repo.reset_processed(document_id)
        job_id = self._job_repo.enqueue(JobKind.INDEX_DOCUMENT, document_id)
        Log.info(f"Document {document_id} queued for reprocessing, job {job_id}")
        return job_id

    def submit_scan(
        self,
        owner_id: int,
        file_name: str,
        mime_type: str,
        source_path: Path,
    ) -> str:
        """Copy an upload into a private temp file and queue a scan.

        Returns:
            The public scan ID used to poll for the result.

        Raises:
            UnsupportedMimeTypeError: if the file is not a PDF, JPEG or PNG.
        """
        mime = _normalize_mime(mime_type)
        if mime not in SCAN_MIME_TYPES:
            raise UnsupportedMimeTypeError(f"Unsupported file type: {mime_type}")

        self._scan_temp_dir.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix="scan-", suffix=_SCAN_SUFFIXES[mime], dir=self._scan_temp_dir
        )
        os.close(fd)
        temp_path = Path(temp_name)
        try:
            shutil.copyfile(source_path, temp_path)
            public_id = str(uuid.uuid4())
            scan_id = self._scan_repo.create(
                public_id=public_id,
                owner_id=owner_id,
                file_name=file_name,
                mime_type=mime,
                file_size_bytes=temp_path.stat().st_size,
                temp_path=str(temp_path),
            )
            job_id = self._job_repo.enqueue(JobKind.SCAN_DOCUMENT, scan_id)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        Log.info(f"Scan {public_id} submitted by owner {owner_id}, job {job_id}")
        return public_id

    def get_scan(self, public_id: str) -> ScanRecord:
        return self._scan_repo.find_by_public_id(public_id)

    def list_recent_scans(self, owner_id: int, limit: int = 20) -> list[ScanRecord]:
        return self._scan_repo.list_recent(owner_id, limit)

    def search_knowledge_base(self, query: str, limit: int | None = None) -> list[ChunkMatch]:
        return self._retriever.search(query, limit)


def build_intake_service(settings: Settings) -> IntakeService:
    chunk_repo = ChunkRepository()
    retriever = Retriever(
        EmbedderFactory.create(settings),
        chunk_repo,
        default_limit=settings.search_default_limit,
        min_similarity=settings.search_min_similarity,
    )
    return IntakeService(
        doc_repo=DocumentsRepository(),
        chunk_repo=chunk_repo,
        scan_repo=ScanRepository(),
        job_repo=JobRepository(settings.max_job_attempts),
        retriever=retriever,
        scan_temp_dir=settings.scan_temp_dir,
    )
