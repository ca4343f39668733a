from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class JobKind(str, Enum):
    """Kinds of background work stored in document_jobs."""

    INDEX_DOCUMENT = "index_document"
    SCAN_DOCUMENT = "scan_document"


@dataclass
class JobRecord:
    """Represents a row from the document_jobs table."""

    id: int
    kind: JobKind
    target_id: int
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ChunkRecord:
    """Represents a row from the document_chunks table."""

    id: int
    document_id: int
    chunk_index: int
    content: str
    embedding: list[float] | None = None
    document_name: str | None = None


@dataclass
class ScanRecord:
    """Represents a row from the document_scans table."""

    id: int
    public_id: str
    owner_id: int
    file_name: str
    mime_type: str
    file_size_bytes: int
    temp_path: str
    status: str
    error_message: str | None = None
    result: dict[str, Any] | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None
