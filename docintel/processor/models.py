from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Document:
    """Domain model for a knowledge-base document (subset of DB columns)."""

    id: int
    owner_id: int
    original_name: str
    mime_type: str
    storage_disk: str
    storage_path: str
    processed_at: datetime | None = None
    processing_error: str | None = None
    is_active: bool = True
