from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docintel.processor.models import Document


@dataclass(slots=True)
class DocumentContext:
    document_id: int
    job_id: int
    document: Document | None = None
    raw_bytes: bytes = b""
    extracted_text: str = ""
    deleted_chunks: int = 0
    chunk_ids: list[int] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: DocumentContext) -> DocumentContext:
        raise NotImplementedError
