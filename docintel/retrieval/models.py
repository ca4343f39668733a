from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkMatch:
    """A stored chunk ranked against a query."""

    chunk_id: int
    document_id: int
    chunk_index: int
    content: str
    similarity: float
    document_name: str | None = None
