from docintel.chunking.chunker import Chunker
from docintel.database.repositories.chunk_repository import ChunkRepository
from docintel.embedding.base import BaseEmbedder
from docintel.embedding.exceptions import EmbeddingUnavailable
from docintel.logging.logger import Log

_PROGRESS_EVERY = 10


class ChunkStore:
    """Chunks document text, embeds each chunk and persists it."""

    def __init__(
        self,
        chunker: Chunker,
        embedder: BaseEmbedder,
        chunk_repo: ChunkRepository,
    ) -> None:
        self._chunker = chunker
        self._embedder = embedder
        self._chunk_repo = chunk_repo

    def process_document(self, document_id: int, text: str) -> list[int]:
        """Persist embedded chunks for a document.

        Chunks whose embedding fails are skipped; indices keep their window
        position, so a skipped chunk leaves a gap rather than shifting the rest.

        Returns:
            Persisted chunk IDs in chunk-index order.

        Raises:
            EmbeddingUnavailable: if the text had content but no chunk could
                be embedded.
        """
        windows = [
            (index, chunk) for index, chunk in self._chunker.windows(text) if chunk.strip()
        ]
        Log.info(f"Document {document_id}: {len(windows)} non-empty chunks to embed")
        if not windows:
            return []

        chunk_ids: list[int] = []
        failures = 0
        last_error: EmbeddingUnavailable | None = None
        for position, (index, content) in enumerate(windows, start=1):
            try:
                embedding = self._embedder.embed(content)
            except EmbeddingUnavailable as exc:
                failures += 1
                last_error = exc
                Log.warning(
                    f"Document {document_id}: skipping chunk {index}, embedding failed: {exc}"
                )
                continue
            chunk_ids.append(
                self._chunk_repo.insert(document_id, index, content, embedding)
            )
            if position % _PROGRESS_EVERY == 0:
                Log.info(f"Document {document_id}: embedded {position}/{len(windows)} chunks")

        Log.info(
            f"Document {document_id}: {len(chunk_ids)} chunks stored, {failures} failed"
        )
        if not chunk_ids:
            raise EmbeddingUnavailable(
                f"No chunk of document {document_id} could be embedded"
            ) from last_error
        return chunk_ids

    def delete_document_chunks(self, document_id: int) -> int:
        deleted = self._chunk_repo.delete_by_document(document_id)
        Log.info(f"Document {document_id}: deleted {deleted} chunks")
        return deleted
