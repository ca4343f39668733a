import hashlib
from collections import OrderedDict

from docintel.database.repositories.chunk_repository import ChunkRepository
from docintel.embedding.base import BaseEmbedder
from docintel.logging.logger import Log
from docintel.retrieval.models import ChunkMatch
from docintel.retrieval.similarity import cosine_similarity


class Retriever:
    """Exhaustive cosine-similarity search over every embedded chunk.

    Exact results at O(n * d) per query. Query vectors are memoized by a
    SHA-256 fingerprint of the query text in a small LRU cache.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        chunk_repo: ChunkRepository,
        *,
        default_limit: int = 8,
        min_similarity: float | None = None,
        query_cache_size: int = 128,
    ) -> None:
        self._embedder = embedder
        self._chunk_repo = chunk_repo
        self._default_limit = default_limit
        self._min_similarity = min_similarity
        self._query_cache_size = query_cache_size
        self._query_cache: OrderedDict[str, list[float]] = OrderedDict()

    def search(
        self,
        query: str,
        limit: int | None = None,
        min_similarity: float | None = None,
    ) -> list[ChunkMatch]:
        """Return up to `limit` chunks most similar to `query`, best first.

        Ties keep insertion order. Raises EmbeddingUnavailable if the query
        cannot be embedded.
        """
        limit = self._default_limit if limit is None else limit
        if limit <= 0:
            raise ValueError("limit must be positive")
        floor = self._min_similarity if min_similarity is None else min_similarity

        query_vector = self._embed_query(query)
        scored: list[ChunkMatch] = []
        mismatched = 0
        for chunk in self._chunk_repo.list_embedded():
            if not chunk.embedding or len(chunk.embedding) != len(query_vector):
                mismatched += 1
                continue
            similarity = cosine_similarity(query_vector, chunk.embedding)
            if floor is not None and similarity < floor:
                continue
            scored.append(
                ChunkMatch(
                    chunk_id=chunk.id,
                    document_id=chunk.document_id,
                    chunk_index=chunk.chunk_index,
                    content=chunk.content,
                    similarity=similarity,
                    document_name=chunk.document_name,
                )
            )

        if mismatched:
            Log.warning(f"Search ignored {mismatched} chunks with a different vector dimension")

        # sort() is stable, so equal similarities stay in insertion order.
        scored.sort(key=lambda match: match.similarity, reverse=True)
        results = scored[:limit]
        Log.debug(f"Search returned {len(results)} of {len(scored)} candidate chunks")
        return results

    def _embed_query(self, query: str) -> list[float]:
        fingerprint = hashlib.sha256(query.encode("utf-8")).hexdigest()
        cached = self._query_cache.get(fingerprint)
        if cached is not None:
            self._query_cache.move_to_end(fingerprint)
            return cached
        vector = self._embedder.embed(query)
        if self._query_cache_size > 0:
            self._query_cache[fingerprint] = vector
            if len(self._query_cache) > self._query_cache_size:
                self._query_cache.popitem(last=False)
        return vector
