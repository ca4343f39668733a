"""Example embedding adapter.

Deterministic and offline: each lowercase word is hashed into one of
`dimension` buckets. Texts sharing vocabulary get high cosine similarity,
which is enough for local development and tests.
"""

import hashlib
import re

from docintel.embedding.base import BaseEmbedder

_WORD_RE = re.compile(r"\w+", re.UNICODE)


class ExampleEmbedder(BaseEmbedder):
    """Hashed bag-of-words embedder. No network calls."""

    def __init__(self, dimension: int = 256) -> None:
        self.dimension = dimension

    def embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for word in _WORD_RE.findall(text.lower()):
            digest = hashlib.sha256(word.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "big") % self.dimension
            vector[bucket] += 1.0
        return vector
