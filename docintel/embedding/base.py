from abc import ABC, abstractmethod


class BaseEmbedder(ABC):
    """Contract for all embedding adapters."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Convert text into a fixed-length vector.

        Raises:
            EmbeddingUnavailable: if the provider cannot produce a vector.
        """
