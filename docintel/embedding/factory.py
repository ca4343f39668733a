from typing import ClassVar

from docintel.config.providers import KEYLESS_PROVIDERS, resolve_base_url
from docintel.config.settings import Settings
from docintel.embedding.base import BaseEmbedder
from docintel.embedding.example_embedder import ExampleEmbedder
from docintel.embedding.openai_embedding_adapter import OpenAIEmbeddingAdapter


class EmbedderFactory:
    """Creates the configured embedding adapter."""

    EXAMPLE_DIMENSION: ClassVar[int] = 256

    @classmethod
    def create(cls, settings: Settings) -> BaseEmbedder:
        provider = settings.embedding_provider.lower()
        if provider == "example":
            return ExampleEmbedder(dimension=cls.EXAMPLE_DIMENSION)
        return OpenAIEmbeddingAdapter(
            api_key=settings.embedding_api_key,
            model=settings.embedding_model_name,
            timeout_seconds=settings.embedding_timeout_seconds,
            max_retries=settings.embedding_max_retries,
            base_url=resolve_base_url(provider, settings.embedding_base_url, "embedding_base_url"),
            require_api_key=provider not in KEYLESS_PROVIDERS,
        )
