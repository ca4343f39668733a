import httpx
import openai

from docintel.embedding.base import BaseEmbedder
from docintel.embedding.exceptions import EmbeddingUnavailable


class OpenAIEmbeddingAdapter(BaseEmbedder):
    """Embedding adapter built on the OpenAI-compatible embeddings API.

    Transient failures are retried by the openai client itself with
    exponential backoff, up to max_retries times.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        max_retries: int = 2,
        base_url: str | None = None,
        require_api_key: bool = True,
    ) -> None:
        self._model = model
        self._missing_key = require_api_key and not api_key
        self._client = openai.OpenAI(
            api_key=api_key or "not-needed",
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
        )

    def embed(self, text: str) -> list[float]:
        if self._missing_key:
            raise EmbeddingUnavailable("Embedding API key is not configured")
        try:
            response = self._client.embeddings.create(model=self._model, input=text)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise EmbeddingUnavailable(f"Embedding provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise EmbeddingUnavailable(f"Embedding provider API error: {exc}") from exc

        if not response.data:
            raise EmbeddingUnavailable("Embedding provider returned no vectors")
        return [float(v) for v in response.data[0].embedding]
