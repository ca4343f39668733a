import httpx
import openai

from docintel.analysis.client_base import BaseAnalysisClient
from docintel.analysis.exceptions import AnalysisNetworkError, MalformedAnalysisResponse


class OpenAIClientAdapter(BaseAnalysisClient):
    """Structural analysis client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        max_retries: int = 2,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key or "not-needed",
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        seed: int | None,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                seed=seed,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "structural_analysis",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise MalformedAnalysisResponse("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise MalformedAnalysisResponse("AI returned empty response")
        return content
