from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific structural analysis AI clients."""

    @abstractmethod
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
        """Return provider response as plain text."""
