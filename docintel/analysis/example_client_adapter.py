"""Example structural analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from docintel.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Returns a fixed 'consistent' verdict. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "status": "consistent",
        "block_count": 1,
        "anomalies": [],
        "summary": "Example adapter: no structural analysis performed.",
    }

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
        _ = model, temperature, seed, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
