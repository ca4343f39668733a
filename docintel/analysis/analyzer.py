"""AI-powered structural integrity analyzer."""

import json
from pathlib import Path

from docintel.analysis.base import BaseStructuralAnalyzer
from docintel.analysis.client_base import BaseAnalysisClient
from docintel.analysis.exceptions import MalformedAnalysisResponse
from docintel.analysis.models import StructuralAnalysis
from docintel.analysis.prompt_loader import load_json_schema, load_prompt_template
from docintel.analysis.validator import validate_and_build
from docintel.logging.logger import Log

DEFAULT_MAX_TEXT_CHARS = 60_000

DEFAULT_SYSTEM_PROMPT = (
    "You detect document fraud and integrity problems. "
    "Answer strictly with the requested JSON object."
)


class StructuralAnalyzer(BaseStructuralAnalyzer):
    """Asks an AI provider for a structural verdict on extracted text.

    Sampling is pinned (temperature clamped to [0, 0.2], fixed seed) so the
    same text yields the same verdict wherever the provider honours it.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.0,
        seed: int | None = 42,
        max_text_chars: int = DEFAULT_MAX_TEXT_CHARS,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._seed = seed
        self._max_text_chars = max_text_chars
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def analyze(self, text: str) -> StructuralAnalysis:
        prompt = self._build_prompt(text)
        Log.debug(f"Structural analysis prompt:\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            seed=self._seed,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Structural analysis complete: status {result.status.value}, "
            f"{len(result.anomalies)} anomalies"
        )
        return result

    def _build_prompt(self, text: str) -> str:
        truncation_note = ""
        if len(text) > self._max_text_chars:
            truncation_note = (
                f"\n\n[Text truncated: {len(text)} characters reduced to "
                f"{self._max_text_chars}]"
            )
            Log.info(
                f"Analysis input truncated from {len(text)} to {self._max_text_chars} chars"
            )
        return self._prompt_template.format(
            document_text=text[: self._max_text_chars],
            truncation_note=truncation_note,
            json_schema=self._json_schema,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise MalformedAnalysisResponse(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise MalformedAnalysisResponse("JSON response must be an object")
        return parsed
