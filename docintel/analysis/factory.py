from docintel.analysis.analyzer import StructuralAnalyzer
from docintel.analysis.base import BaseStructuralAnalyzer
from docintel.analysis.example_client_adapter import ExampleClientAdapter
from docintel.analysis.openai_client_adapter import OpenAIClientAdapter
from docintel.config.providers import KEYLESS_PROVIDERS, resolve_base_url
from docintel.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured structural analyzer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseStructuralAnalyzer:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return StructuralAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                max_text_chars=settings.analysis_max_text_chars,
            )
        base_url = resolve_base_url(provider, settings.analysis_base_url, "analysis_base_url")
        if not settings.analysis_api_key and provider not in KEYLESS_PROVIDERS:
            raise ValueError(f"analysis_api_key is required for analysis_provider={provider}")
        client = OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            max_retries=settings.analysis_max_retries,
            base_url=base_url,
        )
        return StructuralAnalyzer(
            client=client,
            model=settings.analysis_model_name,
            temperature=settings.analysis_temperature,
            seed=settings.analysis_seed,
            max_text_chars=settings.analysis_max_text_chars,
        )
