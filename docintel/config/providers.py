"""OpenAI-compatible provider endpoints shared by the embedding and analysis factories."""

OPENAI_COMPATIBLE_BASE_URLS: dict[str, str] = {
    "openrouter": "https://openrouter.ai/api/v1",
    "groq": "https://api.groq.com/openai/v1",
    "together": "https://api.together.xyz/v1",
    "deepseek": "https://api.deepseek.com/v1",
    "ollama": "http://localhost:11434/v1",
}

# Providers that run without credentials.
KEYLESS_PROVIDERS = frozenset({"ollama"})


def resolve_base_url(provider: str, configured_url: str, setting_name: str) -> str | None:
    """Map a provider name to its OpenAI-compatible endpoint.

    An explicitly configured URL wins for every provider except plain "openai".

    Raises:
        ValueError: for unknown providers, or openai_compatible without a URL.
    """
    url = configured_url.strip()
    if provider == "openai":
        return None
    if url:
        return url
    if provider == "openai_compatible":
        raise ValueError(f"{setting_name} is required for provider=openai_compatible")
    default_base_url = OPENAI_COMPATIBLE_BASE_URLS.get(provider)
    if default_base_url is not None:
        return default_base_url
    supported = [
        "example",
        "openai",
        "openai_compatible",
        *sorted(OPENAI_COMPATIBLE_BASE_URLS),
    ]
    raise ValueError(f"Unknown provider '{provider}'. Choose from: {supported}")
