class EmbeddingUnavailable(Exception):
    """Raised when the embedding provider is unreachable or misconfigured."""
