class AnalysisError(Exception):
    """Raised when structural analysis fails."""


class MalformedAnalysisResponse(AnalysisError):
    """Raised when the provider reply cannot be parsed into a StructuralAnalysis."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
