from abc import ABC, abstractmethod

from docintel.analysis.models import StructuralAnalysis


class BaseStructuralAnalyzer(ABC):
    """Contract for all structural analysis adapters."""

    @abstractmethod
    def analyze(self, text: str) -> StructuralAnalysis:
        """Inspect extracted document text for integrity anomalies.

        Args:
            text: Plain text from the extraction step.

        Returns:
            StructuralAnalysis with status, anomalies and optional block count.

        Raises:
            MalformedAnalysisResponse: if the provider reply cannot be parsed.
            AnalysisNetworkError: if the provider cannot be reached.
        """
