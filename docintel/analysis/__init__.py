from docintel.analysis.analyzer import StructuralAnalyzer
from docintel.analysis.base import BaseStructuralAnalyzer
from docintel.analysis.factory import AnalyzerFactory
from docintel.analysis.models import AnalysisStatus, StructuralAnalysis

__all__ = [
    "AnalysisStatus",
    "AnalyzerFactory",
    "BaseStructuralAnalyzer",
    "StructuralAnalysis",
    "StructuralAnalyzer",
]
