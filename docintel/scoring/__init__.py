from docintel.scoring.compiler import ScoreCompiler
from docintel.scoring.models import RiskTier, Recommendation, ScanResult
from docintel.scoring.rules import DEFAULT_RULES, ScoringRules

__all__ = ["DEFAULT_RULES", "Recommendation", "RiskTier", "ScanResult", "ScoreCompiler", "ScoringRules"]
