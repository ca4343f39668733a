"""Tunable data tables for the score compiler.

Keyword matching is plain lowercase substring search. Replace
``DEFAULT_RULES`` with a custom ``ScoringRules`` to retune scoring without
touching the compiler.
"""

from dataclasses import dataclass, field

from docintel.analysis.models import AnalysisStatus
from docintel.scoring.models import FactorType, Recommendation, RiskTier


@dataclass(frozen=True)
class StatusRule:
    """Base score, default recommendation and factor for one analyzer status."""

    base_score: int
    recommendation: Recommendation
    factor_type: FactorType | None = None
    label: str = ""
    redundant_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoringRules:
    statuses: dict[AnalysisStatus, StatusRule]
    # Checked in order; the first type with a matching keyword wins.
    classification: list[tuple[FactorType, tuple[str, ...], float]]
    # Anomalies matching no keyword take this type at its classification confidence.
    unmatched_type: FactorType = FactorType.CONTENT_INCONSISTENCY
    status_confidence: float = 0.85
    high_confidence_threshold: float = 0.6
    penalty_per_point: float = 0.5
    max_penalty: float = 100.0
    max_critical_flags: int = 8
    # (minimum score, tier), highest band first.
    tier_thresholds: list[tuple[int, RiskTier]] = field(
        default_factory=lambda: [
            (85, RiskTier.LOW),
            (70, RiskTier.MEDIUM),
            (50, RiskTier.MEDIUM_HIGH),
        ]
    )
    fallback_tier: RiskTier = RiskTier.HIGH
    tier_recommendations: dict[RiskTier, Recommendation] = field(
        default_factory=lambda: {
            RiskTier.LOW: Recommendation.ACCEPT,
            RiskTier.MEDIUM: Recommendation.REQUEST_MORE_EVIDENCE,
            RiskTier.MEDIUM_HIGH: Recommendation.REJECT_WITH_REVIEW,
            RiskTier.HIGH: Recommendation.REJECT,
        }
    )
    tier_messages: dict[RiskTier, str] = field(
        default_factory=lambda: {
            RiskTier.LOW: "Document shows a low risk of fraud.",
            RiskTier.MEDIUM: (
                "Document shows some warning signs. Additional validation is recommended."
            ),
            RiskTier.MEDIUM_HIGH: (
                "Document shows significant risk and requires manual review."
            ),
            RiskTier.HIGH: "Document shows a very high risk of fraud.",
        }
    )


DEFAULT_RULES = ScoringRules(
    statuses={
        AnalysisStatus.CONSISTENT: StatusRule(95, Recommendation.ACCEPT),
        AnalysisStatus.POSSIBLE_DUPLICATE_CONTENT: StatusRule(
            60,
            Recommendation.REJECT_WITH_REVIEW,
            FactorType.DUPLICATE_CONTENT,
            "Possible duplicate content",
            ("duplicat", "repeated", "appears twice"),
        ),
        AnalysisStatus.MULTIPLE_BLOCKS_DETECTED: StatusRule(
            65,
            Recommendation.REJECT_WITH_REVIEW,
            FactorType.SUSPICIOUS_STRUCTURE,
            "Multiple document blocks detected",
            ("multiple", "block", "independent document", "separate document"),
        ),
        AnalysisStatus.IDENTITY_INCONSISTENCY: StatusRule(
            35,
            Recommendation.REJECT,
            FactorType.CONTENT_INCONSISTENCY,
            "Identity data is inconsistent",
            ("identity", "name mismatch", "different name", "different person"),
        ),
        AnalysisStatus.MIXED_PERIODS: StatusRule(
            70,
            Recommendation.REQUEST_MORE_EVIDENCE,
            FactorType.CONTENT_INCONSISTENCY,
            "Mixed reference periods",
            ("period", "different month", "different date", "mixed dates"),
        ),
        AnalysisStatus.STRUCTURAL_ANOMALY: StatusRule(
            60,
            Recommendation.REJECT_WITH_REVIEW,
            FactorType.SUSPICIOUS_STRUCTURE,
            "Structural anomaly",
            ("structur", "layout"),
        ),
        AnalysisStatus.POTENTIALLY_MODIFIED: StatusRule(
            20,
            Recommendation.REJECT,
            FactorType.ALTERED_TEXT,
            "Document potentially modified",
            ("modif", "altered", "edited", "tamper"),
        ),
    },
    classification=[
        (
            FactorType.DUPLICATE_CONTENT,
            ("duplicat", "repeated", "copied", "appears twice"),
            0.8,
        ),
        (
            FactorType.ALTERED_TEXT,
            ("altered", "edited", "modif", "tamper", "overwrit", "forged"),
            0.85,
        ),
        (
            FactorType.CONTENT_INCONSISTENCY,
            ("inconsisten", "mismatch", "conflict", "does not match", "divergen"),
            0.75,
        ),
        (
            FactorType.SUSPICIOUS_STRUCTURE,
            ("structur", "layout", "block", "font", "misalign", "format"),
            0.7,
        ),
    ],
)
