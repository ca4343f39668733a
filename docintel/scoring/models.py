from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class RiskTier(str, Enum):
    """Ordered risk bands, lowest risk first."""

    LOW = "low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"


class Recommendation(str, Enum):
    ACCEPT = "accept"
    REQUEST_MORE_EVIDENCE = "request_more_evidence"
    REJECT_WITH_REVIEW = "reject_with_review"
    REJECT = "reject"


class FactorType(str, Enum):
    """Kinds of risk factor a finding is classified into."""

    DUPLICATE_CONTENT = "duplicate_content"
    CONTENT_INCONSISTENCY = "content_inconsistency"
    SUSPICIOUS_STRUCTURE = "suspicious_structure"
    ALTERED_TEXT = "altered_text"


class FactorSource(str, Enum):
    STATUS = "status"
    ANOMALY = "anomaly"


@dataclass(frozen=True)
class RiskFactor:
    """A single finding contributing to the risk score."""

    source: FactorSource
    type: FactorType
    confidence: float  # 0-1
    justification: str


@dataclass(frozen=True)
class ScanResult:
    """Final, deterministic outcome of a document scan."""

    document_id: str
    total_score: int  # 0-100, higher is safer
    risk_tier: RiskTier
    recommendation: Recommendation
    scores: dict[str, int]
    block_count: int | None = None
    critical_flags: list[RiskFactor] = field(default_factory=list)
    justification: str = ""
    elapsed_ms: int = 0
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, enum members flattened to their values."""
        data = asdict(self)
        data["risk_tier"] = self.risk_tier.value
        data["recommendation"] = self.recommendation.value
        data["critical_flags"] = [
            {
                "source": flag.source.value,
                "type": flag.type.value,
                "confidence": flag.confidence,
                "justification": flag.justification,
            }
            for flag in self.critical_flags
        ]
        data["timestamp"] = self.timestamp.isoformat() if self.timestamp else None
        return data
