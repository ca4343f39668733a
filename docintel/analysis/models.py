from dataclasses import dataclass, field
from enum import Enum


class AnalysisStatus(str, Enum):
    """Integrity verdicts the structural analyzer may return."""

    CONSISTENT = "consistent"
    POSSIBLE_DUPLICATE_CONTENT = "possible_duplicate_content"
    MULTIPLE_BLOCKS_DETECTED = "multiple_blocks_detected"
    IDENTITY_INCONSISTENCY = "identity_inconsistency"
    MIXED_PERIODS = "mixed_periods"
    STRUCTURAL_ANOMALY = "structural_anomaly"
    POTENTIALLY_MODIFIED = "potentially_modified"


@dataclass(frozen=True)
class StructuralAnalysis:
    """Validated output of one structural analysis call."""

    status: AnalysisStatus
    anomalies: list[str] = field(default_factory=list)
    block_count: int | None = None
    summary: str | None = None
