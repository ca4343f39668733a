"""Deterministic conversion of a structural verdict into a ScanResult."""

import math
import re
from datetime import datetime, timezone

from docintel.analysis.models import AnalysisStatus, StructuralAnalysis
from docintel.scoring.models import (
    FactorSource,
    FactorType,
    RiskFactor,
    RiskTier,
    ScanResult,
)
from docintel.scoring.rules import DEFAULT_RULES, ScoringRules

_WHITESPACE_RE = re.compile(r"\s+")


class ScoreCompiler:
    """Pure scoring over (status, anomalies).

    Identical input always produces an identical result apart from the
    timestamp and elapsed time fields.
    """

    def __init__(self, rules: ScoringRules = DEFAULT_RULES) -> None:
        self._rules = rules

    def compile_analysis(
        self,
        document_id: str,
        analysis: StructuralAnalysis,
        elapsed_ms: int = 0,
    ) -> ScanResult:
        return self.compile(
            document_id,
            analysis.status,
            analysis.anomalies,
            summary=analysis.summary,
            block_count=analysis.block_count,
            elapsed_ms=elapsed_ms,
        )

    def compile(
        self,
        document_id: str,
        status: AnalysisStatus | str,
        anomalies: list[str],
        *,
        summary: str | None = None,
        block_count: int | None = None,
        elapsed_ms: int = 0,
        timestamp: datetime | None = None,
    ) -> ScanResult:
        """Compile a verdict into a risk score, tier and recommendation.

        Raises:
            ValueError: if status is not a known analyzer status.
        """
        status = AnalysisStatus(status)
        rule = self._rules.statuses[status]
        base_score = rule.base_score

        factors = self._collect_factors(status, anomalies)
        threshold = self._rules.high_confidence_threshold
        high = [f for f in factors if f.confidence >= threshold]

        score = base_score
        if high:
            points = sum(f.confidence * 100 for f in high)
            penalty = min(self._rules.max_penalty, points * self._rules.penalty_per_point)
            score = max(0, min(base_score, math.floor(100 - penalty)))

        tier = self._tier_for(score)
        critical = sorted(high, key=lambda f: f.confidence, reverse=True)
        critical = critical[: self._rules.max_critical_flags]

        return ScanResult(
            document_id=document_id,
            total_score=int(score),
            risk_tier=tier,
            recommendation=self._rules.tier_recommendations[tier],
            scores={"structural": base_score},
            block_count=block_count,
            critical_flags=critical,
            justification=self._build_justification(summary, critical, tier),
            elapsed_ms=elapsed_ms,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    def _collect_factors(self, status: AnalysisStatus, anomalies: list[str]) -> list[RiskFactor]:
        rule = self._rules.statuses[status]
        factors: list[RiskFactor] = []
        seen: set[tuple[FactorType, str]] = set()

        def add(factor: RiskFactor) -> None:
            key = (factor.type, _normalize(factor.justification))
            if key not in seen:
                seen.add(key)
                factors.append(factor)

        if status is not AnalysisStatus.CONSISTENT and rule.factor_type is not None:
            add(
                RiskFactor(
                    source=FactorSource.STATUS,
                    type=rule.factor_type,
                    confidence=self._rules.status_confidence,
                    justification=rule.label or status.value,
                )
            )

        for anomaly in anomalies:
            text = anomaly.strip()
            if not text:
                continue
            lowered = text.lower()
            # Already counted through the status factor.
            if any(keyword in lowered for keyword in rule.redundant_keywords):
                continue
            factor_type, confidence = self._classify(lowered)
            add(
                RiskFactor(
                    source=FactorSource.ANOMALY,
                    type=factor_type,
                    confidence=confidence,
                    justification=text,
                )
            )
        return factors

    def _classify(self, lowered: str) -> tuple[FactorType, float]:
        for factor_type, keywords, confidence in self._rules.classification:
            if any(keyword in lowered for keyword in keywords):
                return factor_type, confidence
        return self._rules.unmatched_type, self._default_confidence(self._rules.unmatched_type)

    def _default_confidence(self, factor_type: FactorType) -> float:
        for candidate, _keywords, confidence in self._rules.classification:
            if candidate is factor_type:
                return confidence
        return self._rules.high_confidence_threshold

    def _tier_for(self, score: int) -> RiskTier:
        for minimum, tier in self._rules.tier_thresholds:
            if score >= minimum:
                return tier
        return self._rules.fallback_tier

    def _build_justification(
        self,
        summary: str | None,
        critical: list[RiskFactor],
        tier: RiskTier,
    ) -> str:
        parts: list[str] = []
        if summary:
            parts.append(summary.strip())
        if critical:
            labels = ", ".join(
                f"{f.justification} ({f.confidence * 100:.0f}%)" for f in critical
            )
            parts.append(f"High-confidence findings: {labels}.")
        parts.append(self._rules.tier_messages[tier])
        return " ".join(parts)


def _normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip().lower()).rstrip(".!;:,")
