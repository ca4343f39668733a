"""Validates a parsed analyzer reply and builds a StructuralAnalysis."""

from typing import Any

from docintel.analysis.exceptions import MalformedAnalysisResponse
from docintel.analysis.models import AnalysisStatus, StructuralAnalysis

_MAX_ANOMALIES = 50
_VALID_STATUSES = frozenset(status.value for status in AnalysisStatus)


def validate_and_build(data: dict[str, Any]) -> StructuralAnalysis:
    """Validate raw parsed JSON and build a StructuralAnalysis.

    Unknown statuses or wrongly typed fields fail fast; nothing is defaulted.

    Raises:
        MalformedAnalysisResponse: on any validation failure.
    """
    for field in ("status", "anomalies"):
        if field not in data:
            raise MalformedAnalysisResponse(f"Missing required top-level field: {field}")
    return StructuralAnalysis(
        status=_build_status(data["status"]),
        anomalies=_build_anomalies(data["anomalies"]),
        block_count=_build_block_count(data.get("block_count")),
        summary=_build_summary(data.get("summary")),
    )


def _build_status(raw: Any) -> AnalysisStatus:
    if not isinstance(raw, str) or raw.strip().lower() not in _VALID_STATUSES:
        raise MalformedAnalysisResponse(
            f"'status' must be one of {sorted(_VALID_STATUSES)}, got {raw!r}"
        )
    return AnalysisStatus(raw.strip().lower())


def _build_anomalies(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise MalformedAnalysisResponse("'anomalies' must be a list")
    if len(raw) > _MAX_ANOMALIES:
        raise MalformedAnalysisResponse(
            f"Too many anomalies: {len(raw)} (max {_MAX_ANOMALIES})"
        )
    anomalies: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise MalformedAnalysisResponse(f"Anomaly at index {i} must be a string")
        if item.strip():
            anomalies.append(item.strip())
    return anomalies


def _build_block_count(raw: Any) -> int | None:
    if raw is None:
        return None
    # bool is an int subclass
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise MalformedAnalysisResponse("'block_count' must be a non-negative integer or null")
    return raw


def _build_summary(raw: Any) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise MalformedAnalysisResponse("'summary' must be a string or null")
    return raw.strip() or None
