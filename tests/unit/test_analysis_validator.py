import pytest

from docintel.analysis.exceptions import MalformedAnalysisResponse
from docintel.analysis.models import AnalysisStatus
from docintel.analysis.validator import validate_and_build


def _valid_data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "status": "mixed_periods",
        "block_count": 2,
        "anomalies": ["January and March payslips in one file"],
        "summary": "Two periods found.",
    }
    data.update(overrides)
    return data


class TestValidPayload:
    def test_builds_analysis(self) -> None:
        result = validate_and_build(_valid_data())
        assert result.status is AnalysisStatus.MIXED_PERIODS
        assert result.block_count == 2
        assert result.anomalies == ["January and March payslips in one file"]
        assert result.summary == "Two periods found."

    def test_status_is_case_insensitive(self) -> None:
        result = validate_and_build(_valid_data(status=" Consistent "))
        assert result.status is AnalysisStatus.CONSISTENT

    def test_optional_fields_may_be_missing(self) -> None:
        result = validate_and_build({"status": "consistent", "anomalies": []})
        assert result.block_count is None
        assert result.summary is None

    def test_blank_anomalies_are_dropped(self) -> None:
        result = validate_and_build(_valid_data(anomalies=["  ", " totals edited "]))
        assert result.anomalies == ["totals edited"]


class TestInvalidPayload:
    @pytest.mark.parametrize("field", ["status", "anomalies"])
    def test_missing_required_field(self, field: str) -> None:
        data = _valid_data()
        del data[field]
        with pytest.raises(MalformedAnalysisResponse, match=field):
            validate_and_build(data)

    def test_unknown_status(self) -> None:
        with pytest.raises(MalformedAnalysisResponse, match="status"):
            validate_and_build(_valid_data(status="looks_fine"))

    def test_anomalies_must_be_list(self) -> None:
        with pytest.raises(MalformedAnalysisResponse, match="anomalies"):
            validate_and_build(_valid_data(anomalies="edited"))

    def test_anomaly_items_must_be_strings(self) -> None:
        with pytest.raises(MalformedAnalysisResponse, match="index 1"):
            validate_and_build(_valid_data(anomalies=["ok", 3]))

    @pytest.mark.parametrize("value", [-1, 1.5, "2", True])
    def test_bad_block_count(self, value: object) -> None:
        with pytest.raises(MalformedAnalysisResponse, match="block_count"):
            validate_and_build(_valid_data(block_count=value))

    def test_summary_must_be_string(self) -> None:
        with pytest.raises(MalformedAnalysisResponse, match="summary"):
            validate_and_build(_valid_data(summary=["no"]))
