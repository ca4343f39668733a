import json

from docintel.analysis.example_client_adapter import ExampleClientAdapter
from docintel.analysis.validator import validate_and_build


class TestExampleClientAdapter:
    def test_returns_valid_consistent_verdict(self) -> None:
        adapter = ExampleClientAdapter()
        raw = adapter.create_chat_completion(
            model="example",
            temperature=0.0,
            seed=None,
            system_prompt="s",
            user_prompt="u",
            json_schema={},
        )
        result = validate_and_build(json.loads(raw))
        assert result.status.value == "consistent"
        assert result.anomalies == []
