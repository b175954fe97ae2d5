"""Integration tests for loading, scoring and exporting a contract export."""

import json
from datetime import date

import pandas as pd
import pytest
from pandera import Check, Column, DataFrameSchema

from renewals import scoring
from renewals.errors import InvalidInput
from renewals.run import main

CSV = """Contract ID,Vendor,Category,Contract Value,End Date,Auto Renewal,Notice Period Days
c-1,Acme,Software,"$20,000",2026-02-04,true,
c-2,Globex,Marketing,60000,2026-04-25,false,60
c-3,Initech,Services,10000,2026-09-01,false,
c-4,Initech,Services,10000,,false,
"""

AS_OF = date(2026, 1, 15)


@pytest.fixture
def contracts_csv(tmp_path):
    path = tmp_path / "contracts.csv"
    path.write_text(CSV)
    return path


class TestScoringRun:
    """Test the scoring domain end to end."""

    def test_run_csv(self, contracts_csv):
        outcome = scoring.run(contracts_csv, AS_OF)

        results = {r.contract_id: r for r in outcome["results"]}
        assert results["c-1"].potential_savings == pytest.approx(3960)
        assert results["c-2"].risk_exposure == pytest.approx(12_000)
        assert results["c-4"].optimal_renewal_date is None

        summary = outcome["summary"]
        assert summary.total_contracts == 4
        assert summary.vendor_consolidation_groups[0].vendor == "Initech"
        assert summary.unscheduled_contracts == 1
        assert len(outcome["scored"]) == 4

    def test_run_generates_renewal_tasks(self, contracts_csv):
        outcome = scoring.run(contracts_csv, AS_OF)

        by_contract = {}
        for task in outcome["tasks"]:
            by_contract.setdefault(task.contract_id, []).append(task.type)
        assert by_contract == {
            "c-1": ["renewal", "research", "compliance", "audit"],
            "c-2": ["research", "audit"],
            "c-3": ["research", "audit"],
        }
        assert outcome["task_summary"]["total_tasks"] == 8
        assert outcome["task_summary"]["by_type"]["audit"] == 3

    def test_run_directory(self, tmp_path):
        (tmp_path / "a.csv").write_text("id,value\na,100\n")
        (tmp_path / "b.csv").write_text("id,value\nb,200\n")
        outcome = scoring.run(tmp_path, AS_OF)
        assert outcome["summary"].total_value == pytest.approx(300)

    def test_run_json_body_uses_embedded_now(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({
            "now": "2026-03-01",
            "contracts": [{"id": "j-1", "value": 1000, "endDate": "2026-03-31"}],
        }))
        outcome = scoring.run(path, AS_OF)

        assert outcome["as_of"] == date(2026, 3, 1)
        assert outcome["results"][0].days_until_expiry == 30

    def test_explicit_now_wins(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"now": "2026-03-01", "contracts": []}))
        assert scoring.run(path, AS_OF, now=date(2026, 2, 1))["as_of"] == date(2026, 2, 1)

    def test_negative_top_n(self, contracts_csv):
        with pytest.raises(InvalidInput):
            scoring.run(contracts_csv, AS_OF, top_n=-1)

    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            scoring.run(tmp_path / "nope.csv", AS_OF)


class TestValidate:
    """Test source validation."""

    def test_valid_source(self, contracts_csv):
        assert scoring.validate(contracts_csv) == {"status": "ok", "row_count": 4}

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,value\nx,lots\n")
        result = scoring.validate(path)
        assert result["status"] == "error"
        assert "x" in result["message"]

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "dupes.csv"
        path.write_text("id,value\nx,1\nx,2\n")
        assert scoring.validate(path)["status"] == "error"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "contracts.txt"
        path.write_text("id\n")
        assert scoring.validate(path)["status"] == "error"


class TestCommandLine:
    """Test the command-line runner."""

    def test_scores_and_writes_output(self, contracts_csv, tmp_path, capsys):
        output = tmp_path / "out" / "scores.csv"
        main([str(contracts_csv), "--now", "2026-01-15", "--output", str(output), "--format", "csv"])

        written = pd.read_csv(output)
        assert list(written["contract_id"]) == ["c-1", "c-2", "c-3", "c-4"]
        assert "Portfolio Summary" in capsys.readouterr().out

    def test_validate_flag(self, contracts_csv, capsys):
        main([str(contracts_csv), "--validate"])
        assert "4 valid contracts" in capsys.readouterr().out

    def test_invalid_input_exit_code(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,value\nx,-10\n")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--now", "2026-01-15"])
        assert exc_info.value.code == 2

    def test_missing_file_exit_code(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.csv")])
        assert exc_info.value.code == 1

    def test_prints_task_count(self, contracts_csv, capsys):
        main([str(contracts_csv), "--now", "2026-01-15"])
        assert "Renewal tasks: 8" in capsys.readouterr().out

    @pytest.mark.parametrize("top", ["-1", "three"])
    def test_bad_top_rejected(self, contracts_csv, top):
        with pytest.raises(SystemExit) as exc_info:
            main([str(contracts_csv), "--top", top])
        assert exc_info.value.code == 2


class TestStrictValidation:
    """Test how scored-output schema failures are reported."""

    @pytest.fixture
    def unreachable_schema(self, monkeypatch):
        schema = DataFrameSchema({"lead_time_days": Column(int, Check.greater_than_or_equal_to(1000))})
        monkeypatch.setattr(scoring, "SCORE_SCHEMA", schema)

    def test_strict_raises(self, contracts_csv, unreachable_schema):
        with pytest.raises(RuntimeError, match="failed validation"):
            scoring.run(contracts_csv, AS_OF)

    def test_lenient_logs(self, contracts_csv, unreachable_schema, caplog):
        outcome = scoring.run(contracts_csv, AS_OF, strict=False)
        assert outcome["summary"].total_contracts == 4
        assert "Scored output failed validation" in caplog.text
