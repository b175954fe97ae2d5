"""Unit tests for shared I/O, transform and validation utilities."""

import json
from datetime import date

import pandas as pd
import pytest

from renewals.utils.io import load_yaml_config, read_csv_files, read_json_records, write_output
from renewals.utils.transforms import normalize_columns, parse_date, to_snake_case


class TestTransforms:
    """Test column name and date normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("endDate", "end_date"),
        ("noticePeriodDays", "notice_period_days"),
        ("Contract Value", "contract_value"),
        ("auto-renewal", "auto_renewal"),
        (" id ", "id"),
    ])
    def test_to_snake_case(self, raw, expected):
        assert to_snake_case(raw) == expected

    def test_normalize_columns_with_mapping(self):
        df = pd.DataFrame(columns=["Contract ID", "endDate"])
        out = normalize_columns(df, mapping={"contract_id": "id"})
        assert list(out.columns) == ["id", "end_date"]
        assert list(df.columns) == ["Contract ID", "endDate"]

    @pytest.mark.parametrize("text,expected", [
        ("2026-01-15", date(2026, 1, 15)),
        (" 2300-12-31 ", date(2300, 12, 31)),
        ("2026-01-15T09:30:00", date(2026, 1, 15)),
        ("Jan 5, 2026", date(2026, 1, 5)),
        ("someday", None),
    ])
    def test_parse_date(self, text, expected):
        assert parse_date(text) == expected


class TestIO:
    """Test reading and writing files."""

    def test_read_json_list(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps([{"id": "a"}]))
        assert read_json_records(path) == ([{"id": "a"}], None)

    def test_read_json_body(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"contracts": [{"id": "a"}], "now": "2026-01-01"}))
        assert read_json_records(path) == ([{"id": "a"}], "2026-01-01")

    def test_read_json_unknown_layout(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"rows": []}))
        with pytest.raises(ValueError):
            read_json_records(path)

    def test_read_csv_files_empty_directory(self, tmp_path):
        assert read_csv_files(tmp_path).empty

    def test_write_json(self, tmp_path):
        path = tmp_path / "nested" / "out.json"
        write_output(pd.DataFrame({"a": [1, 2]}), path, fmt="json")
        assert json.loads(path.read_text()) == [{"a": 1}, {"a": 2}]

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            write_output(pd.DataFrame(), tmp_path / "out.xml", fmt="xml")

    def test_load_yaml_config(self, tmp_path):
        path = tmp_path / "renewals.yaml"
        path.write_text("policy:\n  top_n: 4\n")
        assert load_yaml_config(path) == {"policy": {"top_n": 4}}

    def test_load_empty_yaml(self, tmp_path):
        path = tmp_path / "renewals.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

