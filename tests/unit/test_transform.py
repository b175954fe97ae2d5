"""Unit tests for raw contract record normalization."""

from datetime import date

import pandas as pd
import pytest

from renewals.errors import InvalidInput
from renewals.scoring.models import CONTRACT_SCHEMA
from renewals.scoring.transform import contracts_to_frame, normalize_contract_records, to_contract
from renewals.utils.validators import validate_dataframe


class TestToContract:
    """Test single-record conversion."""

    def test_camel_case_record(self):
        contract = to_contract({
            "id": "c-1",
            "vendor": " Acme ",
            "category": "Software",
            "value": 20000,
            "endDate": "2026-03-01",
            "autoRenewal": True,
            "noticePeriodDays": 45,
        })

        assert contract.id == "c-1"
        assert contract.vendor == "Acme"
        assert contract.value == 20_000.0
        assert contract.end_date == date(2026, 3, 1)
        assert contract.auto_renewal is True
        assert contract.notice_period_days == 45

    def test_dashboard_aliases(self):
        contract = to_contract({
            "contract_id": 17,
            "contract_value": "$12,500.50",
            "end_date": "2026-06-30",
            "auto_renewal": "yes",
        })

        assert contract.id == "17"
        assert contract.value == 12_500.50
        assert contract.auto_renewal is True

    def test_missing_value_is_zero(self):
        assert to_contract({"id": "a"}).value == 0.0
        assert to_contract({"id": "a", "value": ""}).value == 0.0
        assert to_contract({"id": "a", "value": float("nan")}).value == 0.0

    def test_unparsable_end_date_is_missing(self, caplog):
        contract = to_contract({"id": "a", "endDate": "someday"})
        assert contract.end_date is None
        assert "unparsable end date" in caplog.text

    def test_far_future_iso_end_date(self, caplog):
        contract = to_contract({"id": "a", "endDate": "2300-01-01"})
        assert contract.end_date == date(2300, 1, 1)
        assert "unparsable" not in caplog.text

    def test_non_iso_end_date(self):
        assert to_contract({"id": "a", "endDate": "03/01/2026"}).end_date == date(2026, 3, 1)

    def test_float_id_from_spreadsheet(self):
        assert to_contract({"id": 42.0}).id == "42"

    @pytest.mark.parametrize("notice,expected", [("30", 30), ("45.0", 45), (60.0, 60), ("", None)])
    def test_notice_period(self, notice, expected):
        assert to_contract({"id": "a", "notice_period_days": notice}).notice_period_days == expected


class TestToContractErrors:
    """Test structural validation of records."""

    @pytest.mark.parametrize("record", [{}, {"id": None}, {"id": "  "}, {"id": True}])
    def test_missing_id(self, record):
        with pytest.raises(InvalidInput) as exc_info:
            to_contract(record)
        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("value", ["twelve", True, [100], "inf"])
    def test_non_numeric_value(self, value):
        with pytest.raises(InvalidInput) as exc_info:
            to_contract({"id": "v-1", "value": value})
        assert exc_info.value.field == "value"
        assert exc_info.value.record_id == "v-1"

    def test_negative_value(self):
        with pytest.raises(InvalidInput, match="non-negative"):
            to_contract({"id": "v-1", "value": "-500"})

    @pytest.mark.parametrize("notice", ["soon", -3, "7.5"])
    def test_bad_notice_period(self, notice):
        with pytest.raises(InvalidInput) as exc_info:
            to_contract({"id": "n-1", "notice_period_days": notice})
        assert exc_info.value.field == "notice_period_days"

    def test_bad_auto_renewal(self):
        with pytest.raises(InvalidInput):
            to_contract({"id": "a", "auto_renewal": "sometimes"})

    def test_non_dict_record(self):
        with pytest.raises(InvalidInput):
            to_contract(["id", "a"])

    def test_error_serializes(self):
        with pytest.raises(InvalidInput) as exc_info:
            to_contract({"id": "v-1", "value": "twelve"})
        assert exc_info.value.to_dict()["recordId"] == "v-1"


class TestNormalizeContractRecords:
    """Test frame-level normalization."""

    def test_csv_headers(self):
        raw = pd.DataFrame({
            "Contract ID": ["a", "b"],
            "Vendor": ["Acme", "Globex"],
            "Category": ["Software", "Marketing"],
            "Contract Value": ["20000", "60000"],
            "End Date": ["2026-02-04", ""],
            "Auto Renewal": ["true", "false"],
        })
        contracts = normalize_contract_records(raw)

        assert [c.id for c in contracts] == ["a", "b"]
        assert contracts[0].value == 20_000.0
        assert contracts[0].end_date == date(2026, 2, 4)
        assert contracts[1].end_date is None
        assert contracts[1].auto_renewal is False

    def test_empty_frame(self):
        assert normalize_contract_records(pd.DataFrame()) == []

    def test_frame_passes_schema(self):
        contracts = [
            to_contract({"id": "a", "value": 100, "endDate": "2026-05-01", "noticePeriodDays": 30}),
            to_contract({"id": "b"}),
        ]
        result = validate_dataframe(contracts_to_frame(contracts), CONTRACT_SCHEMA)
        assert result["valid"], result["errors"]

    def test_far_future_frame_passes_schema(self):
        contracts = [to_contract({"id": "a", "value": 100, "endDate": "2300-01-01"})]
        result = validate_dataframe(contracts_to_frame(contracts), CONTRACT_SCHEMA)
        assert result["valid"], result["errors"]

    def test_duplicate_ids_fail_schema(self):
        contracts = [to_contract({"id": "a"}), to_contract({"id": "a"})]
        result = validate_dataframe(contracts_to_frame(contracts), CONTRACT_SCHEMA)
        assert not result["valid"]
