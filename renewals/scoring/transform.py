"""Normalize raw contract records (CSV rows, JSON objects) into Contract values."""

import logging
import math
import numbers
from datetime import date, datetime

import numpy as np
import pandas as pd

from renewals.errors import InvalidInput
from renewals.scoring.models import Contract
from renewals.utils.transforms import normalize_columns, parse_date, to_snake_case

logger = logging.getLogger(__name__)

# Field names used by the dashboard exports, after snake_casing
FIELD_ALIASES = {
    "contract_id": "id",
    "contract_value": "value",
    "contract_name": "name",
    "vendor_name": "vendor",
    "expiry_date": "end_date",
    "notice_period": "notice_period_days",
}

TRUE_VALUES = {"true", "t", "yes", "y", "1"}
FALSE_VALUES = {"false", "f", "no", "n", "0", ""}


def _is_blank(raw) -> bool:
    match raw:
        case None:
            return True
        case float() if math.isnan(raw):
            return True
        case str() if not raw.strip():
            return True
        case _:
            return raw is pd.NaT or raw is pd.NA


def _parse_id(raw) -> str:
    match raw:
        case _ if _is_blank(raw):
            raise InvalidInput("Contract is missing an id", field="id")
        case bool() | np.bool_():
            raise InvalidInput(f"Contract id must be a string or number, got {raw!r}", field="id")
        case float() if raw.is_integer():
            return str(int(raw))
        case numbers.Real():
            return str(raw)
        case str():
            return raw.strip()
        case _:
            raise InvalidInput(f"Contract id must be a string or number, got {raw!r}", field="id")


def _clean_currency(raw, record_id: str) -> float:
    """Strip currency symbols and convert to float; blanks count as zero."""
    match raw:
        case _ if _is_blank(raw):
            return 0.0
        case bool() | np.bool_():
            pass
        case numbers.Real():
            value = float(raw)
            if math.isfinite(value):
                return _non_negative(value, record_id)
        case str():
            cleaned = raw.strip().lstrip("$").replace(",", "").strip()
            try:
                value = float(cleaned)
            except ValueError:
                pass
            else:
                if math.isfinite(value):
                    return _non_negative(value, record_id)

    raise InvalidInput(
        f"Contract value must be numeric, got {raw!r}",
        field="value",
        record_id=record_id,
    )


def _non_negative(value: float, record_id: str) -> float:
    if value < 0:
        raise InvalidInput(
            f"Contract value must be non-negative, got {value}",
            field="value",
            record_id=record_id,
        )
    return value


def _parse_end_date(raw, record_id: str) -> date | None:
    """Parse an end date; unparsable dates are treated as missing."""
    match raw:
        case _ if _is_blank(raw):
            return None
        case pd.Timestamp() | datetime():
            return raw.date()
        case date():
            return raw
        case str():
            parsed = parse_date(raw)
            if parsed is not None:
                return parsed

    logger.warning("Contract %s has an unparsable end date %r", record_id, raw)
    return None


def _parse_bool(raw, record_id: str) -> bool:
    match raw:
        case _ if _is_blank(raw):
            return False
        case bool() | np.bool_():
            return bool(raw)
        case numbers.Real():
            return bool(raw)
        case str() if raw.strip().lower() in TRUE_VALUES:
            return True
        case str() if raw.strip().lower() in FALSE_VALUES:
            return False
        case _:
            raise InvalidInput(
                f"auto_renewal must be a boolean, got {raw!r}",
                field="auto_renewal",
                record_id=record_id,
            )


def _parse_notice(raw, record_id: str) -> int | None:
    match raw:
        case _ if _is_blank(raw):
            return None
        case bool() | np.bool_():
            days = None
        case numbers.Integral():
            days = int(raw)
        case float() if raw.is_integer():
            days = int(raw)
        case str():
            try:
                parsed = float(raw.strip())
            except ValueError:
                parsed = math.nan
            days = int(parsed) if parsed.is_integer() else None
        case _:
            days = None

    if days is None or days < 0:
        raise InvalidInput(
            f"notice_period_days must be a non-negative integer, got {raw!r}",
            field="notice_period_days",
            record_id=record_id,
        )
    return days


def _text(raw) -> str | None:
    return None if _is_blank(raw) else str(raw).strip()


def to_contract(record: dict) -> Contract:
    """Build a Contract from one raw record, raising InvalidInput on structural problems."""
    if not isinstance(record, dict):
        raise InvalidInput(f"Contract record must be an object, got {type(record).__name__}")

    fields = {}
    for key, raw in record.items():
        name = to_snake_case(key)
        fields[FIELD_ALIASES.get(name, name)] = raw

    record_id = _parse_id(fields.get("id"))
    return Contract(
        id=record_id,
        vendor=_text(fields.get("vendor")) or "",
        category=_text(fields.get("category")),
        value=_clean_currency(fields.get("value"), record_id),
        end_date=_parse_end_date(fields.get("end_date"), record_id),
        auto_renewal=_parse_bool(fields.get("auto_renewal"), record_id),
        notice_period_days=_parse_notice(fields.get("notice_period_days"), record_id),
        name=_text(fields.get("name")),
    )


def normalize_contract_records(df: pd.DataFrame) -> list[Contract]:
    """Convert a raw contract frame into Contract values, one per row."""
    if df.empty:
        return []

    df = normalize_columns(df, mapping=FIELD_ALIASES)
    df = df.loc[:, ~df.columns.duplicated()]
    contracts = [to_contract(row) for row in df.to_dict(orient="records")]

    logger.info("Normalized %d contract records", len(contracts))
    return contracts


def contracts_to_frame(contracts: list[Contract]) -> pd.DataFrame:
    """Tabulate Contract values for schema validation and export."""
    rows = [
        {
            "id": c.id,
            "vendor": c.vendor,
            "category": c.category,
            "value": c.value,
            "end_date": pd.to_datetime(c.end_date, errors="coerce") if c.end_date else pd.NaT,
            "auto_renewal": c.auto_renewal,
            "notice_period_days": c.notice_period_days,
        }
        for c in contracts
    ]
    columns = ["id", "vendor", "category", "value", "end_date", "auto_renewal", "notice_period_days"]
    return pd.DataFrame(rows, columns=columns)
