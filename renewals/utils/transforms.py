"""Common data transformation utilities."""

import re
from datetime import date
from typing import TypeAlias

import pandas as pd

ColumnMapping: TypeAlias = dict[str, str]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """``endDate`` / ``End Date`` / ``end-date`` -> ``end_date``."""
    return _CAMEL_BOUNDARY.sub("_", str(name).strip()).lower().replace(" ", "_").replace("-", "_")


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping."""
    df = df.copy()
    df.columns = [to_snake_case(col) for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def parse_date(text: str) -> date | None:
    """Parse a date string, ISO first; anything unparsable gives None."""
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    parsed = pd.to_datetime(text, errors="coerce")
    return None if pd.isna(parsed) else parsed.date()
