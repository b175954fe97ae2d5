"""Shared utilities for contract scoring."""

from renewals.utils.io import read_csv_files, read_json_records, write_output
from renewals.utils.transforms import normalize_columns, parse_date, to_snake_case
from renewals.utils.validators import validate_dataframe
from renewals.utils.types import RecordID, ValidationOutcome
