"""Ingest contract exports — bulk CSV uploads and JSON request bodies."""

from pathlib import Path
from typing import TypeAlias

import pandas as pd
from rich.console import Console

from renewals.utils.io import read_csv_files, read_json_records

ContractFrame: TypeAlias = pd.DataFrame

console = Console()


def load_contract_frame(
    path: str | Path,
    validate_only: bool = False,
) -> tuple[ContractFrame, str | None]:
    """Load raw contract records from a CSV file, a directory of CSVs, or a JSON file.

    Returns the raw frame and the ``now`` date carried by a JSON request
    body, if any.  CSV cells are read as strings so the normalizer sees the
    values exactly as exported.
    """
    path = Path(path)
    now = None

    match path:
        case p if p.is_dir():
            frame = read_csv_files(p)
        case p if not p.exists():
            raise FileNotFoundError(f"Contract source not found: {p}")
        case p if p.suffix.lower() == ".csv":
            frame = pd.read_csv(p, dtype=str, keep_default_na=False)
        case p if p.suffix.lower() == ".json":
            records, now = read_json_records(p)
            frame = pd.DataFrame.from_records(records)
        case p:
            raise ValueError(f"Unsupported contract source: {p.suffix or p.name}")

    if validate_only:
        return frame.head(500), now

    console.print(f"  Loaded {len(frame):,} contract records from {path.name}")
    return frame, now
