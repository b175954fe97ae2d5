"""File I/O utilities for reading contract exports and writing scored output."""

import json
import tomllib
from pathlib import Path
from typing import TypeAlias

import pandas as pd
import yaml
from rich.console import Console

FilePath: TypeAlias = str | Path

console = Console()


def read_csv_files(directory: FilePath, pattern: str = "*.csv") -> pd.DataFrame:
    """Read all CSV files from a directory and concatenate them."""
    directory = Path(directory)
    chunks = []

    for csv_file in sorted(directory.glob(pattern)):
        console.print(f"  Reading {csv_file.name}...")
        chunk = pd.read_csv(csv_file, dtype=str, keep_default_na=False)
        chunk["_file"] = csv_file.name
        chunks.append(chunk)

    if not chunks:
        return pd.DataFrame()
    return pd.concat(chunks, ignore_index=True)


def read_json_records(path: FilePath) -> tuple[list[dict], str | None]:
    """Read contract records from a JSON file.

    Accepts either a bare list of records or a request body of the form
    ``{"contracts": [...], "now": "YYYY-MM-DD"}``.  Returns the records and
    the optional ``now`` string.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    match data:
        case list():
            return data, None
        case {"contracts": list() as records, "now": str() as now}:
            return records, now
        case {"contracts": list() as records}:
            return records, None
        case _:
            raise ValueError(f"Unrecognized JSON layout in {path}")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "parquet":
            df.to_parquet(path, index=False)
        case "excel":
            df.to_excel(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file using Python 3.11+ stdlib."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_yaml_config(path: FilePath) -> dict:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
