"""Shared type definitions for contract scoring."""

from typing import TypeAlias

RecordID: TypeAlias = str
ValidationOutcome: TypeAlias = dict[str, bool | str | list[str]]
Money: TypeAlias = float
