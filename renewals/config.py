"""Scoring configuration and environment setup."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import TypeAlias

from renewals.utils.io import load_toml_config

ConfigDict: TypeAlias = dict[str, str | int | float | bool | list[str]]

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


@dataclass(frozen=True)
class ScoringPolicy:
    base_lead_days: int = 60
    min_lead_days: int = 15
    top_n: int = 3
    consolidation_rate: float = 0.15
    competitive_bidding_rate: float = 0.12
    competitive_bidding_count: int = 3
    competitive_bidding_min_value: float = 1_000.0
    category_optimization_rate: float = 0.08
    category_optimization_min_value: float = 5_000.0
    upcoming_window_days: int = 90
    high_value_threshold: float = 100_000.0


@dataclass(frozen=True)
class OutputConfig:
    directory: str
    fmt: str


@dataclass(frozen=True)
class RenewalsConfig:
    env: str
    policy: ScoringPolicy
    output: OutputConfig
    strict_validation: bool = True


def load_config(env: str = "production") -> RenewalsConfig:
    match env:
        case "production":
            output = OutputConfig(directory="output/renewals", fmt="parquet")
            strict = True
        case "staging":
            output = OutputConfig(directory="output/renewals_staging", fmt="csv")
            strict = True
        case "development":
            output = OutputConfig(directory="output/dev", fmt="csv")
            strict = False
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return RenewalsConfig(
        env=env,
        policy=ScoringPolicy(),
        output=output,
        strict_validation=strict,
    )


def apply_overrides(config: RenewalsConfig, overrides: dict) -> RenewalsConfig:
    """Layer ``[tool.renewals]``-style overrides onto a loaded config."""
    policy_fields = ScoringPolicy.__dataclass_fields__
    policy_overrides = {
        key: value for key, value in overrides.get("policy", {}).items()
        if key in policy_fields
    }
    policy = replace(config.policy, **policy_overrides)

    output = config.output
    match overrides.get("output"):
        case {"directory": directory, "format": fmt}:
            output = OutputConfig(directory=directory, fmt=fmt)
        case {"directory": directory}:
            output = replace(output, directory=directory)
        case {"format": fmt}:
            output = replace(output, fmt=fmt)
        case _:
            pass

    return replace(config, policy=policy, output=output)


def get_env_config(pyproject: Path = PYPROJECT) -> ConfigDict:
    """Read scoring config from pyproject.toml."""
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("renewals", {})
