"""Contract and score value types, plus pandera schemas for scored frames."""

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import StrEnum

from pandera import Column, Check, DataFrameSchema

from renewals.utils.types import Money, RecordID


class RiskLevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Volatility(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class Contract:
    id: RecordID
    vendor: str = ""
    category: str | None = None
    value: Money = 0.0
    end_date: date | None = None
    auto_renewal: bool = False
    notice_period_days: int | None = None
    name: str | None = None


@dataclass(frozen=True)
class TimingOutlook:
    savings_pct: float
    estimated_savings: Money
    complexity_factor: float
    competition_factor: float
    risk_reduction: str
    market_leverage: str
    negotiation_power: float


@dataclass(frozen=True)
class ScoreResult:
    contract_id: RecordID
    category: str
    potential_savings: Money
    risk_exposure: Money
    savings_rate: float
    risk_rate: float
    lead_time_days: int
    risk_level: RiskLevel
    market_volatility: Volatility
    optimal_renewal_date: date | None = None
    days_before_expiry: int | None = None
    days_until_expiry: int | None = None
    urgency_adjusted_savings: Money = 0.0
    timing: TimingOutlook | None = None
    reasoning: list[str] = field(default_factory=list)
    risk_factors: list[str] = field(default_factory=list)
    mitigation_actions: list[str] = field(default_factory=list)
    savings_actions: list[str] = field(default_factory=list)

    @property
    def schedulable(self) -> bool:
        return self.optimal_renewal_date is not None

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys used by the dashboard API."""
        timing = asdict(self.timing) if self.timing else None
        return {
            "contractId": self.contract_id,
            "category": self.category,
            "potentialSavings": self.potential_savings,
            "riskExposure": self.risk_exposure,
            "savingsRate": self.savings_rate,
            "riskRate": self.risk_rate,
            "leadTimeDays": self.lead_time_days,
            "optimalRenewalDate": _iso(self.optimal_renewal_date),
            "daysBeforeExpiry": self.days_before_expiry,
            "daysUntilExpiry": self.days_until_expiry,
            "riskLevel": str(self.risk_level),
            "marketVolatility": str(self.market_volatility),
            "urgencyAdjustedSavings": self.urgency_adjusted_savings,
            "timing": camel_keys(timing) if timing else None,
            "reasoning": list(self.reasoning),
            "riskFactors": list(self.risk_factors),
            "mitigationActions": list(self.mitigation_actions),
            "savingsActions": list(self.savings_actions),
        }


@dataclass(frozen=True)
class ConsolidationGroup:
    vendor: str
    contract_count: int
    total_value: Money
    consolidation_savings: Money
    contract_ids: tuple[RecordID, ...] = ()


@dataclass(frozen=True)
class CategoryOptimization:
    category: str
    contract_count: int
    total_value: Money
    optimization_savings: Money


@dataclass(frozen=True)
class SavingsOpportunity:
    contract_id: RecordID
    vendor: str
    category: str
    value: Money
    potential_savings: Money


@dataclass(frozen=True)
class PortfolioSummary:
    total_contracts: int = 0
    total_value: Money = 0.0
    total_potential_savings: Money = 0.0
    total_risk_exposure: Money = 0.0
    top_savings_opportunities: list[SavingsOpportunity] = field(default_factory=list)
    vendor_consolidation_groups: list[ConsolidationGroup] = field(default_factory=list)
    category_optimizations: list[CategoryOptimization] = field(default_factory=list)
    competitive_bidding_savings: Money = 0.0
    auto_renewal_count: int = 0
    upcoming_renewals: int = 0
    high_value_contracts: int = 0
    unscheduled_contracts: int = 0
    target_reduction_pct: int = 0
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return camel_keys(asdict(self))


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def camel_keys(data):
    match data:
        case dict():
            return {_camel(k): camel_keys(v) for k, v in data.items()}
        case list() | tuple():
            return [camel_keys(v) for v in data]
        case date():
            return data.isoformat()
        case _:
            return data


# Applied to normalized contract frames before scoring
CONTRACT_SCHEMA = DataFrameSchema(
    columns={
        "id": Column(
            str,
            checks=[
                Check.str_length(min_value=1),
                Check(lambda s: s.is_unique, error="Duplicate contract ids found"),
            ],
            nullable=False,
        ),
        "vendor": Column(str, nullable=True),
        "category": Column(str, nullable=True),
        "value": Column(
            float,
            checks=Check.greater_than_or_equal_to(0),
            nullable=True,
        ),
        "end_date": Column("datetime64[ns]", nullable=True),
        "auto_renewal": Column(bool, nullable=False),
        "notice_period_days": Column(
            float,
            checks=Check.greater_than_or_equal_to(0),
            nullable=True,
        ),
    },
    coerce=True,
    strict=False,
)

# Schema for the scored output frame
SCORE_SCHEMA = DataFrameSchema(
    columns={
        "contract_id": Column(str, nullable=False),
        "potential_savings": Column(float, checks=Check.greater_than_or_equal_to(0), nullable=False),
        "risk_exposure": Column(float, checks=Check.greater_than_or_equal_to(0), nullable=False),
        "lead_time_days": Column(int, checks=Check.greater_than_or_equal_to(15), nullable=False),
        "risk_level": Column(
            str,
            checks=Check.isin([level.value for level in RiskLevel]),
            nullable=False,
        ),
    },
    strict=False,
)
