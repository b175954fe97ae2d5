"""Value, urgency, auto-renewal and lead-time modifiers applied on top of category rates."""

from renewals.config import ScoringPolicy
from renewals.errors import InvalidInput
from renewals.scoring.models import Contract, RiskLevel
from renewals.scoring.rates import rates_for

AUTO_RENEWAL_RISK_RATE = 0.15


def value_multiplier(value: float) -> float:
    """Savings multiplier for the contract's value tier.

    Tiers are exclusive: a $120k contract gets 1.3, not 1.3 x 1.2.
    """
    if value < 0:
        raise InvalidInput(f"Contract value must be non-negative, got {value}", field="value")

    match value:
        case v if v >= 100_000:
            return 1.3
        case v if v >= 50_000:
            return 1.2
        case v if v >= 10_000:
            return 1.1
        case _:
            return 1.0


def urgency_multiplier(days_until_expiry: int | None) -> float:
    """Savings multiplier for how close the contract is to expiry.

    Already-expired contracts (negative days) fall in the most urgent tier.
    """
    match days_until_expiry:
        case None:
            return 1.0
        case d if d <= 30:
            return 1.3
        case d if d <= 60:
            return 1.2
        case d if d <= 90:
            return 1.1
        case _:
            return 1.0


def effective_risk_rate(category: str | None, auto_renewal: bool) -> float:
    """Risk rate after applying category override > auto-renewal bump > baseline."""
    rates = rates_for(category)
    if rates.overrides_auto_renewal:
        return rates.risk_rate
    if auto_renewal:
        return AUTO_RENEWAL_RISK_RATE
    return rates.risk_rate


def _value_lead_adjustment(value: float) -> int:
    match value:
        case v if v >= 100_000:
            return 45
        case v if v >= 50_000:
            return 30
        case v if v >= 10_000:
            return 15
        case v if v < 5_000:
            return -15
        case _:
            return 0


def lead_time_days(contract: Contract, policy: ScoringPolicy = ScoringPolicy()) -> int:
    """Days before the end date at which renewal work should start."""
    days = (
        policy.base_lead_days
        + _value_lead_adjustment(contract.value)
        + rates_for(contract.category).lead_adjustment_days
    )
    if contract.auto_renewal:
        days -= 20
    if contract.notice_period_days:
        days += max(0, contract.notice_period_days - 30)

    return max(policy.min_lead_days, days)


def risk_level_for_lead_time(lead_days: int) -> RiskLevel:
    """Longer lead time leaves more room to act, so it maps to a lower risk label."""
    match lead_days:
        case d if d >= 90:
            return RiskLevel.LOW
        case d if d >= 60:
            return RiskLevel.MEDIUM
        case _:
            return RiskLevel.HIGH
