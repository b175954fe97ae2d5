"""Renewal timing outlook: what starting early is worth in negotiation terms."""

from renewals.scoring.models import Contract, TimingOutlook
from renewals.scoring.rates import rates_for


def _timing_savings_pct(days_early: int) -> float:
    match days_early:
        case d if d >= 120:
            return 0.25
        case d if d >= 90:
            return 0.20
        case d if d >= 60:
            return 0.15
        case d if d >= 30:
            return 0.10
        case _:
            return 0.05


def complexity_factor(value: float) -> float:
    """Larger contracts take more effort to renegotiate, and yield more when they do."""
    match value:
        case v if v > 100_000:
            return 1.5
        case v if v > 50_000:
            return 1.2
        case v if v < 5_000:
            return 0.8
        case _:
            return 1.0


def risk_reduction(days_early: int) -> str:
    match days_early:
        case d if d >= 90:
            return "High"
        case d if d >= 60:
            return "Medium-High"
        case d if d >= 30:
            return "Medium"
        case _:
            return "Low"


def market_leverage(days_early: int) -> str:
    match days_early:
        case d if d >= 90:
            return "Maximum"
        case d if d >= 60:
            return "High"
        case d if d >= 30:
            return "Moderate"
        case _:
            return "Limited"


def negotiation_power(days_early: int, value: float) -> float:
    power = 0.7
    if days_early >= 90:
        power += 0.2
    elif days_early >= 60:
        power += 0.1

    if value > 100_000:
        power += 0.1
    elif value > 50_000:
        power += 0.05

    return round(min(power, 1.0), 2)


def timing_outlook(contract: Contract, days_early: int) -> TimingOutlook:
    """Estimate the savings unlocked by starting renewal ``days_early`` days ahead."""
    complexity = complexity_factor(contract.value)
    competition = rates_for(contract.category).competition_factor
    pct = _timing_savings_pct(days_early) * complexity * competition

    return TimingOutlook(
        savings_pct=round(pct * 100, 2),
        estimated_savings=round(contract.value * pct, 2),
        complexity_factor=complexity,
        competition_factor=competition,
        risk_reduction=risk_reduction(days_early),
        market_leverage=market_leverage(days_early),
        negotiation_power=negotiation_power(days_early, contract.value),
    )
