"""Per-contract renewal economics: savings, risk exposure and optimal renewal date."""

import logging
import math
import numbers
from collections.abc import Iterable
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd

from renewals.config import ScoringPolicy
from renewals.errors import InvalidInput
from renewals.scoring import guidance
from renewals.scoring.models import Contract, ScoreResult
from renewals.scoring.modifiers import (
    effective_risk_rate,
    lead_time_days,
    risk_level_for_lead_time,
    urgency_multiplier,
    value_multiplier,
)
from renewals.scoring.rates import DEFAULT_CATEGORY, canonical_category, rates_for, resolve_category
from renewals.scoring.timing import timing_outlook

logger = logging.getLogger(__name__)

_VALUE_TIERS = {1.3: "$100k+", 1.2: "$50k+", 1.1: "$10k+", 1.0: "base"}


def _as_date(now: date) -> date:
    return now.date() if isinstance(now, datetime) else now


def _check_contract(contract: Contract) -> None:
    if contract.id is None or not str(contract.id).strip():
        raise InvalidInput("Contract is missing an id", field="id")

    value = contract.value
    numeric = isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))
    if not numeric or not math.isfinite(value):
        raise InvalidInput(
            f"Contract value must be a finite number, got {value!r}",
            field="value",
            record_id=str(contract.id),
        )
    if value < 0:
        raise InvalidInput(
            f"Contract value must be non-negative, got {value}",
            field="value",
            record_id=str(contract.id),
        )


def _reasoning(
    contract: Contract,
    category: str,
    multiplier: float,
    risk_rate: float,
    lead_days: int,
) -> list[str]:
    rates = rates_for(category)
    reasons = []

    if contract.category and canonical_category(contract.category) is None:
        reasons.append(
            f"Unrecognized category '{contract.category}'; {DEFAULT_CATEGORY} rates applied"
        )
    reasons.append(f"{category} contracts carry a {rates.savings_rate:.0%} baseline savings rate")

    if not contract.value:
        reasons.append("No contract value recorded; savings and risk exposure are zero")
    else:
        reasons.append(
            f"Value ${contract.value:,.0f} is in the {_VALUE_TIERS[multiplier]} tier "
            f"({multiplier}x savings multiplier)"
        )
        if contract.value > 100_000:
            reasons.append("High-value contract requires extensive market research and competitive bidding")
        elif contract.value > 50_000:
            reasons.append("Significant investment warrants thorough vendor evaluation")

    if rates.overrides_auto_renewal:
        reasons.append(f"{category} risk rate of {risk_rate:.0%} applies regardless of auto-renewal")
    elif contract.auto_renewal:
        reasons.append(
            f"Auto-renewal clause requires early termination notice ({risk_rate:.0%} risk rate)"
        )

    if contract.notice_period_days and contract.notice_period_days > 30:
        reasons.append(
            f"{contract.notice_period_days}-day notice period adds "
            f"{contract.notice_period_days - 30} days of lead time"
        )

    reasons.append(f"Start renewal work {lead_days} days before expiry")
    if lead_days >= 90:
        reasons.append("Extended timeline enables comprehensive RFP process and vendor negotiations")
    elif lead_days >= 60:
        reasons.append("Adequate time for market analysis and competitive proposals")

    return reasons


def score(contract: Contract, now: date, policy: ScoringPolicy = ScoringPolicy()) -> ScoreResult:
    """Score a single contract as of ``now``.

    A missing end date is not an error: the result has no optimal renewal
    date and its reasoning says why.
    """
    _check_contract(contract)
    now = _as_date(now)

    category = resolve_category(contract.category)
    value = float(contract.value)
    multiplier = value_multiplier(value)
    savings_rate = rates_for(category).savings_rate
    risk_rate = effective_risk_rate(category, contract.auto_renewal)
    lead_days = lead_time_days(contract, policy)

    potential_savings = round(value * savings_rate * multiplier, 2)
    risk_exposure = round(value * risk_rate, 2)
    reasoning = _reasoning(contract, category, multiplier, risk_rate, lead_days)

    optimal_date = None
    days_before = None
    days_until = None
    timing = None

    if contract.end_date is None:
        reasoning.append("No valid end date; renewal cannot be scheduled")
    else:
        optimal_date = contract.end_date - timedelta(days=lead_days)
        days_before = (contract.end_date - optimal_date).days
        days_until = (contract.end_date - now).days
        timing = timing_outlook(contract, days_before)
        if optimal_date < now:
            reasoning.append("Recommended start date has already passed; act immediately")

    return ScoreResult(
        contract_id=str(contract.id),
        category=category,
        potential_savings=potential_savings,
        risk_exposure=risk_exposure,
        savings_rate=round(savings_rate * multiplier, 4),
        risk_rate=risk_rate,
        lead_time_days=lead_days,
        risk_level=risk_level_for_lead_time(lead_days),
        market_volatility=rates_for(category).volatility,
        optimal_renewal_date=optimal_date,
        days_before_expiry=days_before,
        days_until_expiry=days_until,
        urgency_adjusted_savings=round(potential_savings * urgency_multiplier(days_until), 2),
        timing=timing,
        reasoning=reasoning,
        risk_factors=guidance.risk_factors(contract),
        mitigation_actions=guidance.mitigation_actions(contract),
        savings_actions=guidance.savings_actions(contract),
    )


def score_contracts(
    contracts: Iterable[Contract],
    now: date,
    policy: ScoringPolicy = ScoringPolicy(),
) -> list[ScoreResult]:
    results = [score(contract, now, policy) for contract in contracts]
    unscheduled = sum(1 for r in results if not r.schedulable)
    if unscheduled:
        logger.info("%d of %d contracts have no end date and cannot be scheduled", unscheduled, len(results))
    return results


def results_to_frame(results: list[ScoreResult]) -> pd.DataFrame:
    """Flatten score results into one row per contract for export."""
    rows = [
        {
            "contract_id": r.contract_id,
            "category": r.category,
            "potential_savings": r.potential_savings,
            "risk_exposure": r.risk_exposure,
            "urgency_adjusted_savings": r.urgency_adjusted_savings,
            "lead_time_days": r.lead_time_days,
            "optimal_renewal_date": r.optimal_renewal_date,
            "days_until_expiry": r.days_until_expiry,
            "risk_level": str(r.risk_level),
            "market_volatility": str(r.market_volatility),
            "timing_savings": r.timing.estimated_savings if r.timing else None,
            "reasoning": "; ".join(r.reasoning),
        }
        for r in results
    ]
    columns = [
        "contract_id", "category", "potential_savings", "risk_exposure",
        "urgency_adjusted_savings", "lead_time_days", "optimal_renewal_date",
        "days_until_expiry", "risk_level", "market_volatility", "timing_savings", "reasoning",
    ]
    return pd.DataFrame(rows, columns=columns)
