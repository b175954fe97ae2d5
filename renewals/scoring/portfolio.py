"""Portfolio aggregation — totals, top savings opportunities and consolidation groups."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import date

from renewals.config import ScoringPolicy
from renewals.errors import InvalidInput
from renewals.scoring.models import (
    CategoryOptimization,
    ConsolidationGroup,
    Contract,
    PortfolioSummary,
    SavingsOpportunity,
    ScoreResult,
)
from renewals.scoring.scorer import score_contracts

logger = logging.getLogger(__name__)

UNKNOWN_VENDOR = "Unknown Vendor"


def _top_opportunities(
    contracts: Sequence[Contract],
    results: Sequence[ScoreResult],
    top_n: int,
) -> list[SavingsOpportunity]:
    # sorted() is stable, so equal savings keep input order
    ranked = sorted(zip(contracts, results), key=lambda pair: pair[1].potential_savings, reverse=True)
    return [
        SavingsOpportunity(
            contract_id=result.contract_id,
            vendor=contract.vendor or UNKNOWN_VENDOR,
            category=result.category,
            value=contract.value,
            potential_savings=result.potential_savings,
        )
        for contract, result in ranked[:top_n]
    ]


def _consolidation_groups(
    contracts: Sequence[Contract],
    policy: ScoringPolicy,
) -> list[ConsolidationGroup]:
    """Group contracts by vendor; only vendors with two or more contracts qualify."""
    by_vendor: dict[str, list[Contract]] = defaultdict(list)
    for contract in contracts:
        by_vendor[contract.vendor or UNKNOWN_VENDOR].append(contract)

    groups = []
    for vendor, members in by_vendor.items():
        if len(members) < 2:
            continue
        total = sum(c.value for c in members)
        groups.append(ConsolidationGroup(
            vendor=vendor,
            contract_count=len(members),
            total_value=round(total, 2),
            consolidation_savings=round(total * policy.consolidation_rate, 2),
            contract_ids=tuple(str(c.id) for c in members),
        ))

    return sorted(groups, key=lambda g: g.consolidation_savings, reverse=True)


def _category_optimizations(
    results: Sequence[ScoreResult],
    contracts: Sequence[Contract],
    policy: ScoringPolicy,
) -> list[CategoryOptimization]:
    by_category: dict[str, list[Contract]] = defaultdict(list)
    for contract, result in zip(contracts, results):
        by_category[result.category].append(contract)

    optimizations = []
    for category, members in by_category.items():
        total = sum(c.value for c in members)
        if len(members) > 1 and total > policy.category_optimization_min_value:
            optimizations.append(CategoryOptimization(
                category=category,
                contract_count=len(members),
                total_value=round(total, 2),
                optimization_savings=round(total * policy.category_optimization_rate, 2),
            ))
    return optimizations


def _competitive_bidding_savings(contracts: Sequence[Contract], policy: ScoringPolicy) -> float:
    candidates = sorted(
        (c.value for c in contracts if c.value > policy.competitive_bidding_min_value),
        reverse=True,
    )
    top = candidates[:policy.competitive_bidding_count]
    return round(sum(top) * policy.competitive_bidding_rate, 2)


def _recommendations(
    contracts: Sequence[Contract],
    groups: list[ConsolidationGroup],
    auto_renewal_count: int,
    policy: ScoringPolicy,
) -> list[str]:
    recommendations = []
    if groups:
        recommendations.append(f"Consolidate {len(groups)} vendor groups within 60 days")

    bidding = sum(1 for c in contracts if c.value > policy.competitive_bidding_min_value)
    if bidding:
        count = min(policy.competitive_bidding_count, bidding)
        recommendations.append(f"Launch RFP process for {count} high-value contracts")

    if auto_renewal_count:
        recommendations.append(f"Review auto-renewal terms for {auto_renewal_count} contracts")

    marketing = sum(1 for c in contracts if c.value and _is_marketing(c))
    if marketing:
        recommendations.append(f"Negotiate better terms for {marketing} marketing contracts")

    if not recommendations:
        recommendations.append("Monitor contract performance and market rates")
    return recommendations


def _is_marketing(contract: Contract) -> bool:
    return (contract.category or "").strip().lower() == "marketing"


def summarize(
    contracts: Sequence[Contract],
    results: Sequence[ScoreResult],
    policy: ScoringPolicy = ScoringPolicy(),
    top_n: int | None = None,
) -> PortfolioSummary:
    """Build a portfolio summary from contracts and their already-computed scores."""
    if len(contracts) != len(results):
        raise ValueError("contracts and results must be the same length")

    top_n = policy.top_n if top_n is None else top_n
    if top_n < 0:
        raise InvalidInput(f"top_n must be non-negative, got {top_n}", field="top_n")
    if not contracts:
        return PortfolioSummary()

    total_value = sum(c.value for c in contracts)
    total_savings = sum(r.potential_savings for r in results)
    groups = _consolidation_groups(contracts, policy)
    auto_renewal_count = sum(1 for c in contracts if c.auto_renewal)
    upcoming = sum(
        1 for r in results
        if r.days_until_expiry is not None and 0 <= r.days_until_expiry <= policy.upcoming_window_days
    )

    summary = PortfolioSummary(
        total_contracts=len(contracts),
        total_value=round(total_value, 2),
        total_potential_savings=round(total_savings, 2),
        total_risk_exposure=round(sum(r.risk_exposure for r in results), 2),
        top_savings_opportunities=_top_opportunities(contracts, results, top_n),
        vendor_consolidation_groups=groups,
        category_optimizations=_category_optimizations(results, contracts, policy),
        competitive_bidding_savings=_competitive_bidding_savings(contracts, policy),
        auto_renewal_count=auto_renewal_count,
        upcoming_renewals=upcoming,
        high_value_contracts=sum(1 for c in contracts if c.value > policy.high_value_threshold),
        unscheduled_contracts=sum(1 for r in results if not r.schedulable),
        target_reduction_pct=round(total_savings / total_value * 100) if total_value > 0 else 0,
        recommendations=_recommendations(contracts, groups, auto_renewal_count, policy),
    )

    logger.info(
        "Portfolio of %d contracts: $%.2f potential savings, %d consolidation groups",
        summary.total_contracts,
        summary.total_potential_savings,
        len(groups),
    )
    return summary


def aggregate(
    contracts: Sequence[Contract],
    now: date,
    policy: ScoringPolicy = ScoringPolicy(),
    top_n: int | None = None,
) -> PortfolioSummary:
    """Score every contract and roll the results up into a portfolio summary."""
    contracts = list(contracts)
    results = score_contracts(contracts, now, policy)
    return summarize(contracts, results, policy, top_n)
