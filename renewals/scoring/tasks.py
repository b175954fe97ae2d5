"""Renewal milestone tasks derived from a contract's score."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import date, timedelta

from renewals.scoring.models import Contract, ScoreResult, camel_keys

PROPOSAL_WINDOW_DAYS = 90
DEFAULT_NOTICE_DAYS = 30


@dataclass(frozen=True)
class RenewalTask:
    id: str
    contract_id: str
    title: str
    description: str
    type: str
    priority: str
    due_date: date
    estimated_hours: int
    tags: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return camel_keys(asdict(self))


def generate_renewal_tasks(contract: Contract, result: ScoreResult, now: date) -> list[RenewalTask]:
    """Build the milestone checklist leading up to a contract's renewal.

    Contracts without an end date get no tasks.
    """
    if result.optimal_renewal_date is None or contract.end_date is None:
        return []

    vendor = contract.vendor or "the vendor"
    end_date = contract.end_date
    tasks = []

    if result.days_until_expiry is not None and result.days_until_expiry <= PROPOSAL_WINDOW_DAYS:
        tasks.append(RenewalTask(
            id=f"renewal-proposal-{contract.id}",
            contract_id=str(contract.id),
            title="Draft Comprehensive Renewal Proposal",
            description=(
                f"Create detailed renewal proposal for {vendor} including market analysis, "
                "cost comparison, and negotiation strategy"
            ),
            type="renewal",
            priority="high",
            due_date=now + timedelta(days=60),
            estimated_hours=8,
            tags=("renewal", "proposal", "negotiation"),
            dependencies=("market-research", "cost-analysis"),
        ))

    tasks.append(RenewalTask(
        id=f"market-research-{contract.id}",
        contract_id=str(contract.id),
        title="Conduct Market Research",
        description=f"Research current market rates and alternative vendors for {result.category} services",
        type="research",
        priority="high",
        due_date=result.optimal_renewal_date - timedelta(days=30),
        estimated_hours=4,
        tags=("research", "market-analysis", "benchmarking"),
    ))

    if contract.auto_renewal:
        notice = contract.notice_period_days or DEFAULT_NOTICE_DAYS
        tasks.append(RenewalTask(
            id=f"compliance-notice-{contract.id}",
            contract_id=str(contract.id),
            title="Send Termination Notice",
            description=f"Send formal termination notice to {vendor} within required timeframe",
            type="compliance",
            priority="critical",
            due_date=end_date - timedelta(days=notice),
            estimated_hours=2,
            tags=("compliance", "legal", "notice"),
        ))

    tasks.append(RenewalTask(
        id=f"audit-prep-{contract.id}",
        contract_id=str(contract.id),
        title="Prepare Audit Documentation",
        description=f"Collect and organize all documentation for {vendor} contract audit",
        type="audit",
        priority="medium",
        due_date=end_date - timedelta(days=30),
        estimated_hours=3,
        tags=("audit", "documentation", "compliance"),
    ))

    return tasks


def summarize_tasks(tasks: list[RenewalTask], now: date) -> dict[str, int | dict[str, int]]:
    """Count tasks by priority and type and total their estimated hours."""
    return {
        "total_tasks": len(tasks),
        "overdue_tasks": sum(1 for t in tasks if t.due_date < now),
        "by_priority": dict(Counter(t.priority for t in tasks)),
        "by_type": dict(Counter(t.type for t in tasks)),
        "estimated_total_hours": sum(t.estimated_hours for t in tasks),
    }


def plan_renewal_tasks(
    contracts: Sequence[Contract],
    results: Sequence[ScoreResult],
    now: date,
) -> list[RenewalTask]:
    """Generate tasks for every scored contract, in input order."""
    return [
        task
        for contract, result in zip(contracts, results)
        for task in generate_renewal_tasks(contract, result, now)
    ]
