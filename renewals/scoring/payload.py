"""Request/response shape for scoring a batch of contracts.

Mirrors the dashboard's ``POST /score`` body::

    {"contracts": [...], "now": "2025-01-31"}
        ->  {"results": [...], "summary": {...}, "taskSummary": {...}}

Each result also carries the renewal ``tasks`` generated for it.

Structural problems raise :class:`InvalidInput`; callers map that to a 400.
"""

from datetime import date

from renewals.config import ScoringPolicy
from renewals.errors import InvalidInput
from renewals.scoring.models import camel_keys
from renewals.scoring.portfolio import summarize
from renewals.scoring.scorer import score_contracts
from renewals.scoring.tasks import generate_renewal_tasks, summarize_tasks
from renewals.scoring.transform import to_contract
from renewals.utils.transforms import parse_date


def parse_now(raw, today: date) -> date:
    """Resolve the request's ``now``; absent means ``today``."""
    match raw:
        case None:
            return today
        case date():
            return raw
        case str() if raw.strip():
            parsed = parse_date(raw)
            if parsed is not None:
                return parsed

    raise InvalidInput(f"'now' must be an ISO date, got {raw!r}", field="now")


def score_request(
    body: dict,
    today: date,
    policy: ScoringPolicy = ScoringPolicy(),
    top_n: int | None = None,
) -> dict:
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be an object")

    records = body.get("contracts")
    if not isinstance(records, list):
        raise InvalidInput("'contracts' must be a list", field="contracts")

    now = parse_now(body.get("now"), today)
    contracts = [to_contract(record) for record in records]
    results = score_contracts(contracts, now, policy)
    summary = summarize(contracts, results, policy, top_n)

    response_results = []
    all_tasks = []
    for contract, result in zip(contracts, results):
        tasks = generate_renewal_tasks(contract, result, now)
        all_tasks.extend(tasks)
        response_results.append({**result.to_dict(), "tasks": [t.to_dict() for t in tasks]})

    return {
        "results": response_results,
        "summary": summary.to_dict(),
        "taskSummary": camel_keys(summarize_tasks(all_tasks, now)),
    }
