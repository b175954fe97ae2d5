"""Contract renewal scoring — savings, risk exposure, renewal timing and portfolio rollups."""

import logging
from datetime import date
from pathlib import Path

from renewals.config import ScoringPolicy
from renewals.errors import InvalidInput
from renewals.scoring.ingest import load_contract_frame
from renewals.scoring.transform import contracts_to_frame, normalize_contract_records
from renewals.scoring.scorer import score, score_contracts, results_to_frame
from renewals.scoring.portfolio import aggregate, summarize
from renewals.scoring.payload import parse_now
from renewals.scoring.tasks import generate_renewal_tasks, plan_renewal_tasks, summarize_tasks
from renewals.scoring.models import CONTRACT_SCHEMA, SCORE_SCHEMA
from renewals.utils.validators import validate_dataframe

logger = logging.getLogger(__name__)


def validate(path: str | Path) -> dict:
    """Validate that a contract source is readable and well-formed."""
    try:
        raw, _ = load_contract_frame(path, validate_only=True)
        contracts = normalize_contract_records(raw)
        result = validate_dataframe(contracts_to_frame(contracts), CONTRACT_SCHEMA)

        match result:
            case {"valid": True}:
                return {"status": "ok", "row_count": len(contracts)}
            case {"valid": False, "errors": errs}:
                return {"status": "error", "message": "; ".join(errs[:5])}
    except InvalidInput as exc:
        return {"status": "error", "message": f"Record {exc.record_id or '?'}: {exc}"}
    except (FileNotFoundError, ValueError) as exc:
        return {"status": "error", "message": str(exc)}


def run(
    path: str | Path,
    today: date,
    policy: ScoringPolicy = ScoringPolicy(),
    top_n: int | None = None,
    now: date | None = None,
    strict: bool = True,
) -> dict:
    """Score every contract in ``path`` and build the portfolio summary.

    ``now`` wins over a date embedded in a JSON request body, which wins
    over ``today``.  With ``strict`` off, a scored frame that fails
    ``SCORE_SCHEMA`` is logged instead of raising.
    """
    raw, embedded_now = load_contract_frame(path)
    as_of = now or parse_now(embedded_now, today)

    contracts = normalize_contract_records(raw)
    results = score_contracts(contracts, as_of, policy)
    scored = results_to_frame(results)

    if not scored.empty:
        check = validate_dataframe(scored, SCORE_SCHEMA)
        if not check["valid"]:
            errors = "; ".join(check["errors"][:5])
            if strict:
                raise RuntimeError(f"Scored output failed validation: {errors}")
            logger.warning("Scored output failed validation: %s", errors)

    tasks = plan_renewal_tasks(contracts, results, as_of)

    return {
        "as_of": as_of,
        "contracts": contracts,
        "results": results,
        "scored": scored,
        "summary": summarize(contracts, results, policy, top_n),
        "tasks": tasks,
        "task_summary": summarize_tasks(tasks, as_of),
    }
