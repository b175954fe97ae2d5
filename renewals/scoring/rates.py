"""Baseline savings and risk rates per contract category."""

import logging
from dataclasses import dataclass

from renewals.scoring.models import Volatility

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryRates:
    savings_rate: float
    risk_rate: float
    volatility: Volatility
    competition_factor: float
    lead_adjustment_days: int
    # Category risk wins over the auto-renewal bump
    overrides_auto_renewal: bool = False


CATEGORY_RATES: dict[str, CategoryRates] = {
    "Software": CategoryRates(0.18, 0.05, Volatility.HIGH, 1.3, 20),
    "Services": CategoryRates(0.12, 0.05, Volatility.MEDIUM, 1.2, 10),
    "Marketing": CategoryRates(0.25, 0.20, Volatility.HIGH, 1.4, -10, overrides_auto_renewal=True),
    "Hardware": CategoryRates(0.15, 0.05, Volatility.MEDIUM, 1.1, 15),
    "Consulting": CategoryRates(0.20, 0.05, Volatility.MEDIUM, 1.1, 0),
    "Other": CategoryRates(0.10, 0.05, Volatility.MEDIUM, 1.0, 0),
}

_LOOKUP = {name.lower(): name for name in CATEGORY_RATES}


def canonical_category(category: str | None) -> str | None:
    """Return the table key for ``category``, or None when it is not recognized.

    Matching ignores case and surrounding whitespace.
    """
    if not category:
        return None
    return _LOOKUP.get(category.strip().lower())


def resolve_category(category: str | None) -> str:
    """Map a raw category to a table key, falling back to ``Other``."""
    canonical = canonical_category(category)
    if canonical is not None:
        return canonical
    if category and category.strip():
        logger.warning("Unrecognized contract category %r, using %s rates", category, DEFAULT_CATEGORY)
    return DEFAULT_CATEGORY


def rates_for(category: str | None) -> CategoryRates:
    return CATEGORY_RATES[canonical_category(category) or DEFAULT_CATEGORY]


def base_savings_rate(category: str | None) -> float:
    return rates_for(category).savings_rate


def base_risk_rate(category: str | None) -> float:
    return rates_for(category).risk_rate
