"""Shared fixtures for renewal scoring tests."""

from datetime import date, timedelta

import pytest

from renewals.scoring.models import Contract

NOW = date(2026, 1, 15)


@pytest.fixture
def now() -> date:
    return NOW


@pytest.fixture
def make_contract():
    """Build a Contract ending ``days`` after NOW (None for no end date)."""

    def _make(
        id: str = "c-1",
        vendor: str = "Acme",
        category: str | None = "Other",
        value: float = 0.0,
        days: int | None = 120,
        auto_renewal: bool = False,
        notice_period_days: int | None = None,
    ) -> Contract:
        return Contract(
            id=id,
            vendor=vendor,
            category=category,
            value=value,
            end_date=NOW + timedelta(days=days) if days is not None else None,
            auto_renewal=auto_renewal,
            notice_period_days=notice_period_days,
        )

    return _make
