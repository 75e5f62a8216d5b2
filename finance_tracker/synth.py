"""Synthetic ledger generation for demos and tests.

The generator produces deterministic months of income and expense records for
the default categories: a salary near the 25th, occasional investment returns
and Poisson-distributed daily spending.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any
from uuid import UUID

import numpy as np
import pandas as pd

from .models import DEFAULT_CATEGORIES, Category

DEFAULT_MONTHS = 6
DEFAULT_SEED = 7


@dataclass(frozen=True)
class SpendProfile:
    """How often and how much a category is spent on in a month."""

    category: str
    descriptions: tuple[str, ...]
    amount_range: tuple[float, float]
    monthly_rate: float


SPEND_PROFILES = (
    SpendProfile("Food", ("Groceries", "Lunch", "Dinner out", "Coffee"), (1_500.0, 12_000.0), 14.0),
    SpendProfile("Transport", ("Ride share", "Fuel", "Bus fare"), (800.0, 9_000.0), 9.0),
    SpendProfile("Bills", ("Electricity", "Internet", "Water"), (5_000.0, 25_000.0), 3.0),
    SpendProfile("Shopping", ("Clothes", "Electronics", "Home goods"), (3_000.0, 40_000.0), 3.0),
    SpendProfile("Health", ("Pharmacy", "Clinic visit"), (2_000.0, 20_000.0), 1.0),
    SpendProfile("Entertainment", ("Cinema", "Streaming", "Concert"), (1_500.0, 15_000.0), 3.0),
    SpendProfile("Education", ("Online course", "Books"), (5_000.0, 30_000.0), 0.5),
    SpendProfile("Other", ("Gift", "Miscellaneous"), (1_000.0, 10_000.0), 1.5),
)

SALARY_RANGE = (350_000.0, 380_000.0)
INVESTMENT_RANGE = (10_000.0, 60_000.0)
INVESTMENT_PROBABILITY = 0.4


def _uuid4_from_rng(rng: np.random.Generator) -> str:
    raw = bytearray(rng.bytes(16))
    raw[6] = (raw[6] & 0x0F) | 0x40  # version 4
    raw[8] = (raw[8] & 0x3F) | 0x80  # variant 10
    return str(UUID(bytes=bytes(raw)))


def _business_day(candidate: date) -> date:
    """Roll weekend dates back to the previous Friday."""

    adjusted = candidate
    while adjusted.weekday() >= 5:
        adjusted -= timedelta(days=1)
    return adjusted


def generate_categories(seed: int | None = DEFAULT_SEED) -> list[Category]:
    """Default categories with ids derived from ``seed``."""

    rng = np.random.default_rng(seed)
    return [Category(id=_uuid4_from_rng(rng), **entry) for entry in DEFAULT_CATEGORIES]


def _build_transaction(
    *,
    category: Category,
    posted: date,
    amount: float,
    description: str,
    rng: np.random.Generator,
) -> dict[str, Any]:
    return {
        "id": _uuid4_from_rng(rng),
        "amount": round(float(amount), 2),
        "description": description,
        "date": pd.Timestamp(posted),
        "category_id": category.id,
        "type": category.type,
    }


def _generate_month(
    period: pd.Period,
    by_name: dict[str, Category],
    rng: np.random.Generator,
) -> list[dict[str, Any]]:
    month_start = period.start_time.date()
    days = period.days_in_month
    records: list[dict[str, Any]] = []

    records.append(
        _build_transaction(
            category=by_name["Salary"],
            posted=_business_day(month_start.replace(day=25)),
            amount=rng.uniform(*SALARY_RANGE),
            description="Monthly salary",
            rng=rng,
        )
    )

    if rng.random() < INVESTMENT_PROBABILITY:
        records.append(
            _build_transaction(
                category=by_name["Investment"],
                posted=month_start + timedelta(days=int(rng.integers(0, days))),
                amount=rng.uniform(*INVESTMENT_RANGE),
                description="Dividend payout",
                rng=rng,
            )
        )

    for profile in SPEND_PROFILES:
        count = int(rng.poisson(profile.monthly_rate))
        for _ in range(count):
            records.append(
                _build_transaction(
                    category=by_name[profile.category],
                    posted=month_start + timedelta(days=int(rng.integers(0, days))),
                    amount=rng.uniform(*profile.amount_range),
                    description=str(rng.choice(profile.descriptions)),
                    rng=rng,
                )
            )

    return records


def generate_transactions(
    categories: list[Category],
    *,
    end: date,
    months: int = DEFAULT_MONTHS,
    seed: int | None = DEFAULT_SEED,
) -> pd.DataFrame:
    """Generate ``months`` calendar months of records ending with ``end``'s month.

    Records dated after ``end`` are dropped, so the last month is partial.
    """

    if months <= 0:
        raise ValueError("months must be positive")

    by_name = {category.name: category for category in categories}
    missing = {"Salary", "Investment"} | {p.category for p in SPEND_PROFILES}
    missing -= by_name.keys()
    if missing:
        raise ValueError(f"Missing categories: {', '.join(sorted(missing))}")

    rng = np.random.default_rng(seed)
    last = pd.Timestamp(end).to_period("M")

    records: list[dict[str, Any]] = []
    for offset in range(months - 1, -1, -1):
        records.extend(_generate_month(last - offset, by_name, rng))

    df = pd.DataFrame(records)
    df = df.loc[df["date"] <= pd.Timestamp(end)]
    df = df.sort_values(["date", "id"]).reset_index(drop=True)
    return df[["id", "amount", "description", "date", "category_id", "type"]]


def generate_sample_data(
    *,
    end: date,
    months: int = DEFAULT_MONTHS,
    seed: int | None = DEFAULT_SEED,
) -> tuple[list[Category], pd.DataFrame]:
    """Return matching categories and transactions for quick visualisation or tests."""

    categories = generate_categories(seed)
    return categories, generate_transactions(categories, end=end, months=months, seed=seed)
