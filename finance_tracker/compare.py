"""Period-over-period comparison helpers."""

from __future__ import annotations

from typing import Any, Iterable, TypedDict

import pandas as pd

from . import aggregate


class MetricComparison(TypedDict):
    value: float
    previous: float
    change: float


class SummaryComparison(TypedDict):
    income: MetricComparison
    expense: MetricComparison
    balance: MetricComparison


def percent_change(current: float, previous: float | None) -> float:
    """Percentage change from ``previous`` to ``current``.

    A zero or missing baseline yields ``0.0``. The denominator is taken as an
    absolute value, so a rise from a negative balance reads as an increase.
    The result is not rounded.
    """

    if previous is None or pd.isna(previous) or previous == 0:
        return 0.0
    return (current - previous) * 100.0 / abs(previous)


def _metric(value: float, previous: float) -> MetricComparison:
    return {
        "value": value,
        "previous": previous,
        "change": percent_change(value, previous),
    }


def compare_totals(
    current: Iterable[Any] | pd.DataFrame,
    previous: Iterable[Any] | pd.DataFrame,
) -> SummaryComparison:
    """Income, expense and balance for both periods with their changes."""

    now = aggregate.summarize_totals(current)
    before = aggregate.summarize_totals(previous)
    return {
        "income": _metric(now["income"], before["income"]),
        "expense": _metric(now["expense"], before["expense"]),
        "balance": _metric(now["balance"], before["balance"]),
    }
