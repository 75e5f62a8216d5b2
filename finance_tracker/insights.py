"""Spending insights and the dashboard payload for Finance Tracker."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, TypedDict

import pandas as pd

from . import aggregate, compare, periods, utils

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 3
INCREASE_THRESHOLD = 10.0

# (change above threshold, otherwise); names match case-sensitively.
SUGGESTIONS: dict[str, tuple[str, str]] = {
    "Food": (
        "Consider meal prepping on weekends to reduce dining out expenses.",
        "Try cooking at home 3 nights a week to save on dining expenses.",
    ),
    "Shopping": (
        "Your shopping expenses have increased. Consider creating a shopping list and sticking to it.",
        "Wait 24 hours before making non-essential purchases to avoid impulse buying.",
    ),
    "Transport": (
        "Your transport costs are rising. Consider carpooling or public transit when possible.",
        "Plan your trips efficiently to save on fuel costs.",
    ),
    "Entertainment": (
        "Look for free or low-cost entertainment options in your area to reduce spending.",
        "Consider sharing subscription services with family or friends to split costs.",
    ),
}


class Insight(TypedDict):
    category: str
    amount: float
    change: float
    suggestion: str


class RangePayload(TypedDict):
    start: str | None
    end: str | None


class DashboardPayload(TypedDict):
    range: RangePayload
    previous_range: RangePayload | None
    transaction_count: int
    summary: compare.SummaryComparison
    category_totals: list[aggregate.CategoryTotal]
    distribution: list[aggregate.CategoryTotal]
    monthly: list[aggregate.MonthlyCategoryTotal]
    trend: list[aggregate.TrendPoint]
    insights: list[Insight]


def suggest(category: str, change: float) -> str:
    """Pick the suggestion text for a category and its percentage change."""

    rising = change > INCREASE_THRESHOLD
    if category in SUGGESTIONS:
        when_rising, otherwise = SUGGESTIONS[category]
        return when_rising if rising else otherwise

    label = category.lower()
    if rising:
        return (
            f"Your {label} spending has increased by {utils.round_half_up(change)}% "
            "from last month. Consider setting a budget for this category."
        )
    return f"Try to reduce {label} expenses by finding cost-effective alternatives."


def describe_change(change: float) -> str | None:
    if change == 0:
        return None
    pct = abs(utils.round_half_up(change))
    if change > 0:
        return f"↑ {pct}% increase from last period"
    return f"↓ {pct}% decrease from last period"


def _expenses(transactions: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
    df = utils.ensure_transactions(transactions)
    return df.loc[df["type"] == "expense"]


def generate_insights(
    current: Iterable[Any] | pd.DataFrame,
    previous: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
    *,
    limit: int = MAX_INSIGHTS,
) -> list[Insight]:
    """Rank the top expense categories of ``current`` and attach suggestions.

    Previous-period amounts are matched by category id, so two categories
    sharing a display name are compared separately. An empty result means
    there is not enough data yet.
    """

    cats = utils.ensure_categories(categories)
    ranked = aggregate.group_by_category(_expenses(current), cats)
    previous_totals = {
        entry["category_id"]: entry["total"]
        for entry in aggregate.group_by_category(_expenses(previous), cats)
    }

    results: list[Insight] = []
    for entry in ranked[:limit]:
        change = compare.percent_change(
            entry["total"], previous_totals.get(entry["category_id"], 0.0)
        )
        results.append(
            {
                "category": entry["name"],
                "amount": entry["total"],
                "change": change,
                "suggestion": suggest(entry["name"], change),
            }
        )
    return results


def _range_payload(date_range: periods.DateRange | None) -> RangePayload | None:
    if date_range is None:
        return None
    return {
        "start": date_range.start.isoformat() if date_range.start else None,
        "end": date_range.end.isoformat() if date_range.end else None,
    }


def build_dashboard(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
    date_range: periods.DateRange,
    *,
    reference: date | None = None,
) -> DashboardPayload:
    """Compute structured outputs ready for the summary cards, charts and panel.

    ``reference`` anchors the expense trend; it defaults to the range end,
    then the range start, then the latest transaction date.
    """

    df = utils.ensure_transactions(transactions)
    cats = utils.ensure_categories(categories)
    split = periods.filter_by_range(df, date_range)
    current, previous = split["current"], split["previous"]
    logger.debug(
        "Dashboard for %s: %d current, %d previous transactions",
        date_range,
        len(current),
        len(previous),
    )

    anchor = reference or date_range.end or date_range.start
    if anchor is None:
        anchor = df["date"].max().date() if not df.empty else None

    payload: DashboardPayload = {
        "range": _range_payload(date_range),
        "previous_range": _range_payload(periods.previous_range(date_range)),
        "transaction_count": int(len(current)),
        "summary": compare.compare_totals(current, previous),
        "category_totals": aggregate.group_by_category(_expenses(current), cats),
        "distribution": aggregate.expense_distribution(current, cats),
        "monthly": aggregate.monthly_category_totals(current, cats),
        "trend": aggregate.expense_trend(df, anchor) if anchor is not None else [],
        "insights": generate_insights(current, previous, cats),
    }
    return payload
