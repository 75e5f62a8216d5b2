"""Totals and category breakdowns for transaction collections."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, TypedDict

import pandas as pd

from . import utils
from .models import TransactionType

UNKNOWN_CATEGORY = "Unknown"
UNKNOWN_COLOR = "#888888"


class Totals(TypedDict):
    income: float
    expense: float
    balance: float


class CategoryTotal(TypedDict):
    category_id: Any
    name: str
    color: str
    total: float


class MonthlyCategoryTotal(TypedDict):
    month: str
    category: str
    color: str
    total: float


class TrendPoint(TypedDict):
    month: str
    label: str
    total: float


def total(transactions: Iterable[Any] | pd.DataFrame, kind: TransactionType) -> float:
    """Sum of amounts for transactions of the given type."""

    df = utils.ensure_transactions(transactions)
    return float(df.loc[df["type"] == kind, "amount"].sum())


def summarize_totals(transactions: Iterable[Any] | pd.DataFrame) -> Totals:
    df = utils.ensure_transactions(transactions)
    income = total(df, "income")
    expense = total(df, "expense")
    return {"income": income, "expense": expense, "balance": income - expense}


def _category_lookup(categories: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
    cats = utils.ensure_categories(categories)
    return cats.drop_duplicates(subset="id", keep="first").set_index("id")


def _expenses(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[df["type"] == "expense"]


def group_by_category(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
) -> list[CategoryTotal]:
    """Sum amounts per category, largest first.

    Transactions whose category cannot be resolved are left out. Ties keep
    the order in which categories first appear.
    """

    df = utils.ensure_transactions(transactions)
    lookup = _category_lookup(categories)
    known = df.loc[df["category_id"].isin(lookup.index)]
    if known.empty:
        return []

    totals = (
        known.groupby("category_id", sort=False)["amount"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    return [
        {
            "category_id": category_id,
            "name": str(lookup.at[category_id, "name"]),
            "color": _color(lookup.at[category_id, "color"]),
            "total": float(value),
        }
        for category_id, value in totals.items()
    ]


def _color(value: Any) -> str:
    return value if isinstance(value, str) and value else UNKNOWN_COLOR


def _resolve_names(df: pd.DataFrame, lookup: pd.DataFrame) -> pd.DataFrame:
    known = df["category_id"].isin(lookup.index)
    df = df.copy()
    df["slice"] = df["category_id"].astype(object).where(known, None)
    df["name"] = df["category_id"].map(lookup["name"]).where(known, UNKNOWN_CATEGORY)
    df["color"] = df["category_id"].map(lookup["color"]).where(known, UNKNOWN_COLOR)
    df["color"] = df["color"].fillna(UNKNOWN_COLOR)
    return df


def expense_distribution(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
) -> list[CategoryTotal]:
    """Expense totals per category for the pie chart, including an Unknown slice."""

    spend = _expenses(utils.ensure_transactions(transactions))
    if spend.empty:
        return []

    spend = _resolve_names(spend, _category_lookup(categories))
    totals = (
        spend.groupby(["slice", "name", "color"], sort=False, dropna=False)["amount"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    return [
        {
            "category_id": None if pd.isna(slice_id) else slice_id,
            "name": str(name),
            "color": str(color),
            "total": float(value),
        }
        for (slice_id, name, color), value in totals.items()
    ]


def monthly_category_totals(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
) -> list[MonthlyCategoryTotal]:
    """Expense totals per calendar month and category name, for stacked bars."""

    spend = _expenses(utils.ensure_transactions(transactions))
    if spend.empty:
        return []

    spend = _resolve_names(spend, _category_lookup(categories))
    spend["month"] = spend["date"].dt.strftime("%Y-%m")
    grouped = (
        spend.groupby(["month", "name", "color"], as_index=False)["amount"]
        .sum()
        .sort_values(["month", "amount"], ascending=[True, False], kind="stable")
    )
    return [
        {
            "month": str(month),
            "category": str(name),
            "color": str(color),
            "total": float(amount),
        }
        for month, name, color, amount in grouped.itertuples(index=False, name=None)
    ]


def expense_trend(
    transactions: Iterable[Any] | pd.DataFrame,
    reference: date,
    months: int = 6,
) -> list[TrendPoint]:
    """Expense totals for the ``months`` calendar months ending at ``reference``."""

    spend = _expenses(utils.ensure_transactions(transactions))
    by_month = spend.groupby(spend["date"].dt.to_period("M"))["amount"].sum()

    last = pd.Timestamp(reference).to_period("M")
    points: list[TrendPoint] = []
    for offset in range(months - 1, -1, -1):
        period = last - offset
        points.append(
            {
                "month": period.strftime("%Y-%m"),
                "label": period.strftime("%b"),
                "total": float(by_month.get(period, 0.0)),
            }
        )
    return points
