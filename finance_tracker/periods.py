"""Date ranges and period splitting for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, TypedDict

import pandas as pd

from . import utils

PRESET_OPTIONS = ("This month", "Last month", "Year to date", "All time")


@dataclass(frozen=True)
class DateRange:
    """A selected window. Either bound may be missing.

    ``start`` alone selects that single day; no ``start`` selects everything.
    """

    start: date | None = None
    end: date | None = None


class PeriodSplit(TypedDict):
    current: pd.DataFrame
    previous: pd.DataFrame


def _shift_back_one_month(day: date) -> date:
    # DateOffset clamps to the last day of shorter months (Mar 31 -> Feb 29).
    return (pd.Timestamp(day) - pd.DateOffset(months=1)).date()


def previous_range(date_range: DateRange) -> DateRange | None:
    """Return the comparison window one calendar month before ``date_range``."""

    if date_range.start is None:
        return None

    start = _shift_back_one_month(date_range.start)
    if date_range.end is None:
        return DateRange(start=start)
    return DateRange(start=start, end=start + (date_range.end - date_range.start))


def _select(df: pd.DataFrame, date_range: DateRange) -> pd.DataFrame:
    if date_range.start is None:
        return df.copy()

    start = pd.Timestamp(date_range.start)
    if date_range.end is None:
        mask = df["date"] == start
    else:
        mask = (df["date"] >= start) & (df["date"] <= pd.Timestamp(date_range.end))
    return df.loc[mask].copy()


def filter_by_range(
    transactions: Iterable[Any] | pd.DataFrame,
    date_range: DateRange | None,
) -> PeriodSplit:
    """Split transactions into the selected period and the comparison period."""

    df = utils.ensure_transactions(transactions)
    date_range = date_range or DateRange()

    comparison = previous_range(date_range)
    previous = _select(df, comparison) if comparison is not None else df.iloc[0:0].copy()

    return {"current": _select(df, date_range), "previous": previous}


def month_range(reference: date) -> DateRange:
    """Calendar month containing ``reference``, the dashboard default."""

    period = pd.Timestamp(reference).to_period("M")
    return DateRange(
        start=period.start_time.date(),
        end=period.end_time.date(),
    )


def preset_range(option: str, reference: date) -> DateRange:
    if option == "This month":
        return month_range(reference)
    if option == "Last month":
        return month_range(_shift_back_one_month(reference.replace(day=1)))
    if option == "Year to date":
        return DateRange(start=date(reference.year, 1, 1), end=reference)
    if option == "All time":
        return DateRange()
    raise ValueError(f"Unknown preset {option!r}; expected one of {PRESET_OPTIONS}")
