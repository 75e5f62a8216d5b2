"""Shared utilities for the Finance Tracker project."""

from __future__ import annotations

import math
from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, Mapping

import pandas as pd

TRANSACTION_COLUMNS = ["id", "amount", "description", "date", "category_id", "type"]
CATEGORY_COLUMNS = ["id", "name", "type", "color", "icon"]


def _as_mapping(record: Any) -> Mapping:
    if is_dataclass(record) and not isinstance(record, type):
        return asdict(record)
    return record


def ensure_dataframe(records: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
    """Ensure the input payload is normalised to a :class:`pandas.DataFrame`.

    Accepts a frame, mappings, or dataclass instances. The input is never
    modified.
    """

    if isinstance(records, pd.DataFrame):
        return records.copy()

    return pd.DataFrame([dict(_as_mapping(record)) for record in records])


def _with_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    for column in columns:
        if column not in df:
            df[column] = None
    return df


def _calendar_day(value: Any) -> pd.Timestamp:
    if pd.isna(value):
        return pd.NaT
    stamp = pd.Timestamp(value)
    return pd.Timestamp(stamp.year, stamp.month, stamp.day)


def calendar_days(values: pd.Series) -> pd.Series:
    """Naive midnight timestamps for the calendar date each value was written on.

    Values are parsed one by one, so a column may mix plain dates, ISO strings
    with or without a time or offset, and timestamps.
    """

    if pd.api.types.is_datetime64_any_dtype(values):
        if values.dt.tz is not None:
            values = values.dt.tz_localize(None)
        return values.dt.normalize()
    return pd.to_datetime(values.map(_calendar_day))


def ensure_transactions(transactions: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
    """Return a transaction frame with date-only ``date`` and float ``amount``."""

    df = _with_columns(ensure_dataframe(transactions), TRANSACTION_COLUMNS)
    df["date"] = calendar_days(df["date"])
    df["amount"] = df["amount"].astype(float)
    return df


def ensure_categories(categories: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
    return _with_columns(ensure_dataframe(categories), CATEGORY_COLUMNS)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, e.g. -2.5 -> -2."""

    return int(math.floor(value + 0.5))


def format_currency(value: float, currency: str = "₦") -> str:
    """Return a human-readable currency string."""

    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """Sign-prefixed percentage as shown on the summary cards."""

    prefix = "+" if value > 0 else ""
    return f"{prefix}{value:.{decimals}f}%"
