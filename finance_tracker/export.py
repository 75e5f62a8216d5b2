"""CSV export of filtered transactions."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from . import aggregate, utils

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Date", "Type", "Category", "Description", "Amount"]


def transactions_to_frame(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
) -> pd.DataFrame:
    """Return the export table in input order, with category names resolved."""

    df = utils.ensure_transactions(transactions)
    cats = utils.ensure_categories(categories).drop_duplicates(subset="id")
    names = cats.set_index("id")["name"]

    out = pd.DataFrame(
        {
            "Date": df["date"].dt.strftime("%Y-%m-%d"),
            "Type": df["type"],
            "Category": df["category_id"].map(names).fillna(aggregate.UNKNOWN_CATEGORY),
            "Description": df["description"].fillna(""),
            "Amount": df["amount"],
        },
        columns=EXPORT_COLUMNS,
    )
    return out.reset_index(drop=True)


def filter_by_description(table: pd.DataFrame, query: str | None) -> pd.DataFrame:
    """Rows whose description contains ``query``, ignoring case. A blank query keeps all."""

    needle = (query or "").strip()
    if not needle:
        return table
    mask = table["Description"].fillna("").str.contains(needle, case=False, regex=False)
    return table.loc[mask]


def transactions_to_csv(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
) -> str:
    return transactions_to_frame(transactions, categories).to_csv(index=False)


def export_filename(prefix: str, today: date) -> str:
    return f"{prefix}-{today.isoformat()}.csv"


def write_csv(
    transactions: Iterable[Any] | pd.DataFrame,
    categories: Iterable[Any] | pd.DataFrame,
    path: str | Path,
) -> Path:
    """Write the export table to ``path`` and return it."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame = transactions_to_frame(transactions, categories)
    frame.to_csv(output_path, index=False)
    logger.info("Exported %d transactions to %s", len(frame), output_path)
    return output_path
