from __future__ import annotations

from datetime import date

import pandas as pd
from finance_tracker import export

CATEGORIES = [{"id": "food", "name": "Food", "type": "expense", "color": "#ef4444"}]

TRANSACTIONS = [
    {"id": "1", "amount": 100.0, "date": "2024-03-02", "category_id": "food", "type": "expense",
     "description": "Lunch, team"},
    {"id": "2", "amount": 45.5, "date": "2024-03-01", "category_id": "gone", "type": "expense",
     "description": None},
]


def test_transactions_to_csv() -> None:
    lines = export.transactions_to_csv(TRANSACTIONS, CATEGORIES).splitlines()

    assert lines == [
        "Date,Type,Category,Description,Amount",
        '2024-03-02,expense,Food,"Lunch, team",100.0',
        "2024-03-01,expense,Unknown,,45.5",
    ]


def test_transactions_to_csv_empty() -> None:
    assert export.transactions_to_csv([], CATEGORIES).splitlines() == ["Date,Type,Category,Description,Amount"]


def test_export_filename() -> None:
    assert export.export_filename("finance-report", date(2024, 3, 31)) == "finance-report-2024-03-31.csv"


def test_write_csv(tmp_path) -> None:
    path = export.write_csv(TRANSACTIONS, CATEGORIES, tmp_path / "out" / "transactions.csv")

    written = pd.read_csv(path, keep_default_na=False)
    assert list(written.columns) == export.EXPORT_COLUMNS
    assert written["Category"].tolist() == ["Food", "Unknown"]
    assert written["Amount"].tolist() == [100.0, 45.5]


def test_filter_by_description_ignores_case() -> None:
    table = export.transactions_to_frame(TRANSACTIONS, CATEGORIES)

    assert export.filter_by_description(table, "LUNCH")["Amount"].tolist() == [100.0]
    assert export.filter_by_description(table, "team)")["Amount"].tolist() == []
    assert len(export.filter_by_description(table, "  ")) == 2
    assert len(export.filter_by_description(table, None)) == 2
