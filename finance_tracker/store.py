"""Local storage for categories and transactions.

Used when no remote backend is configured. Data lives in memory and, when a
path is given, in a JSON file that is rewritten after every change.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping
from uuid import uuid4

from .models import DEFAULT_CATEGORIES, Category, Transaction

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the store file cannot be read or written."""


class RecordNotFoundError(KeyError):
    """Raised when an id does not match any stored record."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocalStore:
    def __init__(
        self,
        path: str | Path | None = None,
        *,
        clock: Callable[[], datetime] = _utc_now,
        seed_defaults: bool = True,
    ):
        self._path = Path(path) if path is not None else None
        self._clock = clock
        self._categories: list[Category] = []
        self._transactions: list[Transaction] = []

        if self._path is not None and self._path.exists():
            self._load(self._path)
        elif seed_defaults:
            for entry in DEFAULT_CATEGORIES:
                self._categories.append(self._new_category(**entry))
            self._save()

    # Reads

    def categories(self) -> list[Category]:
        return list(self._categories)

    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def snapshot(self) -> tuple[list[Category], list[Transaction]]:
        return self.categories(), self.transactions()

    def categories_of_type(self, kind: str) -> list[Category]:
        return [c for c in self._categories if c.type == kind]

    def get_category(self, category_id: str) -> Category:
        return self._categories[self._index(self._categories, category_id, "category")]

    def get_transaction(self, transaction_id: str) -> Transaction:
        return self._transactions[self._index(self._transactions, transaction_id, "transaction")]

    # Categories

    def add_category(self, name: str, type: str, color: str, icon: str | None = None) -> str:
        category = self._new_category(name=name, type=type, color=color, icon=icon)
        self._categories.append(category)
        self._save()
        logger.info("Added category %s (%s)", category.name, category.id)
        return category.id

    def update_category(self, category_id: str, **changes: Any) -> Category:
        idx = self._index(self._categories, category_id, "category")
        updated = replace(self._categories[idx], **_editable(changes))
        self._categories[idx] = updated
        self._save()
        return updated

    def delete_category(self, category_id: str) -> int:
        """Delete a category and every transaction that references it.

        Returns the number of transactions removed with it.
        """

        idx = self._index(self._categories, category_id, "category")
        del self._categories[idx]
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.category_id != category_id]
        removed = before - len(self._transactions)
        self._save()
        logger.info("Deleted category %s and %d transactions", category_id, removed)
        return removed

    # Transactions

    def add_transaction(
        self,
        amount: Any,
        date: Any,
        category_id: str,
        type: str,
        description: str | None = None,
    ) -> str:
        transaction = self._new_transaction(
            amount=amount,
            date=date,
            category_id=category_id,
            type=type,
            description=description,
        )
        self._transactions.append(transaction)
        self._save()
        logger.debug("Added transaction %s", transaction.id)
        return transaction.id

    def add_transactions(self, records: Iterable[Mapping[str, Any]]) -> list[str]:
        """Add many transactions and write the file once.

        Every record is validated before any is stored, so one bad record
        leaves the store unchanged.
        """

        batch = [
            Transaction.from_record(
                {**record, "id": str(uuid4()), "created_at": self._clock().isoformat()}
            )
            for record in records
        ]
        self._transactions.extend(batch)
        self._save()
        logger.info("Added %d transactions", len(batch))
        return [t.id for t in batch]

    def update_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        idx = self._index(self._transactions, transaction_id, "transaction")
        updated = replace(self._transactions[idx], **_editable(changes))
        self._transactions[idx] = updated
        self._save()
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        idx = self._index(self._transactions, transaction_id, "transaction")
        del self._transactions[idx]
        self._save()

    # Internals

    def _new_category(self, **fields: Any) -> Category:
        return Category(id=str(uuid4()), created_at=self._clock().isoformat(), **fields)

    def _new_transaction(self, **fields: Any) -> Transaction:
        return Transaction(id=str(uuid4()), created_at=self._clock().isoformat(), **fields)

    @staticmethod
    def _index(records: list, record_id: str, kind: str) -> int:
        for idx, record in enumerate(records):
            if record.id == record_id:
                return idx
        raise RecordNotFoundError(f"No {kind} with id {record_id!r}")

    def _load(self, path: Path) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"Store file {path} does not hold an object")

        self._categories = [Category.from_record(r) for r in data.get("categories", [])]
        self._transactions = [Transaction.from_record(r) for r in data.get("transactions", [])]
        logger.info(
            "Loaded %d categories and %d transactions from %s",
            len(self._categories),
            len(self._transactions),
            path,
        )

    def _save(self) -> None:
        if self._path is None:
            return
        payload = {
            "categories": [c.to_record() for c in self._categories],
            "transactions": [t.to_record() for t in self._transactions],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp, self._path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StoreError(f"Cannot write store file {self._path}: {exc}") from exc


def _editable(changes: dict[str, Any]) -> dict[str, Any]:
    fixed = {"id", "created_at"} & changes.keys()
    if fixed:
        raise ValueError(f"Cannot change {', '.join(sorted(fixed))}")
    return changes
