"""Transaction and category records.

These are the values handed over by the storage layer. Validation happens
here, when a record is built, so that the analytics modules can assume
well-formed dates and amounts.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Literal, Mapping

TransactionType = Literal["income", "expense"]
TRANSACTION_TYPES: tuple[TransactionType, ...] = ("income", "expense")


class InvalidRecordError(ValueError):
    """Raised when a transaction or category fails validation."""


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            # Date plus a time and optional offset; the written calendar date wins.
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid transaction date: {value!r}") from exc
    raise InvalidRecordError(f"Invalid transaction date: {value!r}")


def _parse_amount(value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidRecordError(f"Invalid transaction amount: {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"Invalid transaction amount: {value!r}") from exc
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidRecordError("Transaction amount must be a positive number.")
    return amount


def _check_type(value: Any) -> None:
    if value not in TRANSACTION_TYPES:
        raise InvalidRecordError(
            f"Type must be one of {', '.join(TRANSACTION_TYPES)}; got {value!r}."
        )


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    type: TransactionType
    color: str
    icon: str | None = None
    created_at: str | None = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise InvalidRecordError("Category name cannot be empty.")
        _check_type(self.type)
        object.__setattr__(self, "name", name)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Category":
        try:
            return cls(
                id=str(record["id"]),
                name=record["name"],
                type=record["type"],
                color=record.get("color") or "#888888",
                icon=record.get("icon"),
                created_at=record.get("created_at"),
            )
        except KeyError as exc:
            raise InvalidRecordError(f"Category record is missing {exc.args[0]!r}") from exc

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    date: date
    category_id: str
    type: TransactionType
    description: str | None = None
    created_at: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _parse_amount(self.amount))
        object.__setattr__(self, "date", _parse_date(self.date))
        _check_type(self.type)
        if self.description is not None:
            object.__setattr__(self, "description", self.description.strip() or None)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        try:
            return cls(
                id=str(record["id"]),
                amount=record["amount"],
                date=record["date"],
                category_id=str(record["category_id"]),
                type=record["type"],
                description=record.get("description"),
                created_at=record.get("created_at"),
            )
        except KeyError as exc:
            raise InvalidRecordError(f"Transaction record is missing {exc.args[0]!r}") from exc

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["date"] = self.date.isoformat()
        return record


DEFAULT_CATEGORIES: tuple[dict[str, str], ...] = (
    {"name": "Salary", "type": "income", "color": "#10b981"},
    {"name": "Investment", "type": "income", "color": "#3b82f6"},
    {"name": "Food", "type": "expense", "color": "#ef4444"},
    {"name": "Transport", "type": "expense", "color": "#f59e0b"},
    {"name": "Bills", "type": "expense", "color": "#8b5cf6"},
    {"name": "Shopping", "type": "expense", "color": "#ec4899"},
    {"name": "Health", "type": "expense", "color": "#06b6d4"},
    {"name": "Entertainment", "type": "expense", "color": "#f97316"},
    {"name": "Education", "type": "expense", "color": "#6366f1"},
    {"name": "Other", "type": "expense", "color": "#71717a"},
)
