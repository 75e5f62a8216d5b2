from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest
from finance_tracker import store
from finance_tracker.models import DEFAULT_CATEGORIES, InvalidRecordError


def _clock() -> datetime:
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _category_id(local: store.LocalStore, name: str) -> str:
    return next(c.id for c in local.categories() if c.name == name)


def test_new_store_is_seeded_with_default_categories() -> None:
    local = store.LocalStore(clock=_clock)
    names = [c.name for c in local.categories()]

    assert names == [entry["name"] for entry in DEFAULT_CATEGORIES]
    assert local.transactions() == []
    assert all(c.created_at == "2024-03-01T12:00:00+00:00" for c in local.categories())
    assert store.LocalStore(seed_defaults=False).categories() == []


def test_add_and_update_transaction() -> None:
    local = store.LocalStore(clock=_clock)
    food = _category_id(local, "Food")

    tx_id = local.add_transaction(amount="12.50", date="2024-03-04", category_id=food, type="expense")
    stored = local.get_transaction(tx_id)
    assert stored.amount == 12.5
    assert stored.date == date(2024, 3, 4)
    assert stored.created_at == "2024-03-01T12:00:00+00:00"

    updated = local.update_transaction(tx_id, amount=20, description="Dinner")
    assert updated.amount == 20.0
    assert local.transactions() == [updated]

    with pytest.raises(ValueError):
        local.update_transaction(tx_id, id="other")


def test_invalid_transaction_is_rejected() -> None:
    local = store.LocalStore()
    food = _category_id(local, "Food")

    with pytest.raises(InvalidRecordError):
        local.add_transaction(amount=-5, date="2024-03-04", category_id=food, type="expense")
    with pytest.raises(InvalidRecordError):
        local.add_transaction(amount=5, date="not a date", category_id=food, type="expense")
    with pytest.raises(InvalidRecordError):
        local.add_transaction(amount=5, date="2024-03-04", category_id=food, type="transfer")
    assert local.transactions() == []


def test_delete_category_cascades_to_transactions() -> None:
    local = store.LocalStore()
    food = _category_id(local, "Food")
    bills = _category_id(local, "Bills")
    local.add_transaction(amount=10, date="2024-03-01", category_id=food, type="expense")
    local.add_transaction(amount=11, date="2024-03-02", category_id=food, type="expense")
    keep = local.add_transaction(amount=12, date="2024-03-03", category_id=bills, type="expense")

    assert local.delete_category(food) == 2
    assert [t.id for t in local.transactions()] == [keep]
    with pytest.raises(store.RecordNotFoundError):
        local.get_category(food)


def test_unknown_ids_raise() -> None:
    local = store.LocalStore()
    with pytest.raises(store.RecordNotFoundError):
        local.delete_transaction("missing")
    with pytest.raises(store.RecordNotFoundError):
        local.update_category("missing", name="Anything")


def test_categories_round_trip_through_file(tmp_path) -> None:
    path = tmp_path / "store.json"
    local = store.LocalStore(path, clock=_clock)
    pets = local.add_category(name="Pets", type="expense", color="#a3e635")
    tx_id = local.add_transaction(amount=30, date="2024-03-09", category_id=pets, type="expense",
                                  description="Vet")
    local.update_category(pets, color="#65a30d")

    reopened = store.LocalStore(path)
    assert reopened.get_category(pets).color == "#65a30d"
    assert reopened.get_transaction(tx_id) == local.get_transaction(tx_id)
    assert json.loads(path.read_text(encoding="utf-8"))["transactions"][0]["date"] == "2024-03-09"


def test_unreadable_store_file(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(store.StoreError):
        store.LocalStore(path)


def test_empty_category_name_is_rejected() -> None:
    with pytest.raises(InvalidRecordError):
        store.LocalStore().add_category(name="  ", type="expense", color="#000000")


def test_store_file_must_hold_an_object(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(store.StoreError):
        store.LocalStore(path)


def test_store_file_with_incomplete_category(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"categories": [{"id": "food", "type": "expense"}]}), encoding="utf-8")
    with pytest.raises(InvalidRecordError):
        store.LocalStore(path)


def test_categories_of_type_keeps_order() -> None:
    local = store.LocalStore(clock=_clock)

    assert [c.name for c in local.categories_of_type("income")] == ["Salary", "Investment"]
    assert all(c.type == "expense" for c in local.categories_of_type("expense"))
    assert len(local.categories_of_type("expense")) == len(DEFAULT_CATEGORIES) - 2


def test_add_transactions_writes_once(tmp_path, monkeypatch) -> None:
    local = store.LocalStore(tmp_path / "store.json", clock=_clock)
    food = _category_id(local, "Food")
    saves = []
    monkeypatch.setattr(local, "_save", lambda: saves.append(1))

    ids = local.add_transactions(
        {"amount": day, "date": date(2024, 3, day), "category_id": food, "type": "expense"}
        for day in range(1, 11)
    )

    assert len(ids) == len(set(ids)) == 10
    assert len(saves) == 1
    assert [t.id for t in local.transactions()] == ids


def test_add_transactions_rejects_whole_batch() -> None:
    local = store.LocalStore(clock=_clock)
    food = _category_id(local, "Food")
    good = {"amount": 5, "date": "2024-03-01", "category_id": food, "type": "expense"}

    with pytest.raises(InvalidRecordError):
        local.add_transactions([good, {**good, "amount": -1}])
    with pytest.raises(InvalidRecordError):
        local.add_transactions([good, {"amount": 5, "date": "2024-03-01", "type": "expense"}])
    assert local.transactions() == []
