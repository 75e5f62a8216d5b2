from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest
from finance_tracker import config, utils
from finance_tracker.models import Transaction


def test_ensure_transactions_normalises_frame_without_mutating_input() -> None:
    source = pd.DataFrame([{"id": "a", "amount": "12", "date": "2024-03-05"}])
    df = utils.ensure_transactions(source)

    assert list(df.columns[:3]) == ["id", "amount", "date"]
    assert set(utils.TRANSACTION_COLUMNS) <= set(df.columns)
    assert df.loc[0, "amount"] == 12.0
    assert df.loc[0, "date"] == pd.Timestamp(2024, 3, 5)
    assert source.loc[0, "amount"] == "12"


def test_ensure_dataframe_accepts_dataclasses() -> None:
    tx = Transaction(id="t", amount=3, date="2024-03-05", category_id="c", type="income")
    df = utils.ensure_dataframe([tx])
    assert df.loc[0, "type"] == "income"


def test_formatting_helpers() -> None:
    assert utils.format_currency(1234.5) == "₦1,234.50"
    assert utils.format_currency(-20, "£") == "-£20.00"
    assert utils.format_percent(12.345) == "+12.3%"
    assert utils.format_percent(-4.0) == "-4.0%"
    assert utils.format_percent(0.0) == "0.0%"
    assert [utils.round_half_up(v) for v in (0.5, 1.49, -0.5, -1.5)] == [1, 1, 0, -1]


def test_get_settings_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("FINANCE_TRACKER_DATA_PATH", str(tmp_path / "data.json"))
    monkeypatch.setenv("FINANCE_TRACKER_CURRENCY", "$")
    monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "debug")
    monkeypatch.setenv("FINANCE_TRACKER_SEED", "11")

    settings = config.get_settings()
    assert settings.data_path == Path(tmp_path / "data.json")
    assert settings.currency_symbol == "$"
    assert settings.log_level == "DEBUG"
    assert settings.sample_seed == 11


def test_get_settings_rejects_bad_seed(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_TRACKER_SEED", "seven")
    with pytest.raises(ValueError):
        config.get_settings()


def test_configure_logging_accepts_unknown_level() -> None:
    config.configure_logging("not-a-level")
    assert logging.getLogger().handlers


def test_calendar_days_keeps_the_written_date() -> None:
    days = utils.calendar_days(
        pd.Series(["2024-03-31T23:30:00-05:00", "2024-04-01", "2024-04-02 08:15", None])
    )

    assert days.tolist()[:3] == [
        pd.Timestamp("2024-03-31"),
        pd.Timestamp("2024-04-01"),
        pd.Timestamp("2024-04-02"),
    ]
    assert pd.isna(days.iloc[3])


def test_calendar_days_on_timezone_aware_column() -> None:
    stamps = pd.Series(pd.to_datetime(["2024-03-31T23:30:00", "2024-04-01T01:00:00"])).dt.tz_localize(
        "America/New_York"
    )

    assert utils.calendar_days(stamps).tolist() == [pd.Timestamp("2024-03-31"), pd.Timestamp("2024-04-01")]
