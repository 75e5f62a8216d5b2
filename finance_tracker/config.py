"""Runtime settings read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATA_PATH = Path.home() / ".finance_tracker" / "store.json"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_path: Path
    currency_symbol: str = "₦"
    log_level: str = "INFO"
    sample_seed: int = 7


def get_settings() -> Settings:
    load_dotenv()
    seed = os.getenv("FINANCE_TRACKER_SEED", "7")
    try:
        sample_seed = int(seed)
    except ValueError as exc:
        raise ValueError(f"FINANCE_TRACKER_SEED must be an integer, got {seed!r}") from exc

    return Settings(
        data_path=Path(os.getenv("FINANCE_TRACKER_DATA_PATH", str(DEFAULT_DATA_PATH))).expanduser(),
        currency_symbol=os.getenv("FINANCE_TRACKER_CURRENCY", "₦"),
        log_level=os.getenv("FINANCE_TRACKER_LOG_LEVEL", "INFO").upper(),
        sample_seed=sample_seed,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
