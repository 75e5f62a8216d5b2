"""Fill the local store with synthetic transactions.

The store's own categories are reused, so the generated records line up with
whatever ids the store already assigned. Existing transactions are kept.

Output: the store file from FINANCE_TRACKER_DATA_PATH (or --path), and
optionally a CSV export of everything generated.
"""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path

from finance_tracker import config, export, store, synth

logger = logging.getLogger(__name__)


def main() -> None:
    settings = config.get_settings()
    parser = argparse.ArgumentParser(description="Seed the local store with sample data")
    parser.add_argument("--path", type=Path, default=settings.data_path)
    parser.add_argument("--months", type=int, default=synth.DEFAULT_MONTHS)
    parser.add_argument("--seed", type=int, default=settings.sample_seed)
    parser.add_argument("--as-of", type=date.fromisoformat, default=date.today())
    parser.add_argument("--csv", type=Path, help="Also write the generated rows to this CSV file.")
    args = parser.parse_args()

    config.configure_logging(settings.log_level)

    local = store.LocalStore(args.path)
    categories = local.categories()
    generated = synth.generate_transactions(
        categories, end=args.as_of, months=args.months, seed=args.seed
    )
    local.add_transactions(
        {
            "amount": row.amount,
            "date": row.date.date(),
            "category_id": row.category_id,
            "type": row.type,
            "description": row.description,
        }
        for row in generated.itertuples(index=False)
    )
    logger.info("Seeded %d transactions into %s", len(generated), args.path)

    if args.csv:
        export.write_csv(generated, categories, args.csv)


if __name__ == "__main__":
    main()
