"""Utility script to print the dashboard payload for a sample dataset."""

from __future__ import annotations

import argparse
import json
from datetime import date

from finance_tracker import insights, periods, synth


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=date.today(),
        help="Reference date; the report covers its calendar month.",
    )
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    args = parser.parse_args()

    categories, transactions = synth.generate_sample_data(end=args.as_of, seed=args.seed)
    payload = insights.build_dashboard(
        transactions,
        categories,
        periods.month_range(args.as_of),
        reference=args.as_of,
    )
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":
    main()
