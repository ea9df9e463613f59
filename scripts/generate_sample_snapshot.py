#!/usr/bin/env python3
"""
Generate a realistic sample snapshot for manual testing.

Builds a portfolio, a set of price alerts and a watchlist, then writes an
export document that can be loaded with POST /data/import.

Usage: from project root:
  python scripts/generate_sample_snapshot.py [output.json] [--seed N]
"""

import argparse
import random
import sys
from decimal import Decimal
from pathlib import Path

# Allow running from a checkout without installing the package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from stockscope.core.timezone import now_eastern
from stockscope.services import DomainStore
from stockscope.snapshot import SnapshotExporter


# Symbols with approximate reference prices
STOCKS = [
    ("AAPL", 185.0),
    ("MSFT", 380.0),
    ("GOOGL", 145.0),
    ("AMZN", 180.0),
    ("TSLA", 250.0),
    ("NVDA", 485.0),
    ("META", 505.0),
    ("NFLX", 450.0),
]


def generate_snapshot(output: Path, seed: int) -> None:
    """Populate a store with sample data and export it to output."""
    rng = random.Random(seed)
    store = DomainStore()

    print("Generating holdings")
    print("=" * 60)
    for symbol, price in rng.sample(STOCKS, 5):
        shares = rng.choice([5, 10, 15, 20, 25, 50])
        avg_price = Decimal(str(price * rng.uniform(0.8, 1.1))).quantize(Decimal("0.01"))
        store.add_holding(symbol, shares, avg_price)
        print(f"✓ {symbol}: {shares} shares @ ${avg_price}")

    print("\nGenerating alerts")
    print("=" * 60)
    for symbol, price in rng.sample(STOCKS, 4):
        target = Decimal(str(price * rng.uniform(0.9, 1.1))).quantize(Decimal("0.01"))
        alert = store.add_alert(symbol, target)
        if rng.random() < 0.25:
            store.mark_alert_triggered(alert.alert_id, now_eastern())
            print(f"✓ {symbol}: target ${target} (triggered)")
        else:
            print(f"✓ {symbol}: target ${target}")

    print("\nGenerating watchlist")
    print("=" * 60)
    for symbol, _ in rng.sample(STOCKS, 3):
        store.add_watchlist_item(symbol)
        print(f"✓ {symbol}")

    path = SnapshotExporter(store).export_file(str(output))
    print(f"\nSnapshot written to {path}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("output", nargs="?", default="sample-snapshot.json")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()
    generate_snapshot(Path(args.output), args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
