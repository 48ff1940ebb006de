#!/usr/bin/env python3
"""
Local schedule preview (no HTTP).

Usage:
  python3 scripts/preview_schedule.py weekly_1_monday,wednesday 2024-01-01 2024-01-15 --times 07:00 18:00 --price 300

Prints the pattern label, every generated session date and the session/price totals.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from petcare.application.utils.date_generator import generate
from petcare.application.utils.pattern_parser import describe, parse
from petcare.application.utils.session_aggregator import aggregate
from petcare.domain.entities.recurrence import DateRange


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview recurring session dates and price.")
    parser.add_argument("pattern", help="e.g. weekly_1_monday,wednesday or monthly_1_last_friday")
    parser.add_argument("start", type=date.fromisoformat)
    parser.add_argument("end", type=date.fromisoformat)
    parser.add_argument("--times", nargs="*", default=["09:00"], help="HH:MM slots per day")
    parser.add_argument("--price", type=Decimal, default=Decimal("0"), help="price per session")
    args = parser.parse_args()

    pattern = parse(args.pattern)
    dates = generate(pattern, DateRange(args.start, args.end))
    pricing = aggregate(dates, len(set(args.times)), args.price)

    print(f"\n{describe(pattern) or '(no recurrence)'}")
    print("-" * 60)
    for d in dates:
        print(f"  {d:%a, %b %d, %Y}")
    if not dates:
        print("  No sessions to show.")
    print("-" * 60)
    print(f"{len(dates)} days x {pricing.sessions_per_day} times = {pricing.total_sessions} sessions")
    print(f"Total: {pricing.total_price:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
