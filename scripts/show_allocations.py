#!/usr/bin/env python3
"""Print per-paycheck allocations for a saved budget file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budgie.allocations import summarize_budget
from budgie.calculations import generate_paycheck_dates
from budgie.config import configure_logging
from budgie.exporters import export_budget_text
from budgie.storage import load_budget


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Show per-paycheck allocations for a budget file.')
    parser.add_argument('budget', type=Path, help='Path to a budget JSON file')
    parser.add_argument('--pay', type=float, default=None, help='Take-home pay per paycheck (overrides the file)')
    parser.add_argument('--rounding', type=float, default=None, help='Round allocations up to this unit (0 = off)')
    parser.add_argument('--buffer', type=float, default=None, help='Buffer percentage added to allocations')
    parser.add_argument('--percent', action='store_true', help='Show items as a percent of pay')
    parser.add_argument('--log-level', default=None, help='Logging level (default from BUDGIE_LOG_LEVEL)')
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if not args.budget.exists():
        print(f"Budget file not found: {args.budget}")
        return 1

    budget = load_budget(args.budget)
    settings = budget['settings']
    pay = args.pay if args.pay is not None else float(settings.get('current_pay') or 0)
    rounding = args.rounding if args.rounding is not None else settings.get('rounding_option') or 0
    buffer_pct = args.buffer if args.buffer is not None else settings.get('buffer_percentage') or 0

    if pay <= 0:
        print("Take-home pay must be positive; pass --pay or set current_pay in the file.")
        return 1

    summary = summarize_budget(budget['expenses'], budget['goals'], pay, rounding, buffer_pct)

    print(f"Budget: {budget['name']}")
    print(export_budget_text(summary, pay, buffer_pct, view_mode='percent' if args.percent else 'amount'))

    if not summary.allocations.empty:
        columns = ['kind', 'name', 'frequency', 'priority_state', 'biweekly_amount', 'percentage', 'funding_progress']
        print("\nAllocations:")
        print(summary.allocations[columns].round(2).to_string(index=False))

    pay_schedule = settings.get('pay_schedule') or {}
    if pay_schedule.get('start_date'):
        dates = generate_paycheck_dates(pay_schedule)
        print("\nNext paychecks:")
        print("\n".join(d.isoformat() for d in dates[:6]))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
