"""Paycheck events, expense due dates and the combined budget calendar."""

from __future__ import annotations

from datetime import date, timedelta
import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .calculations import generate_paycheck_dates
from .frequencies import PER_PAYCHECK, FrequencyLike, find_frequency
from .formatting import format_currency
from .models import Expense, PaySchedule, SavingsGoal, parse_date

logger = logging.getLogger(__name__)

EVENT_COLUMNS = [
    'date', 'type', 'subtype', 'title', 'amount', 'account_id',
    'category', 'description', 'is_recurring', 'occurrence',
]
DAYS_PER_YEAR = 365


def _empty_events() -> pd.DataFrame:
    return pd.DataFrame(columns=EVENT_COLUMNS)


def _events_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    if not rows:
        return _empty_events()
    frame = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    return frame.sort_values('date', kind='mergesort').reset_index(drop=True)


def generate_paycheck_events(
    pay_schedule: Union[PaySchedule, Mapping[str, Any]],
    current_pay: float,
    accounts: Optional[Mapping[str, str]] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Paycheck deposits for the upcoming schedule.

    With a split paycheck each payday yields a primary deposit plus, when a
    secondary amount is set, an earlier secondary deposit.

    Args:
        pay_schedule: The pay schedule
        current_pay: Take-home pay used when the paycheck is not split
        accounts: Optional mapping of account id to display name
        today: Reference date for the schedule

    Returns:
        DataFrame of events sorted by date
    """
    schedule = PaySchedule.coerce(pay_schedule)
    accounts = accounts or {}
    primary_name = accounts.get(schedule.primary_account_id or '')
    secondary_name = accounts.get(schedule.secondary_account_id or '') or 'Secondary Bank'

    rows: List[Dict[str, Any]] = []
    for index, payday in enumerate(generate_paycheck_dates(schedule, today=today)):
        amount = schedule.primary_amount if schedule.split_paycheck else current_pay
        label = 'Main deposit' if schedule.split_paycheck else 'Bi-weekly income'
        description = f"{label}: {format_currency(amount)}"
        if primary_name:
            description += f" → {primary_name}"
        rows.append({
            'date': payday,
            'type': 'paycheck',
            'subtype': 'primary',
            'title': (primary_name or 'Primary Bank') if schedule.split_paycheck else f"Paycheck #{index + 1}",
            'amount': amount,
            'account_id': schedule.primary_account_id if schedule.split_paycheck else None,
            'category': None,
            'description': description,
            'is_recurring': True,
            'occurrence': index + 1,
        })

        if schedule.split_paycheck and schedule.secondary_amount > 0:
            rows.append({
                'date': payday - timedelta(days=schedule.secondary_days_early),
                'type': 'paycheck',
                'subtype': 'secondary',
                'title': secondary_name,
                'amount': schedule.secondary_amount,
                'account_id': schedule.secondary_account_id,
                'category': None,
                'description': (
                    f"Early deposit: {format_currency(schedule.secondary_amount)} "
                    f"({schedule.secondary_days_early} days early) → {secondary_name}"
                ),
                'is_recurring': True,
                'occurrence': index + 1,
            })

    return _events_frame(rows)


def relevant_paychecks(
    target_date: Optional[Union[str, date]],
    pay_schedule: Union[PaySchedule, Mapping[str, Any]],
    account_id: Optional[str] = None,
    current_pay: float = 0.0,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Paychecks landing on or before ``target_date`` for one account.

    The secondary account of a split paycheck sees the early secondary
    deposit; every other account sees the primary deposit.
    """
    target = parse_date(target_date)
    if target is None:
        return []

    schedule = PaySchedule.coerce(pay_schedule)
    uses_secondary = (
        schedule.split_paycheck
        and account_id is not None
        and account_id == schedule.secondary_account_id
    )
    primary_amount = schedule.primary_amount if schedule.split_paycheck else schedule.primary_amount + schedule.secondary_amount
    if not schedule.split_paycheck and primary_amount <= 0:
        primary_amount = current_pay

    paychecks: List[Dict[str, Any]] = []
    for index, payday in enumerate(generate_paycheck_dates(schedule, today=today)):
        if uses_secondary:
            entry = {
                'date': payday - timedelta(days=schedule.secondary_days_early),
                'amount': schedule.secondary_amount,
                'type': 'secondary',
                'index': index,
            }
        else:
            entry = {'date': payday, 'amount': primary_amount, 'type': 'primary', 'index': index}
        if entry['date'] <= target:
            paychecks.append(entry)
    return paychecks


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def expense_due_dates(
    expense: Union[Expense, Mapping[str, Any]],
    frequency_options: Optional[Iterable[FrequencyLike]] = None,
    today: Optional[date] = None,
    horizon_days: int = DAYS_PER_YEAR,
    max_occurrences: int = 8,
) -> List[date]:
    """Upcoming due dates for an expense, starting at its first due date.

    Recurring expenses repeat every ``365 / weeks_per_year`` days (rounded)
    until ``today + horizon_days`` or ``max_occurrences`` dates, whichever
    comes first.  Per-paycheck and one-time expenses get one occurrence.
    """
    expense = Expense.coerce(expense)
    if not expense.due_date:
        return []
    first_due = parse_date(expense.due_date)
    if first_due is None:
        logger.warning("Error processing expense date for %s: %r", expense.name, expense.due_date)
        return []

    option = find_frequency(expense.frequency, frequency_options)
    if not expense.is_recurring or expense.frequency == PER_PAYCHECK:
        return [first_due]
    if option is None or option.weeks_per_year <= 0:
        return []

    step = timedelta(days=_round_half_up(DAYS_PER_YEAR / option.weeks_per_year))
    end = (parse_date(today) or date.today()) + timedelta(days=horizon_days)
    dates: List[date] = []
    current = first_due
    while current <= end and len(dates) < max_occurrences:
        dates.append(current)
        current += step
    return dates


def calendar_events(
    pay_schedule: Union[PaySchedule, Mapping[str, Any]],
    current_pay: float,
    goals: Iterable[Union[SavingsGoal, Mapping[str, Any]]] = (),
    expenses: Iterable[Union[Expense, Mapping[str, Any]]] = (),
    frequency_options: Optional[Iterable[FrequencyLike]] = None,
    categories: Optional[Mapping[str, str]] = None,
    accounts: Optional[Mapping[str, str]] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Paychecks, goal deadlines and expense due dates on one timeline."""
    categories = categories or {}
    paychecks = generate_paycheck_events(pay_schedule, current_pay, accounts=accounts, today=today)
    rows: List[Dict[str, Any]] = paychecks.to_dict('records')

    for raw_goal in goals:
        goal = SavingsGoal.coerce(raw_goal)
        deadline = parse_date(goal.target_date)
        if deadline is None:
            continue
        rows.append({
            'date': deadline,
            'type': 'goal-deadline',
            'subtype': None,
            'title': goal.name,
            'amount': goal.target_amount,
            'account_id': None,
            'category': categories.get(goal.category_id or ''),
            'description': f"Target: {format_currency(goal.target_amount)}",
            'is_recurring': False,
            'occurrence': 1,
        })

    for raw_expense in expenses:
        expense = Expense.coerce(raw_expense)
        due_dates = expense_due_dates(expense, frequency_options, today=today)
        recurring = len(due_dates) > 1 or (expense.is_recurring and expense.frequency != PER_PAYCHECK)
        for occurrence, due in enumerate(due_dates, start=1):
            rows.append({
                'date': due,
                'type': 'expense-due',
                'subtype': None,
                'title': expense.name,
                'amount': expense.amount,
                'account_id': None,
                'category': categories.get(expense.category_id or ''),
                'description': f"{format_currency(expense.amount)} due",
                'is_recurring': recurring,
                'occurrence': occurrence,
            })

    return _events_frame(rows)
