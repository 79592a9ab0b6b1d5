"""Allocation engine: turns obligations into per-paycheck (biweekly) amounts.

Every function here is total.  Paused or complete obligations, amounts that
are already saved, and unknown frequencies all produce ``0`` instead of an
exception so that a bad record renders as "$0" rather than breaking a page.

Example:
    >>> calculate_biweekly_allocation({'amount': 120, 'frequency': 'monthly'})
    55.38461538461539
    >>> calculate_goal_biweekly_allocation({'targetAmount': 1000, 'monthlyContribution': 100}, 10)
    50
"""

from __future__ import annotations

from datetime import date, timedelta
import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import (
    BIWEEKLY_STEP_DAYS,
    DEFAULT_STEP_DAYS,
    MAX_ADVANCE_STEPS,
    MONTHS_PER_YEAR,
    PAY_PERIODS_PER_YEAR,
    PAYCHECK_COUNT,
)
from .frequencies import PER_PAYCHECK, FrequencyLike, find_frequency
from .models import Expense, PaySchedule, SavingsGoal, parse_date

logger = logging.getLogger(__name__)


def round_to_increment(value: float, increment: Optional[float]) -> float:
    """Round ``value`` up to the next multiple of ``increment``.

    An increment of ``0`` (or anything non-positive) disables rounding.  The
    rounding is always a ceiling so an allocation never underfunds.
    """
    if not increment or increment <= 0:
        return value
    return math.ceil(value / increment) * increment


def calculate_biweekly_allocation(
    expense: Union[Expense, Mapping[str, Any]],
    rounding_option: float = 0,
    frequency_options: Optional[Iterable[FrequencyLike]] = None,
) -> float:
    """Biweekly amount to set aside for a recurring or one-time expense.

    Args:
        expense: Expense record or UI dictionary
        rounding_option: Rounding unit, ``0`` for none
        frequency_options: Frequency table; defaults to ``FREQUENCY_OPTIONS``

    Returns:
        The allocation.  Once part of the expense is saved, the allocation
        shrinks in proportion to what is still owed.
    """
    expense = Expense.coerce(expense)
    if not expense.is_active:
        return 0.0

    amount = expense.amount
    remaining = max(0.0, amount - expense.already_saved)
    if remaining <= 0:
        return 0.0

    # Already expressed per pay period
    if expense.frequency == PER_PAYCHECK:
        return round_to_increment(remaining, rounding_option)

    option = find_frequency(expense.frequency, frequency_options)
    if option is None:
        return 0.0
    if option.weeks_per_year <= 0:
        logger.warning("Invalid frequency data for %s: %r", expense.frequency, option)
        return 0.0

    yearly_amount = amount * option.weeks_per_year
    biweekly_amount = yearly_amount / PAY_PERIODS_PER_YEAR
    adjusted = (remaining / amount) * biweekly_amount
    return round_to_increment(adjusted, rounding_option)


def calculate_goal_biweekly_allocation(
    goal: Union[SavingsGoal, Mapping[str, Any]],
    rounding_option: float = 0,
) -> float:
    """Biweekly amount for a savings goal funded by a monthly contribution.

    Unlike expenses the contribution is not tapered as the goal nears its
    target; the allocation stays at the full monthly rate until the goal is
    met and then drops to zero.
    """
    goal = SavingsGoal.coerce(goal)
    if not goal.is_active:
        return 0.0

    remaining = max(0.0, goal.target_amount - goal.already_saved)
    if remaining <= 0:
        return 0.0

    biweekly_amount = (goal.monthly_contribution * MONTHS_PER_YEAR) / PAY_PERIODS_PER_YEAR
    return round_to_increment(biweekly_amount, rounding_option)


def paycheck_step_days(frequency: Optional[str]) -> int:
    return BIWEEKLY_STEP_DAYS if frequency == 'bi-weekly' else DEFAULT_STEP_DAYS


def generate_paycheck_dates(
    pay_schedule: Union[PaySchedule, Mapping[str, Any]],
    today: Optional[date] = None,
    count: int = PAYCHECK_COUNT,
) -> List[date]:
    """Upcoming paycheck dates, starting with the first one not before ``today``.

    The start date is stepped forward by 14 days (bi-weekly) or 30 days
    (anything else).  Stepping stops after ``MAX_ADVANCE_STEPS`` advances, so
    a schedule that starts far in the past may begin before ``today``.

    Args:
        pay_schedule: PaySchedule or dictionary with ``startDate``/``frequency``
        today: Reference date (a datetime counts as its date); defaults to the system date
        count: Number of dates to return

    Returns:
        ``count`` dates in ascending order
    """
    schedule = PaySchedule.coerce(pay_schedule)
    today = parse_date(today) or date.today()
    step = timedelta(days=paycheck_step_days(schedule.frequency))

    current = schedule.start
    if current is None:
        logger.warning("Unparseable pay schedule start date %r; starting from %s", schedule.start_date, today)
        current = today

    advances = 0
    while current < today and advances < MAX_ADVANCE_STEPS:
        current += step
        advances += 1

    return [current + step * index for index in range(count)]
