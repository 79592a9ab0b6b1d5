"""Budget summary: every expense and goal allocated against one paycheck.

This module builds the per-item allocation table, paycheck-level totals
(buffer, remaining income, percentage of pay) and a per-category breakdown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .calculations import calculate_biweekly_allocation, calculate_goal_biweekly_allocation
from .frequencies import FrequencyLike, FrequencyOption, normalize_options
from .models import Expense, SavingsGoal
from .progress import calculate_funding_progress, calculate_remaining_needed, is_fully_funded

logger = logging.getLogger(__name__)

ALLOCATION_COLUMNS = [
    'kind', 'id', 'name', 'category_id', 'frequency', 'priority_state',
    'amount', 'already_saved', 'biweekly_amount', 'percentage',
    'remaining_needed', 'funding_progress', 'is_fully_funded',
]
CATEGORY_COLUMNS = ['category_id', 'expenses', 'goals', 'total', 'percentage']
UNCATEGORIZED = 'uncategorized'


@dataclass
class AllocationSummary:
    allocations: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=ALLOCATION_COLUMNS))
    by_category: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=CATEGORY_COLUMNS))
    total_expense_allocation: float = 0.0
    total_goal_allocation: float = 0.0
    total_biweekly_allocation: float = 0.0
    buffer_amount: float = 0.0
    total_with_buffer: float = 0.0
    remaining_income: float = 0.0
    allocation_percentage: float = 0.0

    @property
    def expense_allocations(self) -> pd.DataFrame:
        return self.allocations[self.allocations['kind'] == 'expense']

    @property
    def goal_allocations(self) -> pd.DataFrame:
        return self.allocations[self.allocations['kind'] == 'goal']

    def to_dict(self) -> Dict[str, Any]:
        return {
            'allocations': _records(self.allocations),
            'by_category': _records(self.by_category),
            'total_expense_allocation': self.total_expense_allocation,
            'total_goal_allocation': self.total_goal_allocation,
            'total_biweekly_allocation': self.total_biweekly_allocation,
            'buffer_amount': self.buffer_amount,
            'total_with_buffer': self.total_with_buffer,
            'remaining_income': self.remaining_income,
            'allocation_percentage': self.allocation_percentage,
        }


def _records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    cleaned = frame.astype(object).where(frame.notna(), None)
    return cleaned.to_dict('records')


def _expense_row(expense: Expense, rounding_option: float, options: List[FrequencyOption]) -> Dict[str, Any]:
    return {
        'kind': 'expense',
        'id': expense.id,
        'name': expense.name,
        'category_id': expense.category_id,
        'frequency': expense.frequency,
        'priority_state': expense.priority_state,
        'amount': expense.amount,
        'already_saved': expense.already_saved,
        'biweekly_amount': float(calculate_biweekly_allocation(expense, rounding_option, options)),
        'remaining_needed': calculate_remaining_needed(expense.already_saved, expense.amount),
        'funding_progress': calculate_funding_progress(expense.already_saved, expense.amount),
        'is_fully_funded': is_fully_funded(expense.already_saved, expense.amount),
    }


def _goal_row(goal: SavingsGoal, rounding_option: float) -> Dict[str, Any]:
    return {
        'kind': 'goal',
        'id': goal.id,
        'name': goal.name,
        'category_id': goal.category_id,
        'frequency': 'monthly',
        'priority_state': goal.priority_state,
        'amount': goal.target_amount,
        'already_saved': goal.already_saved,
        'biweekly_amount': float(calculate_goal_biweekly_allocation(goal, rounding_option)),
        'remaining_needed': calculate_remaining_needed(goal.already_saved, goal.target_amount),
        'funding_progress': calculate_funding_progress(goal.already_saved, goal.target_amount),
        'is_fully_funded': is_fully_funded(goal.already_saved, goal.target_amount),
    }


def summarize_budget(
    expenses: Iterable[Union[Expense, Mapping[str, Any]]],
    goals: Iterable[Union[SavingsGoal, Mapping[str, Any]]],
    current_pay: float,
    rounding_option: float = 0,
    buffer_percentage: float = 0,
    frequency_options: Optional[Iterable[FrequencyLike]] = None,
) -> AllocationSummary:
    """Allocate every expense and goal against one paycheck.

    Args:
        expenses: Expense records or UI dictionaries
        goals: SavingsGoal records or UI dictionaries
        current_pay: Take-home pay per paycheck
        rounding_option: Rounding unit passed to the allocation engine
        buffer_percentage: Extra cushion added on top of the allocations, in percent
        frequency_options: Frequency table; defaults to ``FREQUENCY_OPTIONS``

    Returns:
        AllocationSummary; empty when ``current_pay`` is not positive
    """
    if not current_pay or current_pay <= 0:
        logger.warning("Invalid current pay: %r", current_pay)
        return AllocationSummary()

    options = normalize_options(frequency_options)
    rows = [_expense_row(Expense.coerce(e), rounding_option, options) for e in expenses]
    rows += [_goal_row(SavingsGoal.coerce(g), rounding_option) for g in goals]

    allocations = pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)
    allocations['biweekly_amount'] = allocations['biweekly_amount'].astype(float)
    allocations['percentage'] = allocations['biweekly_amount'] / current_pay * 100

    total_expense = float(allocations.loc[allocations['kind'] == 'expense', 'biweekly_amount'].sum())
    total_goal = float(allocations.loc[allocations['kind'] == 'goal', 'biweekly_amount'].sum())
    total = total_expense + total_goal
    buffer_amount = total * ((buffer_percentage or 0) / 100)
    total_with_buffer = total + buffer_amount

    return AllocationSummary(
        allocations=allocations,
        by_category=category_breakdown(allocations, current_pay),
        total_expense_allocation=total_expense,
        total_goal_allocation=total_goal,
        total_biweekly_allocation=total,
        buffer_amount=buffer_amount,
        total_with_buffer=total_with_buffer,
        remaining_income=current_pay - total_with_buffer,
        allocation_percentage=total_with_buffer / current_pay * 100,
    )


def category_breakdown(allocations: pd.DataFrame, current_pay: float) -> pd.DataFrame:
    """Group an allocation table by category with counts, totals and percent of pay."""
    if allocations is None or allocations.empty:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    working = allocations.copy()
    working['category_id'] = working['category_id'].fillna(UNCATEGORIZED)
    working['is_expense'] = (working['kind'] == 'expense').astype(int)
    working['is_goal'] = (working['kind'] == 'goal').astype(int)
    grouped = working.groupby('category_id', sort=False).agg(
        expenses=('is_expense', 'sum'),
        goals=('is_goal', 'sum'),
        total=('biweekly_amount', 'sum'),
    ).reset_index()
    grouped['percentage'] = np.where(current_pay > 0, grouped['total'] / current_pay * 100, 0.0)
    return grouped[CATEGORY_COLUMNS]
