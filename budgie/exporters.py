"""Plain-text export of a biweekly budget breakdown."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .allocations import UNCATEGORIZED, AllocationSummary
from .config import PRIORITY_PAUSED
from .frequencies import FrequencyLike, find_frequency


def _share(amount: float, current_pay: float) -> float:
    return amount / current_pay * 100 if current_pay > 0 else 0.0


def _item_line(row: Mapping[str, Any], view_mode: str, frequency_options: Optional[Iterable[FrequencyLike]]) -> str:
    if view_mode == 'amount':
        value = f"${row['biweekly_amount']:.2f}"
    else:
        value = f"{row['percentage']:.1f}%"

    paused = ' [PAUSED]' if row['priority_state'] == PRIORITY_PAUSED else ''
    if row['kind'] == 'goal':
        funded = ' [COMPLETE]' if row['is_fully_funded'] else ''
        return f"{row['name']} (Goal): {value}/paycheck{paused}{funded}"

    option = find_frequency(row['frequency'], frequency_options)
    cadence = option.label.lower() if option else row['frequency']
    amount = f"{row['amount']:g}"
    funded = ' [FUNDED]' if row['is_fully_funded'] else ''
    return f"{row['name']}: {value}/paycheck ({amount} {cadence}){paused}{funded}"


def export_budget_text(
    summary: AllocationSummary,
    current_pay: float,
    buffer_percentage: float = 0,
    view_mode: str = 'amount',
    frequency_options: Optional[Iterable[FrequencyLike]] = None,
    category_names: Optional[Mapping[str, str]] = None,
) -> str:
    """Render ``summary`` as the text block users paste into other budgeting tools.

    Args:
        summary: Result of ``summarize_budget``
        current_pay: Take-home pay per paycheck
        buffer_percentage: Buffer used for the summary, shown in the header
        view_mode: ``'amount'`` for dollars per paycheck, anything else for percent of pay
        frequency_options: Frequency table used to label expense cadences
        category_names: Optional mapping of category id to display name

    Returns:
        Multi-line string
    """
    category_names = category_names or {}
    total = summary.total_biweekly_allocation
    lines: List[str] = [
        "BI-WEEKLY BUDGET BREAKDOWN",
        f"Take-home pay: ${current_pay:.2f}",
        f"Total allocations: ${total:.2f} ({_share(total, current_pay):.1f}%)",
        f"Buffer ({buffer_percentage:g}%): ${summary.buffer_amount:.2f}",
        f"Total with buffer: ${summary.total_with_buffer:.2f} ({summary.allocation_percentage:.1f}%)",
        f"Remaining: ${summary.remaining_income:.2f} ({_share(summary.remaining_income, current_pay):.1f}%)",
    ]

    allocations = summary.allocations
    if allocations.empty:
        return "\n".join(lines)

    blocks: List[str] = []
    keyed = allocations.assign(category_id=allocations['category_id'].fillna(UNCATEGORIZED))
    for category in summary.by_category.to_dict('records'):
        category_id = category['category_id']
        name = category_names.get(category_id, category_id)
        header = f"{str(name).upper()} - ${category['total']:.2f}/paycheck ({category['percentage']:.1f}%)"
        items = keyed[keyed['category_id'] == category_id]
        # Expenses first, then goals
        ordered = pd.concat([items[items['kind'] == 'expense'], items[items['kind'] == 'goal']])
        item_lines: List[Dict[str, Any]] = ordered.to_dict('records')
        body = "\n".join(f"• {_item_line(row, view_mode, frequency_options)}" for row in item_lines)
        blocks.append(f"{header}\n{body}")

    return "\n".join(lines) + "\n\n" + "\n\n".join(blocks)
