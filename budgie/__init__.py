"""Top-level package for the Budgie allocation engine.

Budgie turns a household's obligations into one common unit: the amount to
set aside from every paycheck.  The primary modules are:

* ``calculations`` - biweekly allocations for expenses and goals, paycheck dates
* ``frequencies`` - the frequency table and conversions between cadences
* ``allocations`` - a full budget summary against one paycheck
* ``progress`` - funding progress, deadlines and urgency
* ``schedule`` - paycheck events, due dates and the budget calendar

To print a summary for a saved budget file run:

```bash
python scripts/show_allocations.py data/budgets/My_Budget.json --pay 2400
```
"""

from .calculations import (  # noqa: F401  # re-exported for convenience
    calculate_biweekly_allocation,
    calculate_goal_biweekly_allocation,
    generate_paycheck_dates,
    round_to_increment,
)
from .frequencies import FREQUENCY_OPTIONS, FrequencyOption  # noqa: F401
from .models import Expense, PaySchedule, SavingsGoal  # noqa: F401
from .allocations import AllocationSummary, summarize_budget  # noqa: F401


__all__ = [
    "calculate_biweekly_allocation",
    "calculate_goal_biweekly_allocation",
    "generate_paycheck_dates",
    "round_to_increment",
    "FREQUENCY_OPTIONS",
    "FrequencyOption",
    "Expense",
    "PaySchedule",
    "SavingsGoal",
    "AllocationSummary",
    "summarize_budget",
]
