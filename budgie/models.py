"""Records consumed by the allocation engine.

The UI layer owns these records and hands the engine snapshots, usually as
plain dictionaries with camelCase keys.  ``coerce`` accepts either a
dataclass instance or such a mapping and never raises: numeric fields that
fail to parse become ``0.0``, mirroring how the budget forms treat blanks.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union

from .config import INACTIVE_PRIORITY_STATES, PRIORITY_ACTIVE


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float('inf'), float('-inf')):
        return 0.0
    return number


def parse_date(value: Any) -> Optional[date]:
    """Parse a literal ``YYYY-MM-DD`` (or a date/datetime) into a calendar date."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        year, month, day = (int(part) for part in str(value).strip()[:10].split('-'))
        return date(year, month, day)
    except (TypeError, ValueError):
        return None


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class Expense:
    amount: float
    frequency: str
    already_saved: float = 0.0
    priority_state: str = PRIORITY_ACTIVE
    id: Optional[str] = None
    name: str = ''
    category_id: Optional[str] = None
    due_date: Optional[str] = None
    is_recurring: bool = False

    @property
    def is_active(self) -> bool:
        return self.priority_state not in INACTIVE_PRIORITY_STATES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Expense':
        return cls(
            amount=to_float(_pick(data, 'amount')),
            frequency=str(_pick(data, 'frequency', default='')),
            already_saved=to_float(_pick(data, 'already_saved', 'alreadySaved', default=0)),
            priority_state=str(_pick(data, 'priority_state', 'priorityState', default=PRIORITY_ACTIVE)),
            id=_text(_pick(data, 'id')),
            name=str(_pick(data, 'name', default='')),
            category_id=_text(_pick(data, 'category_id', 'categoryId')),
            due_date=_text(_pick(data, 'due_date', 'dueDate')),
            is_recurring=bool(_pick(data, 'is_recurring', 'isRecurringExpense', 'isRecurring', default=False)),
        )

    @classmethod
    def coerce(cls, value: Union['Expense', Mapping[str, Any]]) -> 'Expense':
        return value if isinstance(value, cls) else cls.from_dict(value or {})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SavingsGoal:
    target_amount: float
    monthly_contribution: float
    already_saved: float = 0.0
    priority_state: str = PRIORITY_ACTIVE
    id: Optional[str] = None
    name: str = ''
    category_id: Optional[str] = None
    target_date: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.priority_state not in INACTIVE_PRIORITY_STATES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SavingsGoal':
        return cls(
            target_amount=to_float(_pick(data, 'target_amount', 'targetAmount')),
            monthly_contribution=to_float(_pick(data, 'monthly_contribution', 'monthlyContribution')),
            already_saved=to_float(_pick(data, 'already_saved', 'alreadySaved', default=0)),
            priority_state=str(_pick(data, 'priority_state', 'priorityState', default=PRIORITY_ACTIVE)),
            id=_text(_pick(data, 'id')),
            name=str(_pick(data, 'name', default='')),
            category_id=_text(_pick(data, 'category_id', 'categoryId')),
            target_date=_text(_pick(data, 'target_date', 'targetDate')),
        )

    @classmethod
    def coerce(cls, value: Union['SavingsGoal', Mapping[str, Any]]) -> 'SavingsGoal':
        return value if isinstance(value, cls) else cls.from_dict(value or {})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PaySchedule:
    start_date: Union[str, date]
    frequency: str = ''
    split_paycheck: bool = False
    primary_amount: float = 0.0
    secondary_amount: float = 0.0
    secondary_days_early: int = 0
    primary_account_id: Optional[str] = None
    secondary_account_id: Optional[str] = None

    @property
    def start(self) -> Optional[date]:
        return parse_date(self.start_date)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PaySchedule':
        return cls(
            start_date=_pick(data, 'start_date', 'startDate', default=''),
            frequency=str(_pick(data, 'frequency', default='') or ''),
            split_paycheck=bool(_pick(data, 'split_paycheck', 'splitPaycheck', default=False)),
            primary_amount=to_float(_pick(data, 'primary_amount', 'primaryAmount', default=0)),
            secondary_amount=to_float(_pick(data, 'secondary_amount', 'secondaryAmount', default=0)),
            secondary_days_early=int(to_float(_pick(data, 'secondary_days_early', 'secondaryDaysEarly', default=0))),
            primary_account_id=_text(_pick(data, 'primary_account_id', 'primaryAccountId')),
            secondary_account_id=_text(_pick(data, 'secondary_account_id', 'secondaryAccountId')),
        )

    @classmethod
    def coerce(cls, value: Union['PaySchedule', Mapping[str, Any]]) -> 'PaySchedule':
        return value if isinstance(value, cls) else cls.from_dict(value or {})

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if isinstance(self.start_date, date):
            data['start_date'] = self.start_date.isoformat()
        return data
