"""Persistence helpers for allocation settings and saved budgets."""

from __future__ import annotations

import copy
from datetime import datetime
import json
from pathlib import Path
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .config import BUDGETS_DIR, SETTINGS_PATH
from .models import Expense, PaySchedule, SavingsGoal

BUDGET_FILE_VERSION = 1
DEFAULT_SETTINGS: Dict[str, Any] = {
    'rounding_option': 0,
    'buffer_percentage': 0,
    'current_pay': 0.0,
    'pay_schedule': {'start_date': '', 'frequency': 'bi-weekly'},
}


def _default_settings() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Path | None = None) -> Dict[str, Any]:
    target = path or SETTINGS_PATH
    if not target.exists():
        return _default_settings()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError):
        return _default_settings()
    if not isinstance(data, dict):
        return _default_settings()
    merged = _default_settings()
    merged.update({k: v for k, v in data.items() if k in DEFAULT_SETTINGS})
    if not isinstance(merged['pay_schedule'], dict):
        merged['pay_schedule'] = _default_settings()['pay_schedule']
    return merged


def save_settings(settings: Mapping[str, Any], path: Path | None = None) -> None:
    target = path or SETTINGS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {k: v for k, v in settings.items() if k in DEFAULT_SETTINGS}
    pay_schedule = payload.get('pay_schedule')
    if isinstance(pay_schedule, PaySchedule):
        payload['pay_schedule'] = pay_schedule.to_dict()
    with target.open('w', encoding='utf-8') as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)


def safe_filename(name: str, default: str = 'budget') -> str:
    """Sanitize a budget name for use as a file stem.

    Example:
        >>> safe_filename("Fall Budget 2024!")
        'Fall_Budget_2024'
    """
    if not name:
        return default
    cleaned = ''.join(c for c in name if c.isalnum() or c in {' ', '_', '-'})
    cleaned = re.sub(r'_+', '_', cleaned.strip().replace(' ', '_')).rstrip('_')
    return cleaned or default


def get_budget_path(name: str, directory: Path | None = None) -> Path:
    return (directory or BUDGETS_DIR) / f"{safe_filename(name)}.json"


def _as_dict(record: Union[Expense, SavingsGoal, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(record, (Expense, SavingsGoal)):
        return record.to_dict()
    return dict(record)


def save_budget(
    name: str,
    expenses: Iterable[Union[Expense, Mapping[str, Any]]],
    goals: Iterable[Union[SavingsGoal, Mapping[str, Any]]],
    settings: Optional[Mapping[str, Any]] = None,
    directory: Path | None = None,
) -> Path:
    """Write a budget file and return its path.

    Raises:
        ValueError: If ``name`` is empty
        OSError: If the file cannot be written
    """
    if not name or not name.strip():
        raise ValueError("Budget name cannot be empty")

    target = get_budget_path(name, directory)
    merged_settings = _default_settings()
    merged_settings.update({k: v for k, v in (settings or {}).items() if k in DEFAULT_SETTINGS})
    if isinstance(merged_settings['pay_schedule'], PaySchedule):
        merged_settings['pay_schedule'] = merged_settings['pay_schedule'].to_dict()

    payload = {
        'name': name.strip(),
        'expenses': [_as_dict(e) for e in expenses],
        'goals': [_as_dict(g) for g in goals],
        'settings': merged_settings,
        'saved_at': datetime.now().isoformat(timespec='seconds'),
        'version': BUDGET_FILE_VERSION,
    }
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open('w', encoding='utf-8') as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
    except OSError as e:
        raise OSError(f"Failed to save budget to {target}: {e}") from e
    return target


def load_budget(path: Path) -> Dict[str, Any]:
    """Read a budget file.

    Expenses and goals come back as dataclass records; entries that are not
    JSON objects are skipped.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with Path(path).open('r', encoding='utf-8') as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        data = {}

    settings = _default_settings()
    raw_settings = data.get('settings')
    if isinstance(raw_settings, dict):
        settings.update({k: v for k, v in raw_settings.items() if k in DEFAULT_SETTINGS})

    expenses: List[Expense] = [
        Expense.from_dict(item) for item in data.get('expenses') or [] if isinstance(item, dict)
    ]
    goals: List[SavingsGoal] = [
        SavingsGoal.from_dict(item) for item in data.get('goals') or [] if isinstance(item, dict)
    ]
    return {
        'name': data.get('name', Path(path).stem),
        'expenses': expenses,
        'goals': goals,
        'settings': settings,
        'saved_at': data.get('saved_at'),
        'version': data.get('version', BUDGET_FILE_VERSION),
    }
