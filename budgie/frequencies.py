"""Recurrence frequencies and the conversions between them."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .config import MONTHS_PER_YEAR
from .models import to_float

logger = logging.getLogger(__name__)

PER_PAYCHECK = 'per-paycheck'


@dataclass(frozen=True)
class FrequencyOption:
    value: str
    label: str
    weeks_per_year: float
    paychecks_per_month: float = 0.0
    is_regular: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FrequencyOption':
        weeks = data.get('weeks_per_year', data.get('weeksPerYear', 0))
        per_month = data.get('paychecks_per_month', data.get('paychecksPerMonth', 0))
        return cls(
            value=str(data.get('value', '')),
            label=str(data.get('label', data.get('value', ''))),
            weeks_per_year=to_float(weeks),
            paychecks_per_month=to_float(per_month),
            is_regular=bool(data.get('is_regular', data.get('isRegular', True))),
        )


FrequencyLike = Union[FrequencyOption, Mapping[str, Any]]

FREQUENCY_OPTIONS: List[FrequencyOption] = [
    FrequencyOption('weekly', 'Weekly', 52, 4.33),
    FrequencyOption('bi-weekly', 'Bi-weekly', 26, 2.17),
    FrequencyOption('every-3-weeks', 'Every 3 weeks', 17.33, 1.44, is_regular=False),
    FrequencyOption('monthly', 'Monthly', 12, 1),
    FrequencyOption('every-5-weeks', 'Every 5 weeks', 10.4, 0.87, is_regular=False),
    FrequencyOption('every-6-weeks', 'Every 6 weeks', 8.67, 0.72, is_regular=False),
    FrequencyOption('every-7-weeks', 'Every 7 weeks', 7.43, 0.62, is_regular=False),
    FrequencyOption('every-8-weeks', 'Every 8 weeks', 6.5, 0.54, is_regular=False),
    FrequencyOption('bi-monthly', 'Every other month', 6, 0.5),
    FrequencyOption('quarterly', 'Quarterly', 4, 0.33),
    FrequencyOption('semi-annually', 'Every 6 months', 2, 0.17),
    FrequencyOption('annually', 'Annually', 1, 0.083),
    FrequencyOption(PER_PAYCHECK, 'Per Paycheck (Direct)', 26, 2.17),
]

# Approximate spacing in days, used for calendars and occurrence counts
DAYS_BETWEEN: Dict[str, int] = {
    'weekly': 7,
    'bi-weekly': 14,
    'semi-monthly': 15,
    'monthly': 30,
    'every-3-weeks': 21,
    'every-6-weeks': 42,
    'every-7-weeks': 49,
    'every-8-weeks': 56,
    'quarterly': 91,
    'annually': 365,
    PER_PAYCHECK: 14,
    'once': 365,
}

PAY_PERIOD_LABELS: Dict[str, str] = {
    'weekly': 'paycheck',
    'bi-weekly': 'paycheck',
    'semi-monthly': 'pay period',
    'monthly': 'payment',
}


def normalize_options(options: Optional[Iterable[FrequencyLike]]) -> List[FrequencyOption]:
    """Return ``options`` as FrequencyOption objects, defaulting to the built-in table."""
    if options is None:
        return FREQUENCY_OPTIONS
    normalized: List[FrequencyOption] = []
    for option in options:
        if isinstance(option, FrequencyOption):
            normalized.append(option)
        elif isinstance(option, Mapping):
            normalized.append(FrequencyOption.from_dict(option))
    return normalized


def find_frequency(value: Optional[str], options: Optional[Iterable[FrequencyLike]] = None) -> Optional[FrequencyOption]:
    if not value:
        return None
    for option in normalize_options(options):
        if option.value == value:
            return option
    return None


def usable_frequency(value: Optional[str], options: Optional[Iterable[FrequencyLike]] = None) -> Optional[FrequencyOption]:
    """Like :func:`find_frequency` but rejects entries without a positive yearly count."""
    option = find_frequency(value, options)
    if option is None or option.weeks_per_year <= 0:
        if option is not None:
            logger.warning("Invalid frequency data for %s: %r", value, option)
        return None
    return option


def calculate_monthly_amount(amount: float, frequency: str, options: Optional[Iterable[FrequencyLike]] = None) -> float:
    """Express ``amount`` paid at ``frequency`` as a monthly figure."""
    if not amount or amount <= 0:
        return 0.0
    if frequency == 'monthly':
        return float(amount)
    option = usable_frequency(frequency, options)
    if option is None:
        return 0.0
    return amount * option.weeks_per_year / MONTHS_PER_YEAR


def convert_frequency(
    amount: float,
    from_frequency: str,
    to_frequency: str,
    options: Optional[Iterable[FrequencyLike]] = None,
) -> float:
    """Convert an amount between two frequencies by way of a yearly total."""
    if not amount or amount <= 0:
        return 0.0
    if from_frequency == to_frequency:
        return float(amount)
    source = usable_frequency(from_frequency, options)
    target = usable_frequency(to_frequency, options)
    if source is None or target is None:
        return 0.0
    return amount * source.weeks_per_year / target.weeks_per_year


def days_between_occurrences(frequency: Optional[str]) -> int:
    return DAYS_BETWEEN.get(frequency or '', 14)


def pay_period_label(frequency: Optional[str]) -> str:
    """Friendly noun for one pay period, e.g. ``'paycheck'``."""
    return PAY_PERIOD_LABELS.get(frequency or '', 'paycheck')
