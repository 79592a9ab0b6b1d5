"""Funding progress, deadlines and urgency for expenses and goals."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .formatting import format_date
from .frequencies import pay_period_label
from .models import parse_date

STATUS_ONGOING = 'ongoing'
STATUS_COMPLETE = 'complete'
STATUS_ON_TRACK = 'on-track'
STATUS_BEHIND = 'behind'

FUNDING_STATUS_THRESHOLDS = [
    (100, 'Fully Funded'),
    (75, 'Almost There'),
    (50, 'Halfway There'),
    (25, 'Getting Started'),
]

URGENCY_LEVELS = [
    (80, '🔴', 'Critical'),
    (60, '🟡', 'High'),
    (30, '🟢', 'Medium'),
]


@dataclass
class FundingTimeline:
    has_deadline: bool
    status: str
    message: str
    is_fully_funded: bool = False
    total_needed: float = 0.0
    already_saved: float = 0.0
    remaining_needed: float = 0.0
    overfunded: float = 0.0
    paychecks_needed: int = 0
    available_paychecks: int = 0
    funding_date: Optional[date] = None
    last_paycheck_date: Optional[date] = None
    is_on_track: bool = False
    required_allocation: float = 0.0
    current_allocation: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_funding_progress(already_saved: float, target_amount: float) -> float:
    """Percentage of ``target_amount`` already saved, capped at 100."""
    if not target_amount or target_amount <= 0:
        return 0.0
    return min(100.0, (already_saved / target_amount) * 100)


def is_fully_funded(already_saved: float, target_amount: float) -> bool:
    if not target_amount or target_amount <= 0:
        return False
    return already_saved >= target_amount


def calculate_remaining_needed(already_saved: float, target_amount: float) -> float:
    return max(0.0, target_amount - already_saved)


def funding_status_text(progress: float) -> str:
    for threshold, label in FUNDING_STATUS_THRESHOLDS:
        if progress >= threshold:
            return label
    return 'Just Beginning'


def _paycheck_date(paycheck: Union[date, Mapping[str, Any]]) -> Optional[date]:
    if isinstance(paycheck, Mapping):
        return parse_date(paycheck.get('date'))
    return parse_date(paycheck)


def calculate_funding_timeline(
    amount: float,
    already_saved: float = 0.0,
    due_date: Optional[Union[str, date]] = None,
    biweekly_amount: float = 0.0,
    relevant_paychecks: Optional[Sequence[Union[date, Mapping[str, Any]]]] = None,
    pay_frequency: str = 'bi-weekly',
) -> FundingTimeline:
    """Project when an obligation will be funded at its current allocation.

    Args:
        amount: Total needed
        already_saved: Amount saved so far
        due_date: Deadline; without one the timeline is open-ended
        biweekly_amount: Current per-paycheck allocation
        relevant_paychecks: Paychecks before the deadline, as dates or as the
            dictionaries returned by ``schedule.relevant_paychecks``
        pay_frequency: Pay frequency, used only for the message wording

    Returns:
        FundingTimeline with status ``ongoing``, ``complete``, ``on-track``
        or ``behind``
    """
    if not due_date:
        return FundingTimeline(has_deadline=False, status=STATUS_ONGOING, message='No deadline set')

    total_needed = amount or 0.0
    remaining = max(0.0, total_needed - already_saved)
    if remaining <= 0:
        return FundingTimeline(
            has_deadline=True,
            status=STATUS_COMPLETE,
            message='Fully funded!',
            is_fully_funded=True,
            total_needed=total_needed,
            already_saved=already_saved,
            overfunded=already_saved - total_needed,
        )

    paydays: List[Optional[date]] = [_paycheck_date(p) for p in (relevant_paychecks or [])]
    paychecks_needed = math.ceil(remaining / biweekly_amount) if biweekly_amount > 0 else 0
    available = len(paydays)

    funding_date = None
    running_total = already_saved
    for index in range(min(paychecks_needed, available)):
        running_total += biweekly_amount
        if running_total >= total_needed:
            funding_date = paydays[index]
            break

    timeline = FundingTimeline(
        has_deadline=True,
        status='',
        message='',
        total_needed=total_needed,
        already_saved=already_saved,
        remaining_needed=remaining,
        paychecks_needed=paychecks_needed,
        available_paychecks=available,
        funding_date=funding_date,
        last_paycheck_date=paydays[-1] if paydays else None,
        is_on_track=paychecks_needed <= available,
        required_allocation=remaining / available if available > 0 else 0.0,
        current_allocation=biweekly_amount,
    )
    timeline.status = STATUS_ON_TRACK if timeline.is_on_track else STATUS_BEHIND
    timeline.message = timeline_message(timeline, pay_frequency)
    return timeline


def timeline_message(timeline: FundingTimeline, pay_frequency: str = 'bi-weekly') -> str:
    label = pay_period_label(pay_frequency)
    if timeline.is_on_track and timeline.funding_date:
        plural = '' if timeline.paychecks_needed == 1 else 's'
        return f"Ready in {timeline.paychecks_needed} {label}{plural} ({format_date(timeline.funding_date)})"
    if not timeline.is_on_track and timeline.last_paycheck_date:
        shortfall = timeline.required_allocation - timeline.current_allocation
        return (
            f"Behind schedule - need ${timeline.required_allocation:.2f}/{label} "
            f"(currently ${timeline.current_allocation:.2f}) - shortfall: ${shortfall:.2f}/{label}"
        )
    return 'Unable to calculate timeline'


def calculate_urgency_score(timeline: FundingTimeline) -> float:
    """0-100, higher is more urgent."""
    if not timeline.has_deadline or timeline.is_fully_funded:
        return 0.0
    if not timeline.is_on_track:
        return 100.0
    ratio = timeline.paychecks_needed / max(timeline.available_paychecks, 1)
    return min(100.0, ratio * 100)


def urgency_indicator(score: float) -> Dict[str, str]:
    for threshold, emoji, label in URGENCY_LEVELS:
        if score >= threshold:
            return {'emoji': emoji, 'label': label}
    return {'emoji': '⚪', 'label': 'Low'}
