from datetime import date, timedelta

import pytest

from budgie.progress import (
    calculate_funding_progress,
    calculate_funding_timeline,
    calculate_remaining_needed,
    calculate_urgency_score,
    funding_status_text,
    is_fully_funded,
    urgency_indicator,
)


def _paydays(count, start=date(2024, 7, 5)):
    return [start + timedelta(days=14 * i) for i in range(count)]


def test_funding_progress_is_capped_and_safe():
    assert calculate_funding_progress(50, 200) == 25
    assert calculate_funding_progress(300, 200) == 100
    assert calculate_funding_progress(10, 0) == 0


def test_fully_funded_and_remaining():
    assert is_fully_funded(200, 200)
    assert not is_fully_funded(199.99, 200)
    assert not is_fully_funded(10, 0)
    assert calculate_remaining_needed(250, 200) == 0
    assert calculate_remaining_needed(50, 200) == 150


@pytest.mark.parametrize('progress,label', [
    (100, 'Fully Funded'),
    (80, 'Almost There'),
    (50, 'Halfway There'),
    (30, 'Getting Started'),
    (5, 'Just Beginning'),
])
def test_funding_status_text(progress, label):
    assert funding_status_text(progress) == label


def test_timeline_without_deadline_is_ongoing():
    timeline = calculate_funding_timeline(500, 0, None, 50, _paydays(3))
    assert not timeline.has_deadline
    assert timeline.status == 'ongoing'
    assert timeline.message == 'No deadline set'
    assert calculate_urgency_score(timeline) == 0


def test_timeline_for_funded_obligation_reports_overfunding():
    timeline = calculate_funding_timeline(500, 650, '2024-12-01', 50, _paydays(3))
    assert timeline.is_fully_funded
    assert timeline.status == 'complete'
    assert timeline.overfunded == 150
    assert calculate_urgency_score(timeline) == 0


def test_timeline_on_track_finds_funding_date():
    paydays = _paydays(5)
    timeline = calculate_funding_timeline(300, 0, '2024-10-01', 100, paydays)

    assert timeline.status == 'on-track'
    assert timeline.paychecks_needed == 3
    assert timeline.available_paychecks == 5
    assert timeline.funding_date == paydays[2]
    assert timeline.last_paycheck_date == paydays[-1]
    assert timeline.required_allocation == pytest.approx(60)
    assert timeline.message.startswith('Ready in 3 paychecks')
    assert calculate_urgency_score(timeline) == pytest.approx(60)
    assert urgency_indicator(calculate_urgency_score(timeline))['label'] == 'High'


def test_timeline_accepts_relevant_paycheck_dicts():
    paychecks = [{'date': d, 'amount': 2000, 'type': 'primary', 'index': i} for i, d in enumerate(_paydays(2))]
    timeline = calculate_funding_timeline(100, 0, date(2024, 9, 1), 100, paychecks)
    assert timeline.funding_date == paychecks[0]['date']
    assert timeline.message.startswith('Ready in 1 paycheck (')


def test_timeline_behind_schedule():
    timeline = calculate_funding_timeline(1000, 100, '2024-08-15', 100, _paydays(3))

    assert timeline.status == 'behind'
    assert timeline.paychecks_needed == 9
    assert timeline.funding_date is None
    assert timeline.required_allocation == pytest.approx(300)
    assert timeline.message == (
        'Behind schedule - need $300.00/paycheck (currently $100.00) - shortfall: $200.00/paycheck'
    )
    assert calculate_urgency_score(timeline) == 100
    assert urgency_indicator(100) == {'emoji': '🔴', 'label': 'Critical'}


def test_timeline_without_allocation_cannot_be_calculated():
    timeline = calculate_funding_timeline(1000, 0, '2024-08-15', 0, _paydays(3))
    assert timeline.paychecks_needed == 0
    assert timeline.message == 'Unable to calculate timeline'


def test_urgency_levels():
    assert urgency_indicator(65)['label'] == 'High'
    assert urgency_indicator(30)['label'] == 'Medium'
    assert urgency_indicator(10) == {'emoji': '⚪', 'label': 'Low'}
