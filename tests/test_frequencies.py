import pytest

from budgie.frequencies import (
    FREQUENCY_OPTIONS,
    FrequencyOption,
    calculate_monthly_amount,
    convert_frequency,
    days_between_occurrences,
    find_frequency,
    normalize_options,
    pay_period_label,
)


def test_default_table_has_expected_yearly_counts():
    weeks = {option.value: option.weeks_per_year for option in FREQUENCY_OPTIONS}
    assert weeks['weekly'] == 52
    assert weeks['bi-weekly'] == 26
    assert weeks['every-3-weeks'] == 17.33
    assert weeks['monthly'] == 12
    assert weeks['every-6-weeks'] == 8.67
    assert weeks['every-7-weeks'] == 7.43
    assert weeks['every-8-weeks'] == 6.5
    assert weeks['quarterly'] == 4
    assert weeks['annually'] == 1
    assert weeks['per-paycheck'] == 26


def test_find_frequency_handles_unknown_and_empty_values():
    assert find_frequency('quarterly').label == 'Quarterly'
    assert find_frequency('sometimes') is None
    assert find_frequency('') is None
    assert find_frequency(None) is None


def test_normalize_options_accepts_ui_dictionaries():
    options = normalize_options([
        {'value': 'weekly', 'label': 'Weekly', 'weeksPerYear': 52, 'paychecksPerMonth': 4.33},
        {'value': 'custom', 'weeks_per_year': 'junk'},
        'not an option',
    ])
    assert [o.value for o in options] == ['weekly', 'custom']
    assert options[0] == FrequencyOption('weekly', 'Weekly', 52, 4.33)
    assert options[1].weeks_per_year == 0


def test_monthly_amount_conversions():
    assert calculate_monthly_amount(100, 'monthly') == 100
    assert calculate_monthly_amount(100, 'weekly') == pytest.approx(100 * 52 / 12)
    assert calculate_monthly_amount(1200, 'annually') == pytest.approx(100)
    assert calculate_monthly_amount(0, 'weekly') == 0
    assert calculate_monthly_amount(100, 'unknown') == 0


def test_convert_frequency_goes_through_a_yearly_total():
    assert convert_frequency(100, 'weekly', 'weekly') == 100
    assert convert_frequency(100, 'weekly', 'bi-weekly') == pytest.approx(200)
    assert convert_frequency(300, 'quarterly', 'monthly') == pytest.approx(100)
    assert convert_frequency(100, 'weekly', 'unknown') == 0
    assert convert_frequency(-5, 'weekly', 'monthly') == 0


def test_days_between_occurrences_defaults_to_two_weeks():
    assert days_between_occurrences('weekly') == 7
    assert days_between_occurrences('quarterly') == 91
    assert days_between_occurrences('every-8-weeks') == 56
    assert days_between_occurrences('whenever') == 14
    assert days_between_occurrences(None) == 14


def test_pay_period_labels():
    assert pay_period_label('bi-weekly') == 'paycheck'
    assert pay_period_label('semi-monthly') == 'pay period'
    assert pay_period_label('monthly') == 'payment'
    assert pay_period_label(None) == 'paycheck'
