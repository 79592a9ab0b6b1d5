from datetime import date

from budgie.formatting import format_currency, format_date


def test_format_currency_defaults():
    assert format_currency(1234.56) == '$1,234.56'
    assert format_currency(0) == '$0.00'
    assert format_currency(-42.5) == '-$42.50'


def test_format_currency_options():
    assert format_currency(1234.56, include_sign=False) == '1,234.56'
    assert format_currency(1234.56, show_cents=False) == '$1,235'
    assert format_currency(-5, include_sign=False) == '-5.00'


def test_format_currency_handles_missing_values():
    assert format_currency(None) == '$0.00'
    assert format_currency(float('nan')) == '$0.00'


def test_format_date():
    assert format_date(date(2024, 1, 5)) == 'Jan 05, 2024'
    assert format_date(None) == ''
