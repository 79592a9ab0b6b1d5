from datetime import date, datetime

from budgie.models import Expense, PaySchedule, SavingsGoal, parse_date, to_float


def test_to_float_treats_junk_as_zero():
    assert to_float('12.5') == 12.5
    assert to_float('') == 0
    assert to_float(None) == 0
    assert to_float('abc') == 0
    assert to_float(float('nan')) == 0
    assert to_float(float('inf')) == 0


def test_parse_date_variants():
    assert parse_date('2024-03-09') == date(2024, 3, 9)
    assert parse_date('2024-03-09T10:00:00') == date(2024, 3, 9)
    assert parse_date(datetime(2024, 3, 9, 23, 59)) == date(2024, 3, 9)
    assert parse_date(date(2024, 3, 9)) == date(2024, 3, 9)
    assert parse_date('2024-02-30') is None
    assert parse_date('') is None
    assert parse_date(None) is None


def test_expense_from_ui_dictionary():
    expense = Expense.from_dict({
        'id': 7,
        'name': 'Car insurance',
        'amount': '600',
        'frequency': 'every-6-weeks',
        'alreadySaved': '150.5',
        'priorityState': 'paused',
        'categoryId': 3,
        'dueDate': '2024-09-01',
        'isRecurringExpense': True,
    })
    assert expense.id == '7'
    assert expense.amount == 600
    assert expense.already_saved == 150.5
    assert expense.category_id == '3'
    assert expense.is_recurring
    assert not expense.is_active


def test_coerce_keeps_dataclass_instances():
    goal = SavingsGoal(target_amount=100, monthly_contribution=10)
    assert SavingsGoal.coerce(goal) is goal
    assert SavingsGoal.coerce({'target_amount': 100}).monthly_contribution == 0
    assert Expense.coerce(None).amount == 0


def test_pay_schedule_from_dict_and_back():
    schedule = PaySchedule.from_dict({
        'startDate': '2024-01-05',
        'splitPaycheck': True,
        'primaryAmount': '1800',
        'secondaryAmount': 400,
        'secondaryDaysEarly': '2',
        'secondaryAccountId': 2,
    })
    assert schedule.frequency == ''
    assert schedule.start == date(2024, 1, 5)
    assert schedule.secondary_days_early == 2
    assert schedule.secondary_account_id == '2'
    assert PaySchedule(start_date=date(2024, 1, 5)).to_dict()['start_date'] == '2024-01-05'
