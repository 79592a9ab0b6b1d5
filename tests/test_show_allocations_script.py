import importlib.util
from pathlib import Path

from budgie.models import Expense, SavingsGoal
from budgie.storage import save_budget

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'show_allocations.py'


def _load_script_module():
    spec = importlib.util.spec_from_file_location('show_allocations_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _budget_file(tmp_path, settings=None):
    return save_budget(
        'Household',
        [Expense(amount=1300, frequency='monthly', name='Rent', category_id='housing')],
        [SavingsGoal(target_amount=5000, monthly_contribution=260, name='Emergency Fund', category_id='savings')],
        settings or {'current_pay': 2000, 'pay_schedule': {'start_date': '2024-01-05', 'frequency': 'bi-weekly'}},
        directory=tmp_path,
    )


def test_script_prints_breakdown_and_paydays(tmp_path, capsys):
    module = _load_script_module()
    exit_code = module.main([str(_budget_file(tmp_path)), '--buffer', '10'])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert 'Budget: Household' in out
    assert 'Total allocations: $720.00 (36.0%)' in out
    assert 'Buffer (10%): $72.00' in out
    assert 'Emergency Fund' in out
    assert 'Next paychecks:' in out


def test_script_pay_flag_overrides_file(tmp_path, capsys):
    module = _load_script_module()
    exit_code = module.main([str(_budget_file(tmp_path)), '--pay', '1000', '--percent'])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert 'Take-home pay: $1000.00' in out
    assert '• Rent: 60.0%/paycheck' in out


def test_script_requires_positive_pay(tmp_path, capsys):
    module = _load_script_module()
    path = _budget_file(tmp_path, settings={'current_pay': 0})
    assert module.main([str(path)]) == 1
    assert 'Take-home pay must be positive' in capsys.readouterr().out


def test_script_reports_missing_file(tmp_path, capsys):
    module = _load_script_module()
    assert module.main([str(tmp_path / 'nope.json')]) == 1
    assert 'Budget file not found' in capsys.readouterr().out
