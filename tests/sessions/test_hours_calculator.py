from datetime import datetime

from src.workforce.workforce.sessions.calculator.standard_calculator import StandardHoursCalculator


def test_working_minutes_subtract_breaks():
    calc = StandardHoursCalculator(8)
    assert calc.working_minutes(start=datetime(2025, 1, 6, 9), end=datetime(2025, 1, 6, 18), break_minutes=30) == 510


def test_working_minutes_never_negative():
    calc = StandardHoursCalculator(8)
    assert calc.working_minutes(start=datetime(2025, 1, 6, 9), end=datetime(2025, 1, 6, 9, 20), break_minutes=45) == 0


def test_overtime_only_past_the_shift():
    calc = StandardHoursCalculator(8)
    assert calc.overtime_minutes(479) == 0
    assert calc.overtime_minutes(480) == 0
    assert calc.overtime_minutes(510) == 30


def test_default_shift_is_nine_hours():
    breakdown = StandardHoursCalculator().breakdown(
        start=datetime(2025, 1, 6, 8), end=datetime(2025, 1, 6, 18), break_minutes=0
    )
    assert breakdown.working_minutes == 600
    assert breakdown.overtime_minutes == 60


def test_partial_minutes_are_floored():
    calc = StandardHoursCalculator(8)
    assert calc.working_minutes(start=datetime(2025, 1, 6, 9, 0, 0), end=datetime(2025, 1, 6, 9, 1, 59), break_minutes=0) == 1
