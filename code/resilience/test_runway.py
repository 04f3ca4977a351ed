from resilience.policy import RUNWAY_CAP_DAYS
from resilience.runway import compute_runway_days


def test_runway_floors_partial_days():
    assert compute_runway_days(2200, 3000) == 40
    assert compute_runway_days(2300, 200) == 2


def test_runway_exact_month_multiple():
    assert compute_runway_days(1000, 3000) == 90


def test_runway_zero_expenses_is_capped():
    assert compute_runway_days(0, 0) == RUNWAY_CAP_DAYS
    assert compute_runway_days(0, 5000) == RUNWAY_CAP_DAYS


def test_runway_never_exceeds_cap():
    assert compute_runway_days(1, 10_000_000) == RUNWAY_CAP_DAYS


def test_runway_zero_savings():
    assert compute_runway_days(1500, 0) == 0


def test_runway_monotonic_in_savings_and_expenses():
    savings_steps = [0, 100, 250, 1000, 3000, 9000, 50000]
    expense_steps = [50, 200, 900, 2200, 5000, 12000]
    for expenses in expense_steps:
        days = [compute_runway_days(expenses, s) for s in savings_steps]
        assert all(d >= 0 for d in days)
        assert days == sorted(days)
    for savings in savings_steps:
        days = [compute_runway_days(e, savings) for e in expense_steps]
        assert days == sorted(days, reverse=True)
