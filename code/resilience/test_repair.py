from resilience.health import health_score
from resilience.repair import (
    default_equalizer_state,
    equalizer_bounds,
    equalizer_configuration,
    evaluate_equalizer,
    solve_for_target,
)
from resilience.runway import compute_runway_days
from resilience.schemas import BaselineProfile

THIN_BUFFER = BaselineProfile(income=4000, rent=1200, transportation=300, groceries=400, other=300, savings=3000)


def test_target_requirements():
    baseline = BaselineProfile(income=3000, rent=1000, transportation=200, groceries=500, other=300, savings=1000)
    req = solve_for_target(baseline, 90)
    assert not req.already_achieved
    assert req.current_runway_days == 15
    assert req.required_savings == 6000
    assert req.savings_increase == 5000
    assert req.required_expenses == 333
    assert req.expense_reduction == 1667
    assert req.expense_reduction_percent == 83
    # the current 1000/mo surplus already covers 5000 over six months
    assert req.income_increase == 0
    assert req.required_income == 3000
    assert req.is_achievable


def test_unachievable_target():
    baseline = BaselineProfile(income=1000, rent=1200, transportation=300, groceries=300, other=200, savings=100)
    req = solve_for_target(baseline, 180)
    assert req.required_savings == 12000
    assert req.savings_increase == 11900
    assert req.required_expenses == 16
    assert req.expense_reduction_percent == 99
    assert req.income_increase == 2984
    assert req.required_income == 3984
    assert not req.is_achievable


def test_zero_savings_target():
    baseline = BaselineProfile(income=3000, rent=1000, transportation=200, groceries=500, other=300, savings=0)
    req = solve_for_target(baseline, 30)
    assert req.required_expenses == 0
    assert req.expense_reduction_percent == 100
    assert req.savings_increase == 2000
    assert req.is_achievable


def test_already_achieved_zeroes_deltas():
    req = solve_for_target(THIN_BUFFER, 30)
    assert req.already_achieved
    assert req.savings_increase == 0
    assert req.expense_reduction == 0
    assert req.expense_reduction_percent == 0
    assert req.income_increase == 0
    assert req.required_income == THIN_BUFFER.income
    assert req.is_achievable


def test_already_achieved_with_deficit_needs_no_income():
    baseline = BaselineProfile(income=2000, rent=1500, transportation=300, groceries=300, other=200, savings=200)
    req = solve_for_target(baseline, 2)
    assert req.already_achieved
    assert req.income_increase == 0


def test_non_positive_target_is_achieved():
    assert solve_for_target(THIN_BUFFER, 0).already_achieved


def test_equalizer_bounds():
    bounds = equalizer_bounds(THIN_BUFFER)
    assert (bounds.income.min, bounds.income.max) == (2000, 8000)
    assert (bounds.expenses.min, bounds.expenses.max) == (1100, 3300)
    assert (bounds.savings.min, bounds.savings.max) == (0, 9000)


def test_equalizer_bounds_small_baseline():
    baseline = BaselineProfile(income=0, rent=50, transportation=0, groceries=50, other=0, savings=1000)
    bounds = equalizer_bounds(baseline)
    assert (bounds.income.min, bounds.income.max) == (500, 500)
    assert (bounds.expenses.min, bounds.expenses.max) == (200, 200)
    assert bounds.savings.max == 5000


def test_equalizer_defaults_match_baseline():
    state = default_equalizer_state(THIN_BUFFER)
    assert state == {"income": 4000, "expenses": 2200, "savings": 3000}
    reading = evaluate_equalizer(THIN_BUFFER)
    assert reading.runway_days == compute_runway_days(2200, 3000) == 40
    assert reading.score == health_score(4000, 2200, 3000)
    assert len(reading.tests) == 3
    assert reading.pass_count == 2


def test_equalizer_clamps_values():
    reading = evaluate_equalizer(THIN_BUFFER, income=100000, expenses=1, savings=-50)
    assert reading.income == 8000
    assert reading.expenses == 1100
    assert reading.savings == 0


def test_lowering_expenses_never_hurts():
    bounds = equalizer_bounds(THIN_BUFFER)
    base = evaluate_equalizer(THIN_BUFFER)
    cut = evaluate_equalizer(THIN_BUFFER, expenses=bounds.expenses.min)
    assert cut.runway_days >= base.runway_days
    assert cut.score >= base.score
    assert cut.pass_count >= base.pass_count


def test_configuration_snapshot_is_rounded():
    reading = evaluate_equalizer(THIN_BUFFER, income=4123.6, expenses=2050.2, savings=3333.3)
    config = equalizer_configuration(reading)
    assert config["income"] == 4124
    assert config["expenses"] == 2050
    assert config["savings"] == 3333
    assert config["runway_days"] == reading.runway_days


def test_configuration_rounds_halves_up():
    reading = evaluate_equalizer(THIN_BUFFER, income=4100.5, expenses=2050.5, savings=2500.5)
    config = equalizer_configuration(reading)
    assert config["income"] == 4101
    assert config["expenses"] == 2051
    assert config["savings"] == 2501
