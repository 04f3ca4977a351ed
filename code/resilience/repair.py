import logging
import math
from typing import Optional

from .health import health_breakdown, round_half_up
from .policy import (
    DAYS_PER_MONTH,
    EXPENSE_SLIDER_FLOOR,
    EXPENSE_SLIDER_MAX_FACTOR,
    EXPENSE_SLIDER_MIN_FACTOR,
    EXPENSE_SLIDER_STEP,
    INCOME_SLIDER_FLOOR,
    INCOME_SLIDER_MAX_FACTOR,
    INCOME_SLIDER_MIN_FACTOR,
    INCOME_SLIDER_STEP,
    MAX_EXPENSE_REDUCTION_PCT,
    MAX_SAVINGS_INCOME_MULTIPLE,
    PLANNING_HORIZON_MONTHS,
    SAVINGS_SLIDER_MAX_FACTOR,
    SAVINGS_SLIDER_MAX_FLOOR,
    SAVINGS_SLIDER_STEP,
)
from .runway import compute_runway_days
from .schemas import BaselineProfile, EqualizerBounds, EqualizerReading, RepairRequirements, SliderRange
from .stress import count_passed, run_stress_tests

logger = logging.getLogger(__name__)


def solve_for_target(baseline: BaselineProfile, target_days: int) -> RepairRequirements:
    """Minimum single changes that would each reach ``target_days`` of runway.

    The savings, expense and income paths are alternatives; any one of them
    reaches the target on its own.
    """
    target_days = int(target_days)
    total = baseline.total_expenses
    current = compute_runway_days(total, baseline.savings)

    if target_days > 0:
        required_savings = int(math.ceil(target_days * total / DAYS_PER_MONTH))
        required_expenses = int(math.floor(baseline.savings * DAYS_PER_MONTH / target_days)) if baseline.savings > 0 else 0
    else:
        required_savings = 0
        required_expenses = int(math.ceil(total))

    if target_days <= current:
        logger.debug("target %s days already reached (runway %s)", target_days, current)
        return RepairRequirements(
            target_days=target_days,
            current_runway_days=current,
            already_achieved=True,
            required_savings=required_savings,
            savings_increase=0.0,
            required_expenses=required_expenses,
            expense_reduction=0.0,
            expense_reduction_percent=0,
            income_increase=0,
            required_income=baseline.income,
            is_achievable=True,
        )

    savings_increase = max(0.0, required_savings - baseline.savings)

    expense_reduction = max(0.0, total - required_expenses)
    expense_reduction_percent = round_half_up(expense_reduction / total * 100) if total > 0 else 0

    monthly_savings_needed = savings_increase / PLANNING_HORIZON_MONTHS
    current_monthly_surplus = baseline.income - total
    income_increase = max(0, int(math.ceil(monthly_savings_needed - current_monthly_surplus)))

    is_achievable = (
        expense_reduction_percent <= MAX_EXPENSE_REDUCTION_PCT
        or savings_increase <= baseline.income * MAX_SAVINGS_INCOME_MULTIPLE
    )
    return RepairRequirements(
        target_days=target_days,
        current_runway_days=current,
        already_achieved=False,
        required_savings=required_savings,
        savings_increase=savings_increase,
        required_expenses=required_expenses,
        expense_reduction=expense_reduction,
        expense_reduction_percent=expense_reduction_percent,
        income_increase=income_increase,
        required_income=baseline.income + income_increase,
        is_achievable=is_achievable,
    )


def _slider(lo: float, hi: float, step: float) -> SliderRange:
    # A floor above the ceiling (tiny or zero baselines) widens the ceiling.
    return SliderRange(min=lo, max=max(lo, hi), step=step)


def equalizer_bounds(baseline: BaselineProfile) -> EqualizerBounds:
    total = baseline.total_expenses
    return EqualizerBounds(
        income=_slider(
            max(INCOME_SLIDER_FLOOR, baseline.income * INCOME_SLIDER_MIN_FACTOR),
            baseline.income * INCOME_SLIDER_MAX_FACTOR,
            INCOME_SLIDER_STEP,
        ),
        expenses=_slider(
            max(EXPENSE_SLIDER_FLOOR, total * EXPENSE_SLIDER_MIN_FACTOR),
            total * EXPENSE_SLIDER_MAX_FACTOR,
            EXPENSE_SLIDER_STEP,
        ),
        savings=_slider(
            0.0,
            max(baseline.savings * SAVINGS_SLIDER_MAX_FACTOR, SAVINGS_SLIDER_MAX_FLOOR),
            SAVINGS_SLIDER_STEP,
        ),
    )


def default_equalizer_state(baseline: BaselineProfile) -> dict:
    bounds = equalizer_bounds(baseline)
    return {
        "income": bounds.income.clamp(baseline.income),
        "expenses": bounds.expenses.clamp(baseline.total_expenses),
        "savings": bounds.savings.clamp(baseline.savings),
    }


def evaluate_equalizer(
    baseline: BaselineProfile,
    income: Optional[float] = None,
    expenses: Optional[float] = None,
    savings: Optional[float] = None,
) -> EqualizerReading:
    """Re-run runway, score and stress tests for hypothetical slider values.

    Values left as None take the reset state; every value is clamped into the
    range derived from the baseline.
    """
    bounds = equalizer_bounds(baseline)
    defaults = default_equalizer_state(baseline)
    income = bounds.income.clamp(defaults["income"] if income is None else income)
    expenses = bounds.expenses.clamp(defaults["expenses"] if expenses is None else expenses)
    savings = bounds.savings.clamp(defaults["savings"] if savings is None else savings)

    health = health_breakdown(income, expenses, savings)
    tests = run_stress_tests(income, expenses, savings)
    return EqualizerReading(
        income=income,
        expenses=expenses,
        savings=savings,
        runway_days=compute_runway_days(expenses, savings),
        score=health.score,
        band=health.band,
        tests=tests,
        pass_count=count_passed(tests),
    )


def equalizer_configuration(reading: EqualizerReading) -> dict:
    """Rounded snapshot of the slider values and their outcome."""
    return {
        "income": round_half_up(reading.income),
        "expenses": round_half_up(reading.expenses),
        "savings": round_half_up(reading.savings),
        "runway_days": reading.runway_days,
        "score": reading.score,
    }
