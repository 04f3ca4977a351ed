import logging
from typing import Any, Dict, List, Optional

from .policy import (
    EMERGENCY_COST_MONTHS,
    EMERGENCY_MIN_RUNWAY_DAYS,
    EXPENSE_SHOCK_PCT,
    INCOME_SHOCK_PCT,
    MIN_RUNWAY_DAYS,
    RUNWAY_CAP_DAYS,
)
from .runway import compute_runway_days
from .schemas import SEVERITY_MILD, SEVERITY_MODERATE, SEVERITY_SEVERE, StressTestResult

logger = logging.getLogger(__name__)

INCOME_DROP = "income_drop"
EXPENSE_SPIKE = "expense_spike"
EMERGENCY_COST = "emergency_cost"

SCENARIOS: List[Dict[str, Any]] = [
    {
        "id": INCOME_DROP,
        "name": "Income Drop",
        "severity": SEVERITY_MODERATE,
        "scenario": "Your income falls by {income_pct:.0f}% and stays there.",
        "pass": "You can absorb the lower income: {days} days of runway at the new monthly balance.",
        "fail": "The reduced income leaves a monthly gap that drains savings in {days} days.",
        "covered": "Your reduced income still covers your expenses, so savings are not touched.",
    },
    {
        "id": EXPENSE_SPIKE,
        "name": "Expense Spike",
        "severity": SEVERITY_MILD,
        "scenario": "Your monthly expenses rise by {expense_pct:.0f}% (rent increase, car repair, medical bill).",
        "pass": "Savings still cover {days} days at the higher burn rate.",
        "fail": "At the higher burn rate savings last only {days} days.",
        "covered": "With no recurring expenses there is nothing for the spike to erode.",
    },
    {
        "id": EMERGENCY_COST,
        "name": "Emergency Cost",
        "severity": SEVERITY_SEVERE,
        "scenario": "An emergency costing {emergency_months:g} month(s) of expenses is paid from savings.",
        "pass": "After paying for the emergency you keep {days} days of runway.",
        "fail": "After paying for the emergency only {days} days of runway remain.",
        "covered": "With no recurring expenses the emergency cannot leave you short.",
    },
]


def _income_drop(income: float, expenses: float, savings: float) -> Optional[int]:
    shocked_income = income * (1 - INCOME_SHOCK_PCT / 100.0)
    deficit = expenses - shocked_income
    if deficit <= 0:
        return None
    return compute_runway_days(deficit, savings)


def _expense_spike(income: float, expenses: float, savings: float) -> Optional[int]:
    if expenses <= 0:
        return None
    return compute_runway_days(expenses * (1 + EXPENSE_SHOCK_PCT / 100.0), savings)


def _emergency_cost(income: float, expenses: float, savings: float) -> Optional[int]:
    if expenses <= 0:
        return None
    remaining = max(0.0, savings - expenses * EMERGENCY_COST_MONTHS)
    return compute_runway_days(expenses, remaining)


_SHOCKS = {
    INCOME_DROP: (_income_drop, MIN_RUNWAY_DAYS),
    EXPENSE_SPIKE: (_expense_spike, MIN_RUNWAY_DAYS),
    EMERGENCY_COST: (_emergency_cost, EMERGENCY_MIN_RUNWAY_DAYS),
}


def run_stress_tests(income: float, expenses: float, savings: float) -> List[StressTestResult]:
    params = {
        "income_pct": INCOME_SHOCK_PCT,
        "expense_pct": EXPENSE_SHOCK_PCT,
        "emergency_months": EMERGENCY_COST_MONTHS,
    }
    results: List[StressTestResult] = []
    for d in SCENARIOS:
        shock, threshold = _SHOCKS[d["id"]]
        days = shock(income, expenses, savings)
        if days is None:
            # the shock never draws on savings
            days, passed, consequence = RUNWAY_CAP_DAYS, True, d["covered"]
        else:
            passed = days >= threshold
            consequence = d["pass" if passed else "fail"].format(days=days)
        results.append(
            StressTestResult(
                id=d["id"],
                name=d["name"],
                severity=d["severity"],
                scenario=d["scenario"].format(**params),
                passed=passed,
                consequence=consequence,
                shocked_runway_days=days,
            )
        )
    logger.debug("stress tests: %s", {r.id: r.passed for r in results})
    return results


def count_passed(results: List[StressTestResult]) -> int:
    return sum(1 for r in results if r.passed)
