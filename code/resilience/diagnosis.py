import logging
from typing import Iterable, List

from .policy import BUFFER_THRESHOLD_DAYS, FIXED_SHARE_THRESHOLD
from .runway import compute_runway_days
from .schemas import (
    DIAGNOSIS_BUFFER,
    DIAGNOSIS_FIXED,
    DIAGNOSIS_INCOME,
    BaselineProfile,
    Diagnosis,
    StressTestResult,
)
from .stress import EMERGENCY_COST, EXPENSE_SPIKE, INCOME_DROP

logger = logging.getLogger(__name__)

DIAGNOSIS_TITLES = {
    DIAGNOSIS_FIXED: "Fixed expenses too high",
    DIAGNOSIS_BUFFER: "Insufficient savings buffer",
    DIAGNOSIS_INCOME: "Income too low for expense structure",
}

DIAGNOSIS_DESCRIPTIONS = {
    DIAGNOSIS_FIXED: "Rent and transportation consume a large portion of income, leaving little flexibility.",
    DIAGNOSIS_BUFFER: "Your savings cannot absorb unexpected costs or income gaps.",
    DIAGNOSIS_INCOME: "Current income cannot sustainably support your expense structure.",
}

# Stress tests whose failure points at each weakness.
DIAGNOSIS_TESTS = {
    DIAGNOSIS_FIXED: (EXPENSE_SPIKE,),
    DIAGNOSIS_BUFFER: (EMERGENCY_COST,),
    DIAGNOSIS_INCOME: (INCOME_DROP,),
}

NO_WEAKNESSES_MESSAGE = "No critical weaknesses detected. Your financial foundation passed all stress tests."
NO_STRUCTURAL_WEAKNESSES_MESSAGE = (
    "No structural weaknesses detected, but {failed} of {total} stress tests failed. "
    "See the warnings above for the shocks your budget cannot absorb yet."
)


def fixed_expenses_too_high(profile: BaselineProfile) -> bool:
    return profile.fixed_share > FIXED_SHARE_THRESHOLD


def buffer_too_thin(profile: BaselineProfile) -> bool:
    return compute_runway_days(profile.total_expenses, profile.savings) < BUFFER_THRESHOLD_DAYS


def structural_deficit(profile: BaselineProfile) -> bool:
    return profile.total_expenses > profile.income


_PREDICATES = (
    (DIAGNOSIS_FIXED, fixed_expenses_too_high),
    (DIAGNOSIS_BUFFER, buffer_too_thin),
    (DIAGNOSIS_INCOME, structural_deficit),
)


def diagnose(profile: BaselineProfile, test_results: Iterable[StressTestResult] = ()) -> List[Diagnosis]:
    """Root-cause labels for a profile, always in fixed/buffer/income order.

    Labels come from the profile's own ratios. Failed stress tests are only
    attached to the matching label as supporting evidence.
    """
    failed = {r.id for r in test_results if not r.passed}
    out: List[Diagnosis] = []
    for label, predicate in _PREDICATES:
        if not predicate(profile):
            continue
        out.append(
            Diagnosis(
                label=label,
                title=DIAGNOSIS_TITLES[label],
                description=DIAGNOSIS_DESCRIPTIONS[label],
                related_tests=tuple(t for t in DIAGNOSIS_TESTS[label] if t in failed),
            )
        )
    logger.debug("diagnoses: %s", [d.label for d in out])
    return out


def no_weaknesses_message(test_results: Iterable[StressTestResult]) -> str:
    """Closing text for an evaluated, empty diagnosis list."""
    results = list(test_results)
    failed = sum(1 for r in results if not r.passed)
    if not failed:
        return NO_WEAKNESSES_MESSAGE
    return NO_STRUCTURAL_WEAKNESSES_MESSAGE.format(failed=failed, total=len(results))
