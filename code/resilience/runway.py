import math

from .policy import DAYS_PER_MONTH, RUNWAY_CAP_DAYS


def compute_runway_days(expenses: float, savings: float) -> int:
    """Whole days the savings cover at the given monthly burn.

    Partial days are floored. Zero expenses (or anything that would exceed the
    cap) return RUNWAY_CAP_DAYS so callers never see infinity.
    """
    if expenses <= 0:
        return RUNWAY_CAP_DAYS
    days = max(savings, 0.0) * DAYS_PER_MONTH / expenses
    if days >= RUNWAY_CAP_DAYS:
        return RUNWAY_CAP_DAYS
    return int(math.floor(days))
