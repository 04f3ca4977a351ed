import logging
import math

from .policy import (
    BAND_AT_RISK,
    BAND_STABLE,
    BAND_VULNERABLE,
    EXPENSE_RATIO_COMFORT,
    HEALTH_WEIGHT_EXPENSE_RATIO,
    HEALTH_WEIGHT_RUNWAY,
    HEALTH_WEIGHT_SURPLUS,
    RUNWAY_SCORE_CEILING_DAYS,
    STABLE_SCORE_MIN,
    SURPLUS_RATIO_TARGET,
    VULNERABLE_SCORE_MIN,
)
from .runway import compute_runway_days
from .schemas import HealthBreakdown
from .utils import clamp

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def surplus_subscore(income: float, expenses: float) -> float:
    if income <= 0:
        return 0.0
    ratio = (income - expenses) / income
    return clamp(ratio / SURPLUS_RATIO_TARGET * 100.0, 0.0, 100.0)


def runway_subscore(runway_days: int) -> float:
    return clamp(runway_days / RUNWAY_SCORE_CEILING_DAYS * 100.0, 0.0, 100.0)


def expense_ratio_subscore(income: float, expenses: float) -> float:
    if income <= 0:
        return 0.0
    ratio = expenses / income
    if ratio >= 1:
        return 0.0
    return clamp((1.0 - ratio) / (1.0 - EXPENSE_RATIO_COMFORT) * 100.0, 0.0, 100.0)


def score_band(score: float) -> str:
    if score >= STABLE_SCORE_MIN:
        return BAND_STABLE
    if score >= VULNERABLE_SCORE_MIN:
        return BAND_VULNERABLE
    return BAND_AT_RISK


def health_breakdown(income: float, expenses: float, savings: float) -> HealthBreakdown:
    surplus = surplus_subscore(income, expenses)
    runway = runway_subscore(compute_runway_days(expenses, savings))
    expense_ratio = expense_ratio_subscore(income, expenses)
    weighted = (
        surplus * HEALTH_WEIGHT_SURPLUS
        + runway * HEALTH_WEIGHT_RUNWAY
        + expense_ratio * HEALTH_WEIGHT_EXPENSE_RATIO
    )
    score = int(clamp(round_half_up(weighted), 0, 100))
    logger.debug(
        "health score %s (surplus=%.1f runway=%.1f expense_ratio=%.1f)",
        score, surplus, runway, expense_ratio,
    )
    return HealthBreakdown(
        surplus=round(surplus, 2),
        runway=round(runway, 2),
        expense_ratio=round(expense_ratio, 2),
        score=score,
        band=score_band(score),
    )


def health_score(income: float, expenses: float, savings: float) -> int:
    return health_breakdown(income, expenses, savings).score
