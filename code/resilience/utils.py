from typing import Any, Mapping

from .schemas import PROFILE_FIELDS, BaselineProfile


class IncompleteProfileError(ValueError):
    """Raised when a profile payload is missing one of the six required fields."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(f"Profile is incomplete, missing: {', '.join(self.missing)}")


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def safe_div(a: float, b: float, default: float = 0.0) -> float:
    if b == 0:
        return default
    return a / b


def parse_profile(payload: Mapping[str, Any]) -> BaselineProfile:
    # All six fields must be present; blanks count as missing.
    missing = [name for name in PROFILE_FIELDS if payload.get(name) in (None, "")]
    if missing:
        raise IncompleteProfileError(missing)
    values = {}
    for name in PROFILE_FIELDS:
        try:
            value = float(payload[name])
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a number, got {payload[name]!r}") from None
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
        values[name] = value
    return BaselineProfile(**values)


def expense_breakdown(profile: BaselineProfile) -> dict:
    total = profile.total_expenses
    return {
        "fixed": {
            "items": {"rent": profile.rent, "transportation": profile.transportation},
            "total": profile.fixed_expenses,
            "share_pct": round(safe_div(profile.fixed_expenses, total) * 100),
        },
        "flexible": {
            "items": {"groceries": profile.groceries, "other": profile.other},
            "total": profile.flexible_expenses,
            "share_pct": round(safe_div(profile.flexible_expenses, total) * 100),
        },
        "total": total,
        "burn_rate": profile.burn_rate,
    }
