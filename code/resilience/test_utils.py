import pytest

from resilience.utils import IncompleteProfileError, expense_breakdown, parse_profile

PAYLOAD = {"income": "4000", "rent": 1200, "transportation": 300, "groceries": 400, "other": 300, "savings": 3000}


def test_parse_complete_profile():
    profile = parse_profile(PAYLOAD)
    assert profile.income == 4000.0
    assert profile.fixed_expenses == 1500
    assert profile.flexible_expenses == 700
    assert profile.total_expenses == profile.burn_rate == 2200


def test_missing_fields_are_reported():
    payload = dict(PAYLOAD, groceries="")
    payload.pop("savings")
    with pytest.raises(IncompleteProfileError) as exc:
        parse_profile(payload)
    assert exc.value.missing == ("groceries", "savings")


def test_negative_and_non_numeric_rejected():
    with pytest.raises(ValueError):
        parse_profile(dict(PAYLOAD, rent=-1))
    with pytest.raises(ValueError):
        parse_profile(dict(PAYLOAD, other="lots"))


def test_expense_breakdown_shares():
    breakdown = expense_breakdown(parse_profile(PAYLOAD))
    assert breakdown["fixed"]["total"] == 1500
    assert breakdown["fixed"]["items"] == {"rent": 1200, "transportation": 300}
    assert breakdown["fixed"]["share_pct"] == 68
    assert breakdown["flexible"]["share_pct"] == 32
    assert breakdown["burn_rate"] == 2200


def test_expense_breakdown_zero_expenses():
    payload = dict(PAYLOAD, rent=0, transportation=0, groceries=0, other=0)
    breakdown = expense_breakdown(parse_profile(payload))
    assert breakdown["fixed"]["share_pct"] == 0
    assert breakdown["total"] == 0
