import os

from streamlit.testing.v1 import AppTest

from resilience.repair import default_equalizer_state
from resilience.schemas import BaselineProfile
from stresslab.core.sample_payloads import DEMO_PROFILE

APP_PATH = os.path.join(os.path.dirname(__file__), "streamlit_app.py")


def _repair_mode(profile: BaselineProfile) -> AppTest:
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["baseline"] = profile
    at.session_state["stage"] = 4
    state = default_equalizer_state(profile)
    at.session_state["slider_income"] = state["income"]
    at.session_state["slider_expenses"] = state["expenses"]
    at.session_state["slider_savings"] = state["savings"]
    return at.run()


def test_repair_mode_renders_three_sliders():
    at = _repair_mode(BaselineProfile(**DEMO_PROFILE))
    assert not at.exception
    assert [s.label for s in at.slider] == ["Income", "Expenses", "Savings"]


def test_repair_mode_with_zero_income_shows_fixed_value():
    at = _repair_mode(BaselineProfile(**dict(DEMO_PROFILE, income=0)))
    assert not at.exception
    assert [s.label for s in at.slider] == ["Expenses", "Savings"]
    assert "Income" in [m.label for m in at.metric]


def test_repair_mode_with_tiny_expenses_shows_fixed_value():
    profile = BaselineProfile(income=3000, rent=50, transportation=0, groceries=40, other=0, savings=800)
    at = _repair_mode(profile)
    assert not at.exception
    assert [s.label for s in at.slider] == ["Income", "Savings"]


def test_diagnosis_stage_reports_failed_tests():
    at = _repair_mode(BaselineProfile(**DEMO_PROFILE))
    assert not at.exception
    assert not any("passed all stress tests" in s.value for s in at.success)
    assert any("1 of 3 stress tests failed" in i.value for i in at.info)
