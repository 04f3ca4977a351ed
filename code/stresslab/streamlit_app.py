# streamlit_app.py
import os
import sys

import streamlit as st

# Make `resilience` and `stresslab` importable when run with `streamlit run`.
CODE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if CODE_ROOT not in sys.path:
    sys.path.insert(0, CODE_ROOT)

from resilience.diagnosis import diagnose, no_weaknesses_message  # noqa: E402
from resilience.health import health_score, score_band  # noqa: E402
from resilience.policy import (  # noqa: E402
    STABLE_SCORE_MIN,
    TARGET_RUNWAY_DEFAULT,
    TARGET_RUNWAY_MAX,
    TARGET_RUNWAY_MIN,
    VULNERABLE_SCORE_MIN,
)
from resilience.repair import (  # noqa: E402
    default_equalizer_state,
    equalizer_bounds,
    equalizer_configuration,
    evaluate_equalizer,
    solve_for_target,
)
from resilience.runway import compute_runway_days  # noqa: E402
from resilience.schemas import PROFILE_FIELDS  # noqa: E402
from resilience.stress import count_passed, run_stress_tests  # noqa: E402
from resilience.utils import IncompleteProfileError, expense_breakdown, parse_profile  # noqa: E402
from stresslab.ai.llm_client import LLM_SUMMARY_ENABLED, check_llm_online  # noqa: E402
from stresslab.core.prompts import format_currency  # noqa: E402
from stresslab.core.sample_payloads import DEMO_PROFILE  # noqa: E402

FIELD_LABELS = {
    "income": ("Monthly Income", "Take-home pay after taxes"),
    "rent": ("Rent / Mortgage", None),
    "transportation": ("Transportation", None),
    "groceries": ("Groceries", None),
    "other": ("Other", None),
    "savings": ("Current Savings", "Money accessible within 24 hours"),
}

st.set_page_config(page_title="Financial Stress Test", layout="centered")
st.title("Financial Stress Test")
st.caption("We stress-test your finances the same way engineers stress-test bridges.")

if "baseline" not in st.session_state:
    st.session_state.baseline = None
    st.session_state.stage = 0


def reset_session():
    for key in list(st.session_state.keys()):
        del st.session_state[key]


def reset_sliders(baseline):
    state = default_equalizer_state(baseline)
    st.session_state.slider_income = state["income"]
    st.session_state.slider_expenses = state["expenses"]
    st.session_state.slider_savings = state["savings"]


def equalizer_slider(label: str, rng, key: str):
    # st.slider rejects equal bounds; a collapsed range is shown as a fixed value.
    if rng.min >= rng.max:
        st.session_state[key] = rng.min
        st.metric(label, format_currency(rng.min), help="Fixed for this baseline")
        return
    st.slider(label, rng.min, rng.max, step=rng.step, key=key)


def score_color(score: int) -> str:
    if score >= STABLE_SCORE_MIN:
        return "green"
    if score >= VULNERABLE_SCORE_MIN:
        return "orange"
    return "red"


with st.sidebar:
    st.header("Progress")
    st.write(["Baseline", "Health", "Stress tests", "Diagnosis", "Repair"][st.session_state.get("stage", 0)])
    if LLM_SUMMARY_ENABLED:
        if check_llm_online():
            st.success("Narrative model reachable")
        else:
            st.warning("Narrative model unreachable; summaries use the built-in template.")
    if st.button("Start over"):
        reset_session()
        st.rerun()

# --- Baseline -----------------------------------------------------------------
if st.session_state.baseline is None:
    defaults = st.session_state.pop("demo", {})
    with st.form("baseline"):
        values = {}
        for name in PROFILE_FIELDS:
            label, helper = FIELD_LABELS[name]
            values[name] = st.text_input(label, value=str(defaults.get(name, "")), help=helper)
        submitted = st.form_submit_button("Run Stress Test")
    if st.button("Use Demo Profile"):
        st.session_state.demo = DEMO_PROFILE
        st.rerun()
    if submitted:
        try:
            st.session_state.baseline = parse_profile(values)
        except IncompleteProfileError as exc:
            st.error(f"Please fill in every field ({', '.join(exc.missing)}).")
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.session_state.stage = 1
            reset_sliders(st.session_state.baseline)
            st.rerun()
    st.stop()

baseline = st.session_state.baseline
total = baseline.total_expenses

# --- Stage 1: health ---------------------------------------------------------
st.subheader("Stage 1 · Financial Health")
runway = compute_runway_days(total, baseline.savings)
score = health_score(baseline.income, total, baseline.savings)
col1, col2 = st.columns(2)
col1.metric("Runway", f"{runway} days", help="Until savings reach $0")
col2.metric("Resilience score", score)
col2.markdown(f":{score_color(score)}[{score_band(score)}]")
st.write(f"Monthly burn rate: **{format_currency(baseline.burn_rate)}**")
breakdown = expense_breakdown(baseline)
fixed_col, flexible_col = st.columns(2)
for col, key, title in ((fixed_col, "fixed", "Fixed Expenses"), (flexible_col, "flexible", "Flexible Expenses")):
    group = breakdown[key]
    col.markdown(f"**{title}** ({group['share_pct']}%)")
    for item, amount in group["items"].items():
        col.write(f"{item.title()}: {format_currency(amount)}")

if st.session_state.stage < 2:
    if st.button("Run stress tests"):
        st.session_state.stage = 2
        st.rerun()
    st.stop()

# --- Stage 2: stress tests ---------------------------------------------------
st.subheader("Stage 2 · Stress Tests")
tests = run_stress_tests(baseline.income, total, baseline.savings)
st.write(f"{count_passed(tests)} of {len(tests)} tests passed")
for test in tests:
    with st.container(border=True):
        st.markdown(f"**{test.name}** · {test.severity} · {'PASS' if test.passed else 'FAIL'}")
        st.caption(test.scenario)
        (st.success if test.passed else st.error)(test.consequence)

if st.session_state.stage < 3:
    if st.button("Diagnose"):
        st.session_state.stage = 3
        st.rerun()
    st.stop()

# --- Stage 3: diagnosis ------------------------------------------------------
st.subheader("Stage 3 · Diagnosis")
diagnoses = diagnose(baseline, tests)
if not diagnoses:
    (st.success if count_passed(tests) == len(tests) else st.info)(no_weaknesses_message(tests))
else:
    st.write("Primary weaknesses detected")
    for d in diagnoses:
        st.markdown(f"**{d.title}**  \n{d.description}")

if st.session_state.stage < 4:
    if st.button("Enter repair mode"):
        st.session_state.stage = 4
        reset_sliders(baseline)
        st.rerun()
    st.stop()

# --- Stage 4: repair mode ----------------------------------------------------
st.subheader("Stage 4 · Repair Mode")
st.caption("Explore what changes affect your runway")

target = st.number_input(
    "I want this many days of runway",
    min_value=TARGET_RUNWAY_MIN,
    max_value=TARGET_RUNWAY_MAX,
    value=TARGET_RUNWAY_DEFAULT,
    step=1,
)
req = solve_for_target(baseline, int(target))
if req.already_achieved:
    st.success("Target already achieved with current configuration")
else:
    st.write("Any one of these changes reaches the target:")
    if req.savings_increase > 0:
        st.write(f"Increase savings by **+{format_currency(req.savings_increase)}**")
    if 0 < req.expense_reduction_percent <= 50:
        st.write(
            f"Reduce expenses by **{req.expense_reduction_percent}%** "
            f"(-{format_currency(req.expense_reduction)}/mo)"
        )
    if req.income_increase > 0:
        st.write(f"Increase income by **+{format_currency(req.income_increase)}/mo**")
    if not req.is_achievable:
        st.warning("This target is a stretch for your current situation.")

st.markdown("#### Equalizer")
bounds = equalizer_bounds(baseline)
equalizer_slider("Income", bounds.income, "slider_income")
equalizer_slider("Expenses", bounds.expenses, "slider_expenses")
equalizer_slider("Savings", bounds.savings, "slider_savings")
reading = evaluate_equalizer(
    baseline,
    st.session_state.slider_income,
    st.session_state.slider_expenses,
    st.session_state.slider_savings,
)
col1, col2, col3 = st.columns(3)
col1.metric("Runway", f"{reading.runway_days}d")
col2.metric("Score", reading.score)
col3.metric("Stress tests", f"{reading.pass_count}/{len(reading.tests)} passed")
st.write(" · ".join(f"{t.severity}: {'PASS' if t.passed else 'FAIL'}" for t in reading.tests))

config = equalizer_configuration(reading)
with st.container(border=True):
    st.markdown("**Current Configuration**")
    st.write(f"Income: {format_currency(config['income'])}/mo")
    st.write(f"Expenses: {format_currency(config['expenses'])}/mo")
    st.write(f"Savings: {format_currency(config['savings'])}")
    st.write(f"Result: **{config['runway_days']} days runway**")
