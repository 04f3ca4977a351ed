import logging
from dataclasses import asdict
from typing import Dict, List

from resilience.diagnosis import diagnose, no_weaknesses_message
from resilience.health import health_breakdown
from resilience.repair import equalizer_bounds, equalizer_configuration, evaluate_equalizer, solve_for_target
from resilience.runway import compute_runway_days
from resilience.schemas import BaselineProfile, Diagnosis, StressTestResult
from resilience.stress import count_passed, run_stress_tests
from resilience.utils import expense_breakdown
from stresslab.ai import llm_client

from .models import (
    Aggregates,
    AssessRequest,
    AssessResponse,
    DiagnosisOut,
    EqualizerRequest,
    EqualizerResponse,
    ExpenseGroup,
    HealthMetrics,
    Profile,
    SliderBounds,
    StressTest,
    TargetRequest,
    TargetResponse,
)
from .prompts import build_summary_prompt, format_currency

logger = logging.getLogger(__name__)


def to_baseline(profile: Profile) -> BaselineProfile:
    return BaselineProfile(**profile.model_dump())


def _tests_out(results: List[StressTestResult]) -> List[StressTest]:
    return [StressTest(**asdict(r)) for r in results]


def _diagnoses_out(diagnoses: List[Diagnosis]) -> List[DiagnosisOut]:
    return [
        DiagnosisOut(label=d.label, title=d.title, description=d.description, related_tests=list(d.related_tests))
        for d in diagnoses
    ]


def _deterministic_summary(
    baseline: BaselineProfile,
    health: HealthMetrics,
    tests: List[StressTest],
    diagnoses: List[DiagnosisOut],
) -> str:
    surplus = baseline.monthly_surplus
    passed = sum(1 for t in tests if t.passed)

    if surplus > 0:
        cash_line = f"- You keep {format_currency(surplus)}/mo after expenses, so savings can keep growing."
    elif surplus < 0:
        cash_line = f"- Expenses exceed income by {format_currency(abs(surplus))}/mo, so savings shrink every month."
    else:
        cash_line = "- Income and expenses are roughly break-even, so savings stay flat."

    lines: List[str] = [
        "Summary:",
        f"- Resilience score is {health.score}/100 ({health.band}) with {health.runway_days} days of runway.",
        cash_line,
        f"- {passed} of {len(tests)} stress tests passed.",
        "",
        "Actions:",
    ]
    labels = {d.label for d in diagnoses}
    if "buffer" in labels:
        lines.append("- Build an emergency fund of at least one month of expenses before anything else.")
    if "fixed" in labels:
        lines.append("- Look for ways to lower rent or transportation, the costs that are hardest to cut later.")
    if "income" in labels:
        lines.append("- Close the monthly gap: trim flexible spending and look for additional income.")
    if not labels:
        lines.append("- Keep the current structure and keep adding to savings each month.")

    lines.extend(["", "Warnings:"])
    failed = [t for t in tests if not t.passed]
    if failed:
        for t in failed:
            lines.append(f"- {t.name}: {t.consequence}")
    else:
        lines.append("- Larger or combined shocks than the ones tested can still strain your budget.")
    return "\n".join(lines).strip()


def _llm_summary(baseline: BaselineProfile, health: HealthMetrics, tests, diagnoses) -> str:
    if not llm_client.LLM_SUMMARY_ENABLED:
        return ""
    prompt = build_summary_prompt(
        asdict(baseline),
        health.model_dump(),
        [t.model_dump() for t in tests],
        [d.model_dump() for d in diagnoses],
    )
    try:
        response = llm_client.query_llm(prompt)
        return llm_client.extract_text(response).strip()
    except Exception as exc:
        logger.warning("LLM summary unavailable, using deterministic summary: %s", exc)
        return ""


def run_assessment(payload: AssessRequest) -> AssessResponse:
    baseline = to_baseline(payload.profile)
    total = baseline.total_expenses

    breakdown = expense_breakdown(baseline)
    aggregates = Aggregates(
        fixed_expenses=baseline.fixed_expenses,
        flexible_expenses=baseline.flexible_expenses,
        total_expenses=total,
        burn_rate=baseline.burn_rate,
        monthly_surplus=baseline.monthly_surplus,
        fixed=ExpenseGroup(**breakdown["fixed"]),
        flexible=ExpenseGroup(**breakdown["flexible"]),
    )

    scored = health_breakdown(baseline.income, total, baseline.savings)
    health = HealthMetrics(
        runway_days=compute_runway_days(total, baseline.savings),
        score=scored.score,
        band=scored.band,
        surplus_subscore=scored.surplus,
        runway_subscore=scored.runway,
        expense_ratio_subscore=scored.expense_ratio,
    )

    results = run_stress_tests(baseline.income, total, baseline.savings)
    tests = _tests_out(results)
    diagnoses = _diagnoses_out(diagnose(baseline, results))
    logger.info(
        "assessment: score=%s runway=%s passed=%s diagnoses=%s",
        health.score, health.runway_days, count_passed(results), [d.label for d in diagnoses],
    )

    summary = _llm_summary(baseline, health, tests, diagnoses)
    if not summary:
        summary = _deterministic_summary(baseline, health, tests, diagnoses)
    if not diagnoses:
        summary = f"{summary}\n\n{no_weaknesses_message(results)}"

    return AssessResponse(
        aggregates=aggregates,
        health=health,
        stress_tests=tests,
        pass_count=count_passed(results),
        diagnoses=diagnoses,
        no_weaknesses=not diagnoses,
        summary=summary,
    )


def run_target(payload: TargetRequest) -> TargetResponse:
    requirements = solve_for_target(to_baseline(payload.profile), payload.target_days)
    logger.info(
        "repair target %s days: achieved=%s achievable=%s",
        requirements.target_days, requirements.already_achieved, requirements.is_achievable,
    )
    return TargetResponse(**asdict(requirements))


def run_equalizer(payload: EqualizerRequest) -> EqualizerResponse:
    baseline = to_baseline(payload.profile)
    bounds = equalizer_bounds(baseline)
    reading = evaluate_equalizer(baseline, payload.income, payload.expenses, payload.savings)
    bounds_out: Dict[str, SliderBounds] = {
        name: SliderBounds(**asdict(getattr(bounds, name))) for name in ("income", "expenses", "savings")
    }
    return EqualizerResponse(
        bounds=bounds_out,
        income=reading.income,
        expenses=reading.expenses,
        savings=reading.savings,
        runway_days=reading.runway_days,
        score=reading.score,
        band=reading.band,
        stress_tests=_tests_out(reading.tests),
        pass_count=reading.pass_count,
        configuration=equalizer_configuration(reading),
    )
