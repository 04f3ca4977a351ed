from typing import Dict, List


def format_currency(value: float) -> str:
    return f"${value:,.0f}"


def build_summary_prompt(
    profile: Dict[str, float],
    health: Dict[str, float],
    tests: List[Dict[str, object]],
    diagnoses: List[Dict[str, object]],
) -> str:
    total_expenses = profile["rent"] + profile["transportation"] + profile["groceries"] + profile["other"]
    test_lines = "\n".join(
        f"- {t['name']} ({t['severity']}): {'PASS' if t['passed'] else 'FAIL'}, "
        f"{t['shocked_runway_days']} days of runway under the shock"
        for t in tests
    )
    diagnosis_lines = "\n".join(f"- {d['title']}" for d in diagnoses) or "- None"
    return f"""
You are a budgeting coach reviewing the results of a personal-finance stress test.
Generate a concise, practical summary based on the figures below. Every number is already computed; do not recompute or invent figures.
Do NOT provide investment advice, product recommendations, or promises of returns.
Focus on cash flow, emergency savings, fixed costs and income.
Keep the tone supportive and solution-focused, never alarmist.

Return in this format:
Summary:
- ...
- ...
Actions:
- ...
- ...
- ...
Warnings:
- ...

Baseline Profile:
- Monthly income: {format_currency(profile['income'])}
- Rent / mortgage: {format_currency(profile['rent'])}
- Transportation: {format_currency(profile['transportation'])}
- Groceries: {format_currency(profile['groceries'])}
- Other: {format_currency(profile['other'])}
- Total monthly expenses (burn rate): {format_currency(total_expenses)}
- Liquid savings: {format_currency(profile['savings'])}

Computed Metrics:
- Runway (days): {health['runway_days']}
- Resilience score (0-100): {health['score']} ({health['band']})

Stress Tests:
{test_lines}

Diagnosed Weaknesses:
{diagnosis_lines}
""".strip()
