import requests

from stresslab.ai import llm_client
from stresslab.core import pipeline
from stresslab.core.models import AssessRequest, Profile
from stresslab.core.prompts import build_summary_prompt
from stresslab.core.sample_payloads import DEMO_PROFILE


def _request():
    return AssessRequest(profile=Profile(**DEMO_PROFILE))


def test_summary_is_deterministic_when_llm_disabled(monkeypatch):
    monkeypatch.setattr(llm_client, "LLM_SUMMARY_ENABLED", False)
    first = pipeline.run_assessment(_request())
    second = pipeline.run_assessment(_request())
    assert first.summary == second.summary
    assert "66/100 (Vulnerable)" in first.summary
    assert "Emergency Cost" in first.summary


def test_llm_summary_used_when_available(monkeypatch):
    monkeypatch.setattr(llm_client, "LLM_SUMMARY_ENABLED", True)
    seen = {}

    def fake_query(prompt, max_tokens=None, temperature=None):
        seen["prompt"] = prompt
        return {"choices": [{"message": {"content": "Summary:\n- model text"}}]}

    monkeypatch.setattr(llm_client, "query_llm", fake_query)
    result = pipeline.run_assessment(_request())
    assert result.summary.startswith("Summary:\n- model text")
    assert "Runway (days): 40" in seen["prompt"]


def test_llm_failure_falls_back(monkeypatch):
    monkeypatch.setattr(llm_client, "LLM_SUMMARY_ENABLED", True)
    monkeypatch.setattr(llm_client, "LLM_API_KEY", None)
    result = pipeline.run_assessment(_request())
    assert "66/100 (Vulnerable)" in result.summary


def test_extract_text_handles_empty_choices():
    assert llm_client.extract_text({"choices": []}) == ""
    assert llm_client.extract_text({"choices": [{"text": " hi "}]}) == "hi"


def test_check_llm_online(monkeypatch):
    class Resp:
        status_code = 404

    monkeypatch.setattr(llm_client.requests, "get", lambda *a, **kw: Resp())
    assert llm_client.check_llm_online(timeout=0.1)

    def boom(*a, **kw):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(llm_client.requests, "get", boom)
    assert not llm_client.check_llm_online(timeout=0.1)


def test_prompt_lists_tests_and_diagnoses():
    prompt = build_summary_prompt(
        DEMO_PROFILE,
        {"runway_days": 40, "score": 66, "band": "Vulnerable"},
        [{"name": "Expense Spike", "severity": "mild", "passed": True, "shocked_runway_days": 34}],
        [],
    )
    assert "Expense Spike (mild): PASS, 34 days" in prompt
    assert "Diagnosed Weaknesses:\n- None" in prompt
    assert "Total monthly expenses (burn rate): $2,200" in prompt
