"""Evaluation requester: preconditions, request shape, strict response validation."""

import copy
import json

import groq
import httpx
import pytest

from conftest import SAMPLE_EVALUATION, FakeGroqClient, json_client, make_raw_resume
from src.errors import (
    ConfigurationError,
    OracleEmptyResponseError,
    OracleMalformedResponseError,
    OracleUnavailableError,
)
from src.pipeline.evaluate import Evaluator, build_evaluation_prompt, parse_evaluation, request_evaluation
from src.pipeline.normalize import normalize_candidate

JD = "Frontend Engineer\n- 3+ years React and TypeScript"


@pytest.fixture
def candidate():
    return normalize_candidate(make_raw_resume())


def _payload(**overrides) -> dict:
    data = copy.deepcopy(SAMPLE_EVALUATION)
    data.update(overrides)
    return data


def _evaluate(candidate, client, jd=JD, api_key="test-key", model="test-model"):
    return request_evaluation(candidate, jd, api_key=api_key, model=model, client=client)


def test_valid_response_parses(candidate):
    client = json_client(SAMPLE_EVALUATION)
    ev = _evaluate(candidate, client)
    assert ev.overall_score == 82
    assert ev.recommendation == "strong"
    assert ev.role_suitability[0].role == "Frontend Engineer"
    assert ev.skill_gaps == ["Playwright"]
    assert ev.to_dict() == SAMPLE_EVALUATION


def test_request_is_single_json_mode_low_temperature_call(candidate):
    client = json_client(SAMPLE_EVALUATION)
    _evaluate(candidate, client)
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.1
    assert call["response_format"] == {"type": "json_object"}
    prompt = call["messages"][0]["content"]
    assert JD.strip() in prompt
    assert "jane.doe@example.com" in prompt
    assert '"strong" for 75-100' in prompt


def test_prompt_is_deterministic(candidate):
    assert build_evaluation_prompt(candidate, JD) == build_evaluation_prompt(candidate, JD)


@pytest.mark.parametrize("jd", [None, "", "   \n"])
def test_missing_job_description_fails_before_calling_model(candidate, jd):
    client = json_client(SAMPLE_EVALUATION)
    with pytest.raises(ConfigurationError, match="Job description"):
        _evaluate(candidate, client, jd=jd)
    assert client.calls == []


def test_missing_api_key_fails_fast(candidate):
    client = json_client(SAMPLE_EVALUATION)
    with pytest.raises(ConfigurationError, match="GROQ_API_KEY"):
        _evaluate(candidate, client, api_key="")
    assert client.calls == []


def test_missing_model_fails_fast(candidate):
    client = json_client(SAMPLE_EVALUATION)
    with pytest.raises(ConfigurationError, match="GROQ_MODEL"):
        _evaluate(candidate, client, model=None)
    assert client.calls == []


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_payload_raises(candidate, content):
    with pytest.raises(OracleEmptyResponseError):
        _evaluate(candidate, FakeGroqClient(content=content))


def test_no_choices_raises_empty(candidate):
    with pytest.raises(OracleEmptyResponseError):
        _evaluate(candidate, FakeGroqClient(no_choices=True))


def test_api_error_is_unavailable_and_not_retried(candidate):
    error = groq.APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    client = FakeGroqClient(error=error)
    with pytest.raises(OracleUnavailableError):
        _evaluate(candidate, client)
    assert len(client.calls) == 1


def test_not_json_is_malformed():
    with pytest.raises(OracleMalformedResponseError, match="not valid JSON"):
        parse_evaluation("The candidate looks great!")


def test_markdown_fences_are_stripped():
    ev = parse_evaluation("```json\n" + json.dumps(SAMPLE_EVALUATION) + "\n```")
    assert ev.overall_score == 82


@pytest.mark.parametrize(
    "payload",
    [
        {k: v for k, v in SAMPLE_EVALUATION.items() if k != "overallScore"},
        {k: v for k, v in SAMPLE_EVALUATION.items() if k != "evaluationSummary"},
        _payload(overallScore="82"),
        _payload(overallScore=101),
        _payload(overallScore=-1),
        _payload(recommendation="excellent"),
        _payload(strengths="React"),
        _payload(roleSuitability=[{"role": "Frontend", "score": 120, "reasoning": "x"}]),
        _payload(roleSuitability=[{"role": "Frontend", "score": 80}]),
        [SAMPLE_EVALUATION],
    ],
)
def test_schema_violations_are_malformed(payload):
    with pytest.raises(OracleMalformedResponseError):
        parse_evaluation(json.dumps(payload))


@pytest.mark.parametrize(
    "payload",
    [
        _payload(overallScore=float("nan"), recommendation="weak"),
        _payload(overallScore=float("inf"), recommendation="strong"),
        _payload(overallScore=float("-inf"), recommendation="weak"),
        _payload(roleSuitability=[{"role": "Frontend", "score": float("nan"), "reasoning": "x"}]),
    ],
)
def test_non_finite_scores_are_malformed(payload):
    with pytest.raises(OracleMalformedResponseError, match="non-finite"):
        parse_evaluation(json.dumps(payload))


def test_non_finite_score_fails_intake_as_malformed(candidate):
    client = FakeGroqClient(content=json.dumps(_payload(overallScore=float("nan"), recommendation="weak")))
    with pytest.raises(OracleMalformedResponseError):
        _evaluate(candidate, client)


@pytest.mark.parametrize(
    "score,recommendation",
    [(82, "moderate"), (74, "strong"), (49, "moderate"), (50, "weak"), (100, "weak")],
)
def test_recommendation_inconsistent_with_score_is_malformed(score, recommendation):
    with pytest.raises(OracleMalformedResponseError, match="inconsistent"):
        parse_evaluation(json.dumps(_payload(overallScore=score, recommendation=recommendation)))


@pytest.mark.parametrize(
    "score,recommendation",
    [(100, "strong"), (75, "strong"), (74, "moderate"), (50, "moderate"), (49, "weak"), (0, "weak")],
)
def test_band_boundaries_accepted(score, recommendation):
    ev = parse_evaluation(json.dumps(_payload(overallScore=score, recommendation=recommendation)))
    assert ev.overall_score == score


def test_evaluator_binds_configuration(candidate):
    client = json_client(SAMPLE_EVALUATION)
    evaluator = Evaluator("test-key", "test-model", client=client)
    assert evaluator(candidate, JD).recommendation == "strong"
    assert client.calls[0]["model"] == "test-model"
