"""Stage C: Evaluate a canonical candidate against a job description (single LLM call)."""

import json
import logging

import groq
import jsonschema
from groq import Groq

from src.errors import (
    ConfigurationError,
    OracleEmptyResponseError,
    OracleMalformedResponseError,
    OracleUnavailableError,
)
from src.models import CanonicalCandidate, Evaluation
from src.scoring import RecommendationMismatchError, check_recommendation
from src.utils import hash_text
from src.validation import validate_evaluation

log = logging.getLogger("resume_intake.evaluate")

PROMPT_VERSION = "EVALUATE_CANDIDATE_V1"
MODEL_PARAMS = {"temperature": 0.1}

EVALUATION_PROMPT = """You are an expert HR recruiter with 20 years of experience. Evaluate the candidate below for the role described in the job description.

CANDIDATE DATA:
{candidate_json}

JOB DESCRIPTION:
{job_description}

EVALUATION CRITERIA:
- Skills match and relevance to the job description
- Years of experience
- Education background
- Project complexity and scope
- Career progression

RESPONSE FORMAT:
Return a single JSON object, no markdown, with exactly these keys:
{
  "overallScore": number between 0 and 100,
  "roleSuitability": [{"role": "string", "score": number between 0 and 100, "reasoning": "string"}],
  "strengths": ["string"],
  "weaknesses": ["string"],
  "skillGaps": ["string"],
  "recommendation": "strong" | "moderate" | "weak",
  "evaluationSummary": "string"
}

SCORING RULES:
- overallScore: 0-100 based on experience, skills, education and relevance to the job description
- recommendation MUST follow overallScore: "strong" for 75-100, "moderate" for 50-74, "weak" for 0-49
- Be objective and fair; only use facts present in the candidate data"""


def build_evaluation_prompt(candidate: CanonicalCandidate, job_description: str) -> str:
    """Deterministic prompt: same candidate + job description always yields the same text."""
    candidate_json = json.dumps(candidate.to_dict(), indent=2, sort_keys=True, ensure_ascii=False)
    return (
        EVALUATION_PROMPT
        .replace("{candidate_json}", candidate_json)
        .replace("{job_description}", job_description.strip())
    )


def _strip_code_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text


def _reject_constant(name: str):
    raise OracleMalformedResponseError(f"Evaluation contains non-finite number {name}")


def parse_evaluation(content: str | None) -> Evaluation:
    """
    Parse and validate the oracle payload.
    No coercion: wrong types, missing keys, unknown recommendation, scores outside
    [0, 100] (NaN and Infinity included) and a recommendation that disagrees with
    the score band are all rejected.
    """
    if content is None or not content.strip():
        raise OracleEmptyResponseError("Empty response from evaluation model")
    try:
        data = json.loads(_strip_code_fences(content), parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise OracleMalformedResponseError(f"Evaluation is not valid JSON: {e}") from e
    try:
        validate_evaluation(data)
        check_recommendation(data["overallScore"], data["recommendation"])
    except jsonschema.ValidationError as e:
        raise OracleMalformedResponseError(f"Evaluation does not match schema: {e.message}") from e
    except RecommendationMismatchError as e:
        raise OracleMalformedResponseError(str(e)) from e
    return Evaluation.from_dict(data)


def request_evaluation(
    candidate: CanonicalCandidate,
    job_description: str | None,
    *,
    api_key: str | None,
    model: str | None,
    client=None,
) -> Evaluation:
    """
    Stage C: one oracle call, no retries. Caller decides whether to retry.
    Preconditions (job description, API key, model) fail fast with ConfigurationError
    before any request is made.
    """
    if not job_description or not job_description.strip():
        raise ConfigurationError("Job description is required for evaluation")
    if not api_key:
        raise ConfigurationError("GROQ_API_KEY not configured")
    if not model:
        raise ConfigurationError("GROQ_MODEL not configured")

    prompt = build_evaluation_prompt(candidate, job_description)
    client = client or Groq(api_key=api_key)
    log.info(
        "Requesting evaluation (model=%s, prompt_version=%s, prompt_hash=%s)",
        model, PROMPT_VERSION, hash_text(prompt)[:16],
    )
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=MODEL_PARAMS["temperature"],
            response_format={"type": "json_object"},
        )
    except groq.APIError as e:
        raise OracleUnavailableError(f"Evaluation request failed: {e}") from e

    if not response.choices:
        raise OracleEmptyResponseError("Evaluation model returned no choices")
    return parse_evaluation(response.choices[0].message.content)


class Evaluator:
    """Binds oracle configuration so the orchestrator can call evaluator(candidate, jd)."""

    def __init__(self, api_key: str | None, model: str | None, client=None):
        self.api_key = api_key
        self.model = model
        self.client = client

    def __call__(self, candidate: CanonicalCandidate, job_description: str | None) -> Evaluation:
        return request_evaluation(
            candidate,
            job_description,
            api_key=self.api_key,
            model=self.model,
            client=self.client,
        )
