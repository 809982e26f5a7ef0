"""Shared fixtures: sample extraction payloads, fake Groq clients, temporary stores."""

import copy
import json
from types import SimpleNamespace

import pytest

from src.models import Evaluation
from src.store import CandidateStore

SAMPLE_RAW_RESUME = {
    "candidateName": {"firstName": "Jane", "familyName": "Doe"},
    "email": ["jane.doe@example.com", "jane@work.example.com"],
    "phoneNumber": ["+1 555 0100"],
    "summary": "Frontend engineer with 6 years of React and TypeScript.",
    "totalYearsExperience": 6,
    "workExperience": [
        {
            "jobTitle": "Senior Frontend Engineer",
            "organization": "Acme Corp",
            "dates": {"startDate": "2021-03-01", "endDate": None, "isCurrent": True},
            "jobDescription": "Led the design system and migrated the dashboard to Next.js.",
        },
        {
            "jobTitle": "Frontend Developer",
            "organization": "Widget Inc",
            "dates": {"startDate": "2018-01-01", "endDate": "2021-02-28", "isCurrent": False},
            "jobDescription": "Built React components and Jest test suites.",
        },
    ],
    "education": [
        {"accreditation": {"education": "BSc Computer Science", "educationLevel": "Bachelors"}},
    ],
    "skills": [{"name": "React"}, {"name": "TypeScript"}, {"name": "Jest"}],
}

SAMPLE_EVALUATION = {
    "overallScore": 82,
    "roleSuitability": [
        {"role": "Frontend Engineer", "score": 85, "reasoning": "Deep React and TypeScript experience."},
    ],
    "strengths": ["React", "TypeScript", "Design systems"],
    "weaknesses": ["Limited backend exposure"],
    "skillGaps": ["Playwright"],
    "recommendation": "strong",
    "evaluationSummary": "Strong frontend candidate with relevant production experience.",
}


def make_raw_resume(**overrides) -> dict:
    raw = copy.deepcopy(SAMPLE_RAW_RESUME)
    raw.update(overrides)
    return raw


def make_evaluation(**overrides) -> Evaluation:
    data = copy.deepcopy(SAMPLE_EVALUATION)
    data.update(overrides)
    return Evaluation.from_dict(data)


class FakeGroqClient:
    """Stands in for groq.Groq: records create() kwargs and returns canned content."""

    def __init__(self, content=None, error: Exception | None = None, no_choices: bool = False):
        self.content = content
        self.error = error
        self.no_choices = no_choices
        self.calls: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.no_choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def json_client(payload) -> FakeGroqClient:
    return FakeGroqClient(content=json.dumps(payload))


@pytest.fixture
def store(tmp_path):
    s = CandidateStore(tmp_path / "candidates.db")
    yield s
    s.close()
