"""Intake orchestrator: end-to-end flow, no partial persistence, concurrent intakes."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import SAMPLE_EVALUATION, FakeGroqClient, json_client, make_raw_resume
from src.errors import (
    ConfigurationError,
    ExtractionError,
    MalformedInputError,
    OracleEmptyResponseError,
    OracleMalformedResponseError,
)
from src.job_descriptions import get_job_description_text
from src.pipeline.evaluate import Evaluator
from src.pipeline.intake import IntakeOrchestrator


class FakeExtractor:
    def __init__(self, raw=None, error: Exception | None = None):
        self.raw = raw if raw is not None else make_raw_resume()
        self.error = error
        self.calls = []

    def __call__(self, file_bytes, filename):
        self.calls.append((file_bytes, filename))
        if self.error is not None:
            raise self.error
        return self.raw


def _orchestrator(store, extractor=None, client=None):
    return IntakeOrchestrator(
        store=store,
        extractor=extractor or FakeExtractor(),
        evaluator=Evaluator("test-key", "test-model", client=client or json_client(SAMPLE_EVALUATION)),
        job_descriptions=get_job_description_text,
    )


def test_end_to_end_frontend_intake(store):
    client = json_client(SAMPLE_EVALUATION)
    result = _orchestrator(store, client=client).intake(b"%PDF-1.7 ...", "frontend", filename="jane.pdf")

    assert result.candidate.name.full == "Jane Doe"
    assert result.evaluation.overall_score == 82
    record = store.get(result.id)
    assert record.applied_role == "frontend"
    assert record.overall_score == 82
    assert record.recommendation == "strong"
    assert record.stage == "new"
    assert get_job_description_text("frontend") in client.calls[0]["messages"][0]["content"]


def test_result_payload_shape(store):
    result = _orchestrator(store).intake(b"resume", "frontend")
    body = result.to_dict("frontend")
    assert body["candidateId"] == result.id
    assert body["evaluatedFor"] == "frontend"
    assert body["evaluation"]["recommendation"] == "strong"
    assert body["data"]["name"] == {"first": "Jane", "family": "Doe"}


def test_extraction_failure_persists_nothing(store):
    extractor = FakeExtractor(error=ExtractionError("quota exceeded"))
    client = json_client(SAMPLE_EVALUATION)
    with pytest.raises(ExtractionError):
        _orchestrator(store, extractor=extractor, client=client).intake(b"resume", "frontend")
    assert client.calls == []
    assert store.list("all") == []


def test_nameless_resume_persists_nothing(store):
    extractor = FakeExtractor(raw={"summary": "No name here"})
    with pytest.raises(MalformedInputError):
        _orchestrator(store, extractor=extractor).intake(b"resume", "frontend")
    assert store.list("all") == []


@pytest.mark.parametrize("role", [None, "", "astronaut"])
def test_unknown_role_is_configuration_error(store, role):
    client = json_client(SAMPLE_EVALUATION)
    with pytest.raises(ConfigurationError):
        _orchestrator(store, client=client).intake(b"resume", role)
    assert client.calls == []
    assert store.list("all") == []


def test_malformed_evaluation_persists_nothing(store):
    bad = dict(SAMPLE_EVALUATION, overallScore=82, recommendation="weak")
    with pytest.raises(OracleMalformedResponseError):
        _orchestrator(store, client=json_client(bad)).intake(b"resume", "backend")
    assert store.list("all") == []


def test_nan_score_is_malformed_and_persists_nothing(store):
    client = FakeGroqClient(content=json.dumps(dict(SAMPLE_EVALUATION, overallScore=float("nan"), recommendation="weak")))
    with pytest.raises(OracleMalformedResponseError):
        _orchestrator(store, client=client).intake(b"resume", "frontend")
    assert store.list("all") == []


def test_empty_evaluation_persists_nothing(store):
    with pytest.raises(OracleEmptyResponseError):
        _orchestrator(store, client=FakeGroqClient(content="")).intake(b"resume", "backend")
    assert store.list("all") == []


def test_concurrent_intakes_get_distinct_ids(store):
    orchestrator = _orchestrator(store)
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(orchestrator.intake, b"resume", role) for role in ("frontend", "backend")]
        results = [f.result() for f in futures]

    ids = {r.id for r in results}
    assert len(ids) == 2
    assert {r.id for r in store.list("all")} == ids
