"""Orchestrates résumé intake: extract → normalize → evaluate → persist."""

import logging
from dataclasses import dataclass
from typing import Callable

from src.models import CanonicalCandidate, Evaluation
from src.pipeline.normalize import normalize_candidate
from src.store import CandidateStore

log = logging.getLogger("resume_intake.intake")


@dataclass(frozen=True)
class IntakeResult:
    candidate: CanonicalCandidate
    evaluation: Evaluation
    id: int

    def to_dict(self, role_key: str | None = None) -> dict:
        return {
            "data": self.candidate.to_dict(),
            "evaluation": self.evaluation.to_dict(),
            "candidateId": self.id,
            "evaluatedFor": role_key,
        }


class IntakeOrchestrator:
    """
    Runs every intake step in sequence. The store is written only after every
    earlier step succeeded, so a failing step leaves nothing persisted and its
    own error propagates unchanged.
    """

    def __init__(
        self,
        store: CandidateStore,
        extractor: Callable[[bytes, str], dict],
        evaluator: Callable[[CanonicalCandidate, str | None], Evaluation],
        job_descriptions: Callable[[str | None], str | None],
    ):
        self.store = store
        self.extractor = extractor
        self.evaluator = evaluator
        self.job_descriptions = job_descriptions

    def intake(self, file_bytes: bytes, role_key: str | None, filename: str = "resume.pdf") -> IntakeResult:
        raw = self.extractor(file_bytes, filename)
        candidate = normalize_candidate(raw)
        log.info("Normalized candidate %r for role=%s", candidate.name.full, role_key)

        # Unknown or absent role gives None; the evaluator rejects it.
        job_description = self.job_descriptions(role_key)
        evaluation = self.evaluator(candidate, job_description)
        log.info("Evaluation: score=%s recommendation=%s", evaluation.overall_score, evaluation.recommendation)

        candidate_id = self.store.save(candidate, evaluation, role_key or "")
        return IntakeResult(candidate=candidate, evaluation=evaluation, id=candidate_id)
