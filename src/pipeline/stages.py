"""Stage pipeline: recruiter board view over candidate records.

The board keeps an in-memory copy of the last list() result. Transitions update
that copy first and then write through to the store; the store stays the source
of truth and refresh() reconciles the copy with it.
"""

import dataclasses
import logging

from src.errors import InvalidStageError
from src.models import STAGE_TITLES, STAGES, CandidateRecord
from src.scoring import compute_board_stats
from src.store import ALL_ROLES, CandidateStore

log = logging.getLogger("resume_intake.stages")


class StagePipeline:
    def __init__(self, store: CandidateStore, rollback: bool = True):
        self.store = store
        self.rollback = rollback
        self.role = ALL_ROLES
        self._records: list[CandidateRecord] = []

    @property
    def records(self) -> list[CandidateRecord]:
        return list(self._records)

    def refresh(self, role: str | None = None) -> list[CandidateRecord]:
        """Reload the cached list from the store, optionally switching the role filter."""
        if role is not None:
            self.role = role or ALL_ROLES
        self._records = self.store.list(self.role)
        return self.records

    def _replace_cached(self, candidate_id: int, stage: str) -> str | None:
        """Set the cached record's stage; returns the previous stage or None if not cached."""
        for i, record in enumerate(self._records):
            if record.id == candidate_id:
                self._records[i] = dataclasses.replace(record, stage=stage)
                return record.stage
        return None

    def transition(self, candidate_id: int, target: str) -> None:
        """
        Move a candidate to target. Any stage may follow any other.
        The cached view changes immediately; if the durable write fails the error
        propagates and, with rollback enabled, the cached stage is restored.
        """
        if target not in STAGES:
            raise InvalidStageError(f"Unknown stage '{target}'; expected one of {', '.join(STAGES)}")

        previous = self._replace_cached(candidate_id, target)
        try:
            self.store.update_stage(candidate_id, target)
        except Exception:
            if self.rollback and previous is not None:
                self._replace_cached(candidate_id, previous)
                log.warning("Stage update failed for id=%d; reverted view to %s", candidate_id, previous)
            raise

    def board(self) -> dict[str, list[CandidateRecord]]:
        """Cached records grouped into columns, one per stage in stage order."""
        columns: dict[str, list[CandidateRecord]] = {stage: [] for stage in STAGES}
        for record in self._records:
            columns.setdefault(record.stage, []).append(record)
        return columns

    def board_payload(self) -> list[dict]:
        return [
            {
                "id": stage,
                "title": STAGE_TITLES.get(stage, stage),
                "candidates": [r.to_dict() for r in records],
            }
            for stage, records in self.board().items()
        ]

    def stats(self) -> dict:
        return compute_board_stats([r.overall_score for r in self._records])
