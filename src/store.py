"""Candidate record store backed by SQLite.

The store owns the candidates table: no other component writes rows. One
connection is shared by all callers and every operation runs under a lock, so
concurrent saves get distinct AUTOINCREMENT ids and a write is never interleaved
with another.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading

from src.errors import InvalidStageError, NotFoundError, StoreIOError
from src.models import (
    INITIAL_STAGE,
    STAGES,
    CandidateRecord,
    CanonicalCandidate,
    Evaluation,
)
from src.utils import iso_now

log = logging.getLogger("resume_intake.store")

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS candidates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    firstName TEXT NOT NULL DEFAULT '',
    familyName TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    summary TEXT NOT NULL DEFAULT '',
    totalYearsExperience REAL NOT NULL DEFAULT 0,
    data TEXT NOT NULL,
    evaluation TEXT,
    overallScore REAL NOT NULL DEFAULT 0,
    recommendation TEXT NOT NULL DEFAULT '',
    appliedRole TEXT NOT NULL DEFAULT '',
    stage TEXT NOT NULL DEFAULT 'new',
    createdAt TEXT NOT NULL
)
"""
CREATE_INDEX_SQL = "CREATE INDEX IF NOT EXISTS idx_candidates_role_created ON candidates (appliedRole, createdAt)"

INSERT_SQL = """
INSERT INTO candidates (
    firstName, familyName, email, phone, summary, totalYearsExperience,
    data, evaluation, overallScore, recommendation, appliedRole, stage, createdAt
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

ALL_ROLES = "all"


def _row_to_record(row: sqlite3.Row) -> CandidateRecord:
    evaluation = json.loads(row["evaluation"]) if row["evaluation"] else None
    return CandidateRecord(
        id=row["id"],
        candidate=CanonicalCandidate.from_dict(json.loads(row["data"])),
        applied_role=row["appliedRole"],
        evaluation=Evaluation.from_dict(evaluation) if evaluation else None,
        overall_score=row["overallScore"],
        recommendation=row["recommendation"],
        stage=row["stage"] or INITIAL_STAGE,
        created_at=row["createdAt"],
    )


class CandidateStore:
    """Explicitly constructed store; create at startup, close() at shutdown."""

    def __init__(self, db_path: str = "candidates.db"):
        self.db_path = str(db_path)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(CREATE_TABLE_SQL)
                self._conn.execute(CREATE_INDEX_SQL)
        except sqlite3.Error as e:
            raise StoreIOError(f"Cannot open candidate store at {self.db_path}: {e}") from e
        log.info("Candidate store opened at %s", self.db_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        log.info("Candidate store closed")

    def save(
        self,
        candidate: CanonicalCandidate,
        evaluation: Evaluation | None,
        applied_role: str,
    ) -> int:
        """
        Persist a new record with stage='new' and createdAt=now.
        overallScore/recommendation are copied from the evaluation (0/'' when absent).
        Returns the store-assigned id.
        """
        params = (
            candidate.name.first,
            candidate.name.family,
            candidate.primary_email,
            candidate.primary_phone,
            candidate.summary,
            candidate.total_years_experience,
            json.dumps(candidate.to_dict(), ensure_ascii=False),
            json.dumps(evaluation.to_dict(), ensure_ascii=False) if evaluation else None,
            evaluation.overall_score if evaluation else 0,
            evaluation.recommendation if evaluation else "",
            applied_role or "",
            INITIAL_STAGE,
            iso_now(),
        )
        try:
            with self._lock, self._conn:
                cursor = self._conn.execute(INSERT_SQL, params)
                candidate_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise StoreIOError(f"Failed to save candidate: {e}") from e
        log.info("Saved candidate id=%d role=%s score=%s", candidate_id, applied_role, params[8])
        return candidate_id

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        try:
            with self._lock:
                return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreIOError(f"Candidate query failed: {e}") from e

    def list(self, applied_role: str | None = ALL_ROLES) -> list[CandidateRecord]:
        """Records for a role (or every record for 'all'/None/''), most recent first."""
        if not applied_role or applied_role == ALL_ROLES:
            rows = self._query("SELECT * FROM candidates ORDER BY createdAt DESC, id DESC")
        else:
            rows = self._query(
                "SELECT * FROM candidates WHERE appliedRole = ? ORDER BY createdAt DESC, id DESC",
                (applied_role,),
            )
        return [_row_to_record(r) for r in rows]

    def get(self, candidate_id: int) -> CandidateRecord:
        rows = self._query("SELECT * FROM candidates WHERE id = ?", (candidate_id,))
        if not rows:
            raise NotFoundError(f"Candidate {candidate_id} not found")
        return _row_to_record(rows[0])

    def top(self, limit: int = 10) -> list[CandidateRecord]:
        """Evaluated candidates with the highest scores."""
        rows = self._query(
            "SELECT * FROM candidates WHERE overallScore > 0 ORDER BY overallScore DESC, id ASC LIMIT ?",
            (limit,),
        )
        return [_row_to_record(r) for r in rows]

    def update_stage(self, candidate_id: int, stage: str) -> None:
        """
        Overwrite only the stage column. Any stage in STAGES is accepted from any other.
        Raises NotFoundError (nothing written) for an unknown id.
        """
        if stage not in STAGES:
            raise InvalidStageError(f"Unknown stage '{stage}'; expected one of {', '.join(STAGES)}")
        try:
            with self._lock, self._conn:
                cursor = self._conn.execute(
                    "UPDATE candidates SET stage = ? WHERE id = ?",
                    (stage, candidate_id),
                )
                updated = cursor.rowcount
        except sqlite3.Error as e:
            raise StoreIOError(f"Failed to update stage for candidate {candidate_id}: {e}") from e
        if updated == 0:
            raise NotFoundError(f"Candidate {candidate_id} not found")
        log.info("Candidate id=%d moved to stage=%s", candidate_id, stage)
