"""Audit trail for intake runs, evaluations and stage moves."""

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from src.config import DEFAULT_LOG_DIR

LOGGER_NAME = "resume_intake"

EVALUATION_CSV_HEADERS = [
    "timestamp",
    "candidate_id",
    "model",
    "applied_role",
    "candidate_name",
    "overall_score",
    "recommendation",
    "num_strengths",
    "num_weaknesses",
    "num_skill_gaps",
    "resume_hash",
    "file_bytes",
    "evaluation_summary",
    "role_suitability",
]


def _ensure_log_dir(log_dir: Path | None) -> Path:
    path = Path(log_dir or DEFAULT_LOG_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _iso_ts():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def log_evaluation(
    *,
    candidate_id: int,
    model: str | None,
    applied_role: str,
    candidate_name: str,
    evaluation: dict,
    resume_hash: str | None = None,
    file_bytes: int | None = None,
    log_dir: Path | None = None,
):
    """
    Record every stored evaluation for later review: who, for which role, and why it scored that way.
    Writes to evaluations.jsonl (append) and evaluations.csv.
    """
    audit_dir = _ensure_log_dir(log_dir)
    ts = _iso_ts()

    entry = {
        "timestamp": ts,
        "candidate_id": candidate_id,
        "model": model,
        "applied_role": applied_role,
        "candidate_name": candidate_name,
        "overall_score": evaluation.get("overallScore"),
        "recommendation": evaluation.get("recommendation"),
        "resume_hash": resume_hash,
        "file_bytes": file_bytes,
        "evaluation": evaluation,
    }
    with open(audit_dir / "evaluations.jsonl", "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")

    csv_path = audit_dir / "evaluations.csv"
    csv_exists = csv_path.exists()
    with open(csv_path, "a", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=EVALUATION_CSV_HEADERS)
        if not csv_exists:
            writer.writeheader()
        writer.writerow({
            "timestamp": ts,
            "candidate_id": candidate_id,
            "model": model or "",
            "applied_role": applied_role,
            "candidate_name": candidate_name,
            "overall_score": evaluation.get("overallScore"),
            "recommendation": evaluation.get("recommendation", ""),
            "num_strengths": len(evaluation.get("strengths", [])),
            "num_weaknesses": len(evaluation.get("weaknesses", [])),
            "num_skill_gaps": len(evaluation.get("skillGaps", [])),
            "resume_hash": resume_hash or "",
            "file_bytes": file_bytes if file_bytes is not None else "",
            "evaluation_summary": evaluation.get("evaluationSummary", ""),
            "role_suitability": json.dumps(evaluation.get("roleSuitability", []), default=str),
        })


def audit_log(
    action: str,
    status: str,
    *,
    candidate_id: int | None = None,
    role: str | None = None,
    stage: str | None = None,
    model: str | None = None,
    filename: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
    log_dir: Path | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    audit_dir = _ensure_log_dir(log_dir)
    entry = {
        "timestamp": _iso_ts(),
        "action": action,
        "status": status,
    }
    if candidate_id is not None:
        entry["candidate_id"] = candidate_id
    if role:
        entry["role"] = role
    if stage:
        entry["stage"] = stage
    if model:
        entry["model"] = model
    if filename:
        entry["filename"] = filename
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(audit_dir / "audit.log", "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging(log_dir: Path | None = None):
    """Configure application logging to console and file for the resume_intake logger tree."""
    audit_dir = _ensure_log_dir(log_dir)
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    fh = logging.FileHandler(audit_dir / "app.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
