#!/usr/bin/env python3
"""Flask web app for résumé intake and the recruiter stage board."""

import atexit

from flask import Flask, jsonify, request

from hr_dashboard.audit import audit_log, log_evaluation, setup_app_logging
from src.config import Settings
from src.errors import (
    ConfigurationError,
    ExtractionError,
    InvalidStageError,
    MalformedInputError,
    NotFoundError,
    OracleEmptyResponseError,
    OracleMalformedResponseError,
    OracleUnavailableError,
    StoreIOError,
)
from src.job_descriptions import get_job_description_text, role_options
from src.pipeline import Evaluator, IntakeOrchestrator, ResumeExtractor, StagePipeline
from src.store import CandidateStore
from src.utils import hash_bytes

# Intake failures: (status, code). Ordered most specific first.
INTAKE_ERRORS = [
    (MalformedInputError, 400, "INTAKE_MALFORMED_INPUT"),
    (ConfigurationError, 500, "INTAKE_CONFIGURATION"),
    (ExtractionError, 502, "INTAKE_EXTRACTION_FAILED"),
    (OracleUnavailableError, 502, "INTAKE_EVALUATION_UNAVAILABLE"),
    (OracleEmptyResponseError, 502, "INTAKE_EVALUATION_EMPTY"),
    (OracleMalformedResponseError, 502, "INTAKE_EVALUATION_MALFORMED"),
    (StoreIOError, 500, "INTAKE_STORE_FAILED"),
]

STAGE_ERRORS = [
    (InvalidStageError, 400, "STAGE_UPDATE_INVALID_STAGE"),
    (NotFoundError, 404, "STAGE_UPDATE_NOT_FOUND"),
    (StoreIOError, 500, "STAGE_UPDATE_FAILED"),
]


def _classify(error: Exception, table: list) -> tuple[int, str]:
    for exc_type, status, code in table:
        if isinstance(error, exc_type):
            return status, code
    raise error


def create_app(
    settings: Settings | None = None,
    store: CandidateStore | None = None,
    orchestrator: IntakeOrchestrator | None = None,
) -> Flask:
    settings = settings or Settings.from_env()
    log = setup_app_logging(settings.log_dir)

    if store is None:
        store = CandidateStore(settings.db_path)
        atexit.register(store.close)
    orchestrator = orchestrator or IntakeOrchestrator(
        store=store,
        extractor=ResumeExtractor(settings.groq_api_key, settings.extract_model),
        evaluator=Evaluator(settings.groq_api_key, settings.groq_model),
        job_descriptions=get_job_description_text,
    )

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024  # 16MB
    app.config["CANDIDATE_STORE"] = store

    @app.route("/api/roles")
    def api_roles():
        return jsonify({"roles": role_options()})

    @app.route("/api/parse-resume", methods=["POST"])
    def api_parse_resume():
        """Extract, evaluate and store an uploaded résumé for the selected role."""
        file = request.files.get("file")
        job_role = (request.form.get("jobRole") or "").strip()
        if file is None or not file.filename:
            return jsonify({"error": "No file provided", "code": "INTAKE_MALFORMED_INPUT"}), 400

        file_bytes = file.read()
        log.info("Intake started (filename=%s, role=%s, bytes=%d)", file.filename, job_role, len(file_bytes))
        try:
            result = orchestrator.intake(file_bytes, job_role or None, filename=file.filename)
        except Exception as e:
            status, code = _classify(e, INTAKE_ERRORS)
            audit_log(
                action="intake",
                status="error",
                role=job_role,
                filename=file.filename,
                error=str(e),
                extra={"error_type": code},
                log_dir=settings.log_dir,
            )
            log.warning("Intake failed (%s): %s", code, e)
            return jsonify({"error": str(e), "code": code}), status

        evaluation = result.evaluation.to_dict()
        log_evaluation(
            candidate_id=result.id,
            model=settings.groq_model,
            applied_role=job_role,
            candidate_name=result.candidate.name.full,
            evaluation=evaluation,
            resume_hash=hash_bytes(file_bytes),
            file_bytes=len(file_bytes),
            log_dir=settings.log_dir,
        )
        audit_log(
            action="intake",
            status="success",
            candidate_id=result.id,
            role=job_role,
            model=settings.groq_model,
            filename=file.filename,
            extra={"overall_score": result.evaluation.overall_score},
            log_dir=settings.log_dir,
        )
        log.info("Intake complete: id=%d score=%s", result.id, result.evaluation.overall_score)
        body = result.to_dict(job_role)
        body["message"] = "Resume parsed, evaluated, and saved successfully"
        return jsonify(body)

    @app.route("/api/candidates")
    def api_candidates():
        role = request.args.get("role") or "all"
        board = StagePipeline(store)
        try:
            records = board.refresh(role)
        except StoreIOError as e:
            log.exception("Listing candidates failed")
            return jsonify({"error": str(e), "code": "LIST_FAILED"}), 500
        return jsonify({
            "candidates": [r.to_dict() for r in records],
            "stages": board.board_payload(),
            "stats": board.stats(),
        })

    @app.route("/api/candidates/top")
    def api_top_candidates():
        limit = request.args.get("limit", default=10, type=int)
        if limit is None or limit < 1:
            return jsonify({"error": "limit must be a positive integer"}), 400
        try:
            records = store.top(limit)
        except StoreIOError as e:
            log.exception("Top candidates query failed")
            return jsonify({"error": str(e), "code": "LIST_FAILED"}), 500
        return jsonify({"candidates": [r.to_dict() for r in records]})

    @app.route("/api/candidates/<int:candidate_id>")
    def api_candidate(candidate_id: int):
        try:
            record = store.get(candidate_id)
        except NotFoundError as e:
            return jsonify({"error": str(e), "code": "NOT_FOUND"}), 404
        return jsonify({"candidate": record.to_dict()})

    @app.route("/api/candidates/<int:candidate_id>", methods=["PATCH"])
    def api_update_stage(candidate_id: int):
        """Move a candidate to another board column."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        stage = data.get("stage") or data.get("onboardingStage")
        if not stage:
            return jsonify({"error": "Missing stage", "code": "STAGE_UPDATE_INVALID_STAGE"}), 400

        try:
            StagePipeline(store).transition(candidate_id, stage)
        except Exception as e:
            status, code = _classify(e, STAGE_ERRORS)
            audit_log(
                action="stage_update",
                status="error",
                candidate_id=candidate_id,
                stage=stage,
                error=str(e),
                extra={"error_type": code},
                log_dir=settings.log_dir,
            )
            log.warning("Stage update failed (%s): %s", code, e)
            return jsonify({"error": str(e), "code": code}), status

        audit_log(
            action="stage_update",
            status="success",
            candidate_id=candidate_id,
            stage=stage,
            log_dir=settings.log_dir,
        )
        return jsonify({"success": True, "id": candidate_id, "stage": stage})

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    log = setup_app_logging(settings.log_dir)
    app = create_app(settings)
    log.info(
        "Resume intake starting on http://127.0.0.1:5000 | GROQ_API_KEY set: %s | GROQ_MODEL: %s | DB: %s",
        bool(settings.groq_api_key), settings.groq_model or "<unset>", settings.db_path,
    )
    if not settings.groq_api_key or not settings.groq_model:
        log.warning("GROQ_API_KEY/GROQ_MODEL not configured - intake will fail until they are set")
    app.run(debug=True, port=5000, threaded=True)
