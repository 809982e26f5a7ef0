#!/usr/bin/env python3
"""CLI for résumé intake and the recruiter stage board."""

import argparse
import json
import sys
from pathlib import Path

from hr_dashboard.audit import audit_log, setup_app_logging
from src.config import Settings
from src.errors import CandidatePipelineError
from src.job_descriptions import ROLE_LABELS, get_job_description_text
from src.models import STAGES
from src.pipeline import Evaluator, IntakeOrchestrator, ResumeExtractor, StagePipeline
from src.store import CandidateStore


def _print_records(records, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return
    if not records:
        print("No candidates.")
        return
    for r in records:
        print(
            f"#{r.id:<4} {r.candidate.name.full:<28} {r.applied_role or '-':<12} "
            f"{r.overall_score:>5.1f}  {r.recommendation or '-':<9} {r.stage:<10} {r.created_at}"
        )


def cmd_intake(args: argparse.Namespace, settings: Settings, store: CandidateStore) -> None:
    """Extract, normalize, evaluate and store one résumé."""
    resume_path = Path(args.resume)
    if not resume_path.exists():
        print(f"Error: Resume not found: {resume_path}", file=sys.stderr)
        sys.exit(1)

    orchestrator = IntakeOrchestrator(
        store=store,
        extractor=ResumeExtractor(settings.groq_api_key, settings.extract_model),
        evaluator=Evaluator(settings.groq_api_key, settings.groq_model),
        job_descriptions=get_job_description_text,
    )
    result = orchestrator.intake(resume_path.read_bytes(), args.role, filename=resume_path.name)
    audit_log(
        action="intake",
        status="success",
        candidate_id=result.id,
        role=args.role,
        model=settings.groq_model,
        filename=resume_path.name,
        extra={"overall_score": result.evaluation.overall_score, "source": "cli"},
        log_dir=settings.log_dir,
    )

    if args.json:
        print(json.dumps(result.to_dict(args.role), indent=2))
        return
    ev = result.evaluation
    print(f"Stored candidate #{result.id}: {result.candidate.name.full} ({args.role})")
    print(f"Overall: {ev.overall_score} ({ev.recommendation})")
    print(f"Summary: {ev.evaluation_summary}")
    for key, items in (("Strengths", ev.strengths), ("Weaknesses", ev.weaknesses), ("Skill gaps", ev.skill_gaps)):
        if items:
            print(f"{key}:")
            for item in items:
                print(f"  • {item}")


def cmd_list(args: argparse.Namespace, settings: Settings, store: CandidateStore) -> None:
    _print_records(store.list(args.role), args.json)


def cmd_board(args: argparse.Namespace, settings: Settings, store: CandidateStore) -> None:
    board = StagePipeline(store)
    board.refresh(args.role)
    if args.json:
        print(json.dumps({"stages": board.board_payload(), "stats": board.stats()}, indent=2))
        return
    stats = board.stats()
    print(f"Total: {stats['total']}  Avg score: {stats['avgScore']}  High scorers: {stats['highScorers']}")
    for column in board.board_payload():
        print(f"\n== {column['title']} ({len(column['candidates'])})")
        for c in column["candidates"]:
            print(f"  #{c['id']:<4} {c['firstName']} {c['familyName']}  {c['overallScore']:.0f}  {c['appliedRole']}")


def cmd_move(args: argparse.Namespace, settings: Settings, store: CandidateStore) -> None:
    StagePipeline(store).transition(args.id, args.stage)
    audit_log(action="stage_update", status="success", candidate_id=args.id, stage=args.stage, log_dir=settings.log_dir)
    print(f"Candidate #{args.id} moved to {args.stage}")


def cmd_top(args: argparse.Namespace, settings: Settings, store: CandidateStore) -> None:
    _print_records(store.top(args.limit), args.json)


def main() -> None:
    parser = argparse.ArgumentParser(description="Résumé intake and recruiter stage pipeline")
    parser.add_argument("--db", help="SQLite database path (or CANDIDATES_DB_PATH env)")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    p_intake = sub.add_parser("intake", help="Parse, evaluate and store a résumé")
    p_intake.add_argument("resume", type=Path, help="Path to résumé PDF or text file")
    p_intake.add_argument("--role", required=True, choices=sorted(ROLE_LABELS), help="Role applied for")
    p_intake.set_defaults(func=cmd_intake)

    p_list = sub.add_parser("list", help="List candidates, most recent first")
    p_list.add_argument("--role", default="all", help="Filter by applied role (default: all)")
    p_list.set_defaults(func=cmd_list)

    p_board = sub.add_parser("board", help="Show candidates grouped by stage")
    p_board.add_argument("--role", default="all", help="Filter by applied role (default: all)")
    p_board.set_defaults(func=cmd_board)

    p_move = sub.add_parser("move", help="Move a candidate to another stage")
    p_move.add_argument("id", type=int, help="Candidate id")
    p_move.add_argument("stage", choices=STAGES, help="Target stage")
    p_move.set_defaults(func=cmd_move)

    p_top = sub.add_parser("top", help="Highest-scoring candidates")
    p_top.add_argument("--limit", type=int, default=10)
    p_top.set_defaults(func=cmd_top)

    args = parser.parse_args()
    settings = Settings.from_env()
    setup_app_logging(settings.log_dir)

    with CandidateStore(args.db or settings.db_path) as store:
        try:
            args.func(args, settings, store)
        except CandidatePipelineError as e:
            print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
