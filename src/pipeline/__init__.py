"""Intake pipeline: extract → normalize → evaluate → persist, plus the recruiter stage board."""

from src.pipeline.extract import ResumeExtractor
from src.pipeline.normalize import normalize_candidate
from src.pipeline.evaluate import Evaluator, build_evaluation_prompt, parse_evaluation, request_evaluation
from src.pipeline.intake import IntakeOrchestrator, IntakeResult
from src.pipeline.stages import StagePipeline

__all__ = [
    "ResumeExtractor",
    "normalize_candidate",
    "Evaluator",
    "build_evaluation_prompt",
    "parse_evaluation",
    "request_evaluation",
    "IntakeOrchestrator",
    "IntakeResult",
    "StagePipeline",
]
