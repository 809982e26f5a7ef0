"""Deterministic score banding and board statistics."""

from src.scoring.banding import (
    RecommendationMismatchError,
    check_recommendation,
    compute_board_stats,
    recommendation_for_score,
)

__all__ = [
    "RecommendationMismatchError",
    "check_recommendation",
    "compute_board_stats",
    "recommendation_for_score",
]
