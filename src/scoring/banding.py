"""Recommendation banding and dashboard score statistics. Pure code, no LLM."""

STRONG_MIN = 75
MODERATE_MIN = 50
HIGH_SCORE_MIN = STRONG_MIN


class RecommendationMismatchError(ValueError):
    """Raised when a recommendation disagrees with the banding of its score."""


def recommendation_for_score(score: float) -> str:
    """strong [75,100], moderate [50,75), weak [0,50)."""
    if score >= STRONG_MIN:
        return "strong"
    if score >= MODERATE_MIN:
        return "moderate"
    return "weak"


def check_recommendation(score: float, recommendation: str) -> None:
    expected = recommendation_for_score(score)
    if recommendation != expected:
        raise RecommendationMismatchError(
            f"recommendation '{recommendation}' inconsistent with overallScore {score} (expected '{expected}')"
        )


def compute_board_stats(scores: list[float]) -> dict:
    """
    Header stats for the recruiter board.
    avgScore is the rounded mean; highScorers counts scores in the strong band.
    """
    total = len(scores)
    return {
        "total": total,
        "avgScore": round(sum(scores) / total) if total else 0,
        "highScorers": sum(1 for s in scores if s >= HIGH_SCORE_MIN),
    }
