from response_service.scoring.scorer import (
    ScoringResult,
    score_answers,
    score_percentage,
)

__all__ = [
    "score_answers",
    "score_percentage",
    "ScoringResult",
]
