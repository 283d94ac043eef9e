from response_service.analytics.aggregator import (
    EXPORT_COLUMNS,
    ResponseAggregator,
    average_score,
    filter_by_questionnaire,
    positional_question_stats,
)
from response_service.analytics.data_models import (
    LeaderboardEntry,
    QuestionStat,
    ResponseStats,
)

__all__ = [
    "average_score",
    "EXPORT_COLUMNS",
    "filter_by_questionnaire",
    "LeaderboardEntry",
    "positional_question_stats",
    "QuestionStat",
    "ResponseAggregator",
    "ResponseStats",
]
