from datetime import datetime

from pydantic import Field

from response_service.core.data_models import CamelModel


class QuestionStat(CamelModel):
    question_id: str
    question_text: str
    total_answers: int
    option_counts: dict[str, int] = Field(default_factory=dict)


class ResponseStats(CamelModel):
    total_responses: int = 0
    average_score: float = 0.0
    question_stats: tuple[QuestionStat, ...] = ()


class LeaderboardEntry(CamelModel):
    rank: int = Field(ge=1)
    response_id: str
    submitter_name: str
    score: int
    total_questions: int | None
    percentage: int
    submitted_at: datetime
