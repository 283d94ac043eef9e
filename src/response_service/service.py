"""
Response service facade used by the presentation layer and the HTTP API.

Operations are async so the persistence medium can be replaced by one
doing real I/O without changing callers. They run sequentially; there is
no internal parallelism, cancellation or timeout handling.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path

from response_service.analytics.aggregator import ResponseAggregator
from response_service.analytics.data_models import LeaderboardEntry, ResponseStats
from response_service.core.data_models import (
    Questionnaire,
    ResponseRecord,
    Submitter,
    UserAnswer,
)
from response_service.recording.recorder import ResponseRecorder
from response_service.scoring.scorer import ScoringResult, score_answers
from response_service.storage.catalog import QuestionnaireCatalog
from response_service.storage.store import ResponseStore


class ResponseService:
    def __init__(
        self,
        store: ResponseStore,
        catalog: QuestionnaireCatalog | None = None,
    ) -> None:
        self.store = store
        self.catalog = (
            catalog if catalog is not None else QuestionnaireCatalog(store.medium)
        )
        self.recorder = ResponseRecorder(store, self.catalog)
        self.aggregator = ResponseAggregator(store)

    async def submit_response(
        self,
        questionnaire_id: str,
        answers: Mapping[str, str],
        submitted_at: datetime | str,
        submitter: Submitter | None = None,
    ) -> ResponseRecord:
        return self.recorder.submit(
            questionnaire_id, answers, submitted_at, submitter=submitter
        )

    async def get_all_responses(self) -> list[ResponseRecord]:
        return self.store.get_all()

    async def get_responses_by_questionnaire(
        self, questionnaire_id: str
    ) -> list[ResponseRecord]:
        return self.aggregator.responses_for(questionnaire_id)

    async def get_response_stats(self, questionnaire_id: str) -> ResponseStats:
        return self.aggregator.stats(questionnaire_id)

    async def get_leaderboard(
        self, questionnaire_id: str
    ) -> list[LeaderboardEntry]:
        return self.aggregator.leaderboard(questionnaire_id)

    async def export_responses(
        self, questionnaire_id: str, out_path: Path
    ) -> Path:
        return self.aggregator.export_csv(questionnaire_id, out_path)

    def calculate_score(
        self,
        user_answers: Sequence[UserAnswer],
        questionnaire: Questionnaire,
    ) -> ScoringResult:
        return score_answers(user_answers, questionnaire)

    async def save_questionnaire(self, questionnaire: Questionnaire) -> None:
        self.catalog.save(questionnaire)
