"""
Cross-response statistics for a questionnaire.

All operations read the store on every call and never write to it.
"""

import logging
from collections import Counter
from pathlib import Path

import numpy as np
import pandas as pd

from response_service.analytics.data_models import (
    LeaderboardEntry,
    QuestionStat,
    ResponseStats,
)
from response_service.core.data_models import ResponseRecord
from response_service.scoring.scorer import score_percentage
from response_service.storage.store import ResponseStore

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Player", "Score", "Percentage", "Submitted", "Answers"]


def filter_by_questionnaire(
    records: list[ResponseRecord], questionnaire_id: str
) -> list[ResponseRecord]:
    """Records for one questionnaire, keeping their relative order."""
    return [r for r in records if r.questionnaire_id == questionnaire_id]


def average_score(records: list[ResponseRecord]) -> float:
    """Mean score over scored records only; 0.0 if none are scored."""
    scores = [r.score for r in records if r.score is not None]
    if not scores:
        return 0.0
    return float(np.mean(scores))


def positional_question_stats(
    records: list[ResponseRecord],
) -> list[QuestionStat]:
    """
    Tally selected options per answer position.

    Positions come from the first record's answers; every other record
    contributes its answer at the same position, if it has one. Records
    whose answers are ordered differently (an edited questionnaire, or
    partial submissions answering different questions) are tallied under
    the wrong question.
    """
    if not records:
        return []

    stats: list[QuestionStat] = []
    for i, reference in enumerate(records[0].answers):
        answers_at_i = [r.answers[i] for r in records if i < len(r.answers)]
        counts = Counter(
            a.selected_option for a in answers_at_i if a.selected_option
        )
        stats.append(
            QuestionStat(
                question_id=reference.question_id,
                question_text=reference.question_text,
                total_answers=len(answers_at_i),
                option_counts=dict(counts),
            )
        )
    return stats


class ResponseAggregator:
    def __init__(self, store: ResponseStore) -> None:
        self.store = store

    def responses_for(self, questionnaire_id: str) -> list[ResponseRecord]:
        return filter_by_questionnaire(self.store.get_all(), questionnaire_id)

    def stats(self, questionnaire_id: str) -> ResponseStats:
        """
        Summarize all responses to a questionnaire.

        Returns:
            ResponseStats with the response count, the mean score of the
            scored responses, and per-position option tallies. A
            questionnaire without responses yields all-zero stats.
        """
        records = self.responses_for(questionnaire_id)
        if not records:
            return ResponseStats()

        stats = ResponseStats(
            total_responses=len(records),
            average_score=average_score(records),
            question_stats=tuple(positional_question_stats(records)),
        )
        logger.debug(
            f"Stats for {questionnaire_id}: {stats.total_responses} responses, "
            f"average {stats.average_score:.2f}"
        )
        return stats

    def leaderboard(self, questionnaire_id: str) -> list[LeaderboardEntry]:
        """Scored responses by score (highest first), then earliest submission."""
        scored = [
            r for r in self.responses_for(questionnaire_id) if r.is_scored
        ]
        scored.sort(key=lambda r: (-(r.score or 0), r.submitted_at))
        return [
            LeaderboardEntry(
                rank=rank,
                response_id=r.id,
                submitter_name=r.submitter_name,
                score=r.score or 0,
                total_questions=r.total_questions,
                percentage=score_percentage(r.score, r.total_questions),
                submitted_at=r.submitted_at,
            )
            for rank, r in enumerate(scored, start=1)
        ]

    def score_distribution(self, questionnaire_id: str) -> dict[int, int]:
        """
        Count scored responses per score value.

        Keys run from 0 to the larger of the highest score and the
        highest total_questions seen, so zero-count scores are included.
        """
        scored = [
            r for r in self.responses_for(questionnaire_id) if r.is_scored
        ]
        if not scored:
            return {}
        scores = np.array([r.score for r in scored], dtype=np.int64)
        max_total = max((r.total_questions or 0) for r in scored)
        counts = np.bincount(scores, minlength=max(max_total, int(scores.max())) + 1)
        return {score: int(count) for score, count in enumerate(counts)}

    def to_dataframe(self, questionnaire_id: str) -> pd.DataFrame:
        """One row per response, newest first, in the admin export layout."""
        rows = []
        for r in self.responses_for(questionnaire_id):
            rows.append(
                {
                    "Player": r.submitter_name,
                    "Score": (
                        f"{r.score}/{r.total_questions}" if r.is_scored else ""
                    ),
                    "Percentage": score_percentage(r.score, r.total_questions),
                    "Submitted": r.submitted_at.date().isoformat(),
                    "Answers": "; ".join(
                        f"{a.question_text}: {a.selected_option}"
                        for a in r.answers
                    ),
                }
            )
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def export_csv(self, questionnaire_id: str, out_path: Path) -> Path:
        out_path = Path(out_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe(questionnaire_id)
        df.to_csv(out_path, index=False)
        logger.info(f"Exported {len(df)} responses to {out_path}")
        return out_path
