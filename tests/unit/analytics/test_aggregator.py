from datetime import UTC, datetime, timedelta
from pathlib import Path

import pandas as pd

from response_service.analytics.aggregator import (
    EXPORT_COLUMNS,
    ResponseAggregator,
    filter_by_questionnaire,
)
from response_service.analytics.data_models import ResponseStats
from response_service.core.data_models import AnswerRecord, ResponseRecord
from response_service.storage.store import ResponseStore

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)


def _answer(question_id: str, option: str, text: str = "") -> AnswerRecord:
    return AnswerRecord(
        question_id=question_id,
        question_text=text or f"Question {question_id}",
        selected_option=option,
    )


def _record(
    record_id: str,
    options: list[str],
    score: int | None = None,
    total_questions: int | None = None,
    questionnaire_id: str = "quiz",
    minutes: int = 0,
    name: str = "Anonymous User",
) -> ResponseRecord:
    return ResponseRecord(
        id=record_id,
        questionnaire_id=questionnaire_id,
        submitter_name=name,
        answers=tuple(
            _answer(f"q{i}", option) for i, option in enumerate(options)
        ),
        submitted_at=BASE_TIME + timedelta(minutes=minutes),
        score=score,
        total_questions=total_questions,
    )


def _aggregator(*records: ResponseRecord) -> ResponseAggregator:
    """Store records in the given order (the last one ends up newest)."""
    store = ResponseStore()
    for record in records:
        store.append(record)
    return ResponseAggregator(store)


class TestStats:
    def test_empty(self) -> None:
        stats = _aggregator().stats("quiz")
        assert stats == ResponseStats()
        assert stats.total_responses == 0
        assert stats.average_score == 0
        assert stats.question_stats == ()

    def test_other_questionnaire_only(self) -> None:
        stats = _aggregator(
            _record("r1", ["A"], score=1, questionnaire_id="other")
        ).stats("quiz")
        assert stats.total_responses == 0

    def test_average_score(self) -> None:
        agg = _aggregator(
            _record("r1", ["A"], score=3, total_questions=5),
            _record("r2", ["A"], score=5, total_questions=5),
            _record("r3", ["A"], score=4, total_questions=5),
        )
        stats = agg.stats("quiz")
        assert stats.total_responses == 3
        assert stats.average_score == 4

    def test_unscored_responses_excluded_from_average(self) -> None:
        agg = _aggregator(
            _record("r1", ["A"], score=2),
            _record("r2", ["A"]),
            _record("r3", ["A"], score=4),
        )
        stats = agg.stats("quiz")
        assert stats.total_responses == 3
        assert stats.average_score == 3

    def test_no_scored_responses(self) -> None:
        stats = _aggregator(_record("r1", ["A"])).stats("quiz")
        assert stats.total_responses == 1
        assert stats.average_score == 0

    def test_option_distribution(self) -> None:
        agg = _aggregator(
            _record("r1", ["A", "C"]),
            _record("r2", ["B", "C"]),
            _record("r3", ["A", "D"]),
        )
        stats = agg.stats("quiz")
        first = stats.question_stats[0]
        assert first.question_id == "q0"
        assert first.question_text == "Question q0"
        assert first.total_answers == 3
        assert first.option_counts == {"A": 2, "B": 1}
        assert stats.question_stats[1].option_counts == {"C": 2, "D": 1}

    def test_positions_follow_newest_response(self) -> None:
        # Newest response answered one question; older ones answered two.
        agg = _aggregator(
            _record("r1", ["A", "B"]),
            _record("r2", ["A", "C"]),
            _record("r3", ["B"]),
        )
        stats = agg.stats("quiz")
        assert len(stats.question_stats) == 1
        assert stats.question_stats[0].option_counts == {"A": 2, "B": 1}

    def test_short_responses_reduce_total_answers(self) -> None:
        agg = _aggregator(
            _record("r1", ["A"]),
            _record("r2", ["A", "B"]),
        )
        stats = agg.stats("quiz")
        assert stats.question_stats[1].total_answers == 1
        assert stats.question_stats[1].option_counts == {"B": 1}

    def test_misaligned_answers_are_tallied_by_position(self) -> None:
        old = ResponseRecord(
            id="r1",
            questionnaire_id="quiz",
            answers=(_answer("q1", "X"), _answer("q0", "A")),
            submitted_at=BASE_TIME,
        )
        new = _record("r2", ["A", "Y"], minutes=1)
        stats = _aggregator(old, new).stats("quiz")
        assert stats.question_stats[0].question_id == "q0"
        assert stats.question_stats[0].option_counts == {"A": 1, "X": 1}

    def test_empty_selected_option_not_tallied(self) -> None:
        agg = _aggregator(_record("r1", [""]), _record("r2", ["A"]))
        stat = agg.stats("quiz").question_stats[0]
        assert stat.total_answers == 2
        assert stat.option_counts == {"A": 1}


class TestFilter:
    def test_preserves_relative_order(self) -> None:
        agg = _aggregator(
            _record("r1", ["A"], questionnaire_id="quiz"),
            _record("r2", ["A"], questionnaire_id="other"),
            _record("r3", ["A"], questionnaire_id="quiz"),
            _record("r4", ["A"], questionnaire_id="other"),
        )
        all_records = agg.store.get_all()
        for qid in ("quiz", "other", "missing"):
            expected = [r for r in all_records if r.questionnaire_id == qid]
            assert agg.responses_for(qid) == expected
            assert filter_by_questionnaire(all_records, qid) == expected
        assert [r.id for r in agg.responses_for("quiz")] == ["r3", "r1"]


class TestLeaderboard:
    def test_ordering(self) -> None:
        agg = _aggregator(
            _record("early", ["A"], score=4, total_questions=5, minutes=0),
            _record("best", ["A"], score=5, total_questions=5, minutes=1),
            _record("late", ["A"], score=4, total_questions=5, minutes=2),
            _record("unscored", ["A"], minutes=3),
        )
        entries = agg.leaderboard("quiz")
        assert [e.response_id for e in entries] == ["best", "early", "late"]
        assert [e.rank for e in entries] == [1, 2, 3]
        assert entries[0].percentage == 100
        assert entries[1].percentage == 80

    def test_empty(self) -> None:
        assert _aggregator().leaderboard("quiz") == []


class TestScoreDistribution:
    def test_includes_zero_counts(self) -> None:
        agg = _aggregator(
            _record("r1", ["A"], score=1, total_questions=3),
            _record("r2", ["A"], score=3, total_questions=3),
            _record("r3", ["A"], score=3, total_questions=3),
            _record("r4", ["A"]),
        )
        assert agg.score_distribution("quiz") == {0: 0, 1: 1, 2: 0, 3: 2}

    def test_no_scored_responses(self) -> None:
        assert _aggregator(_record("r1", ["A"])).score_distribution("quiz") == {}


class TestExport:
    def test_dataframe_layout(self) -> None:
        agg = _aggregator(
            _record("r1", ["A", "B"], score=1, total_questions=2, name="Ada"),
            _record("r2", ["C"], name="Bob", minutes=1),
        )
        df = agg.to_dataframe("quiz")
        assert list(df.columns) == EXPORT_COLUMNS
        assert df["Player"].tolist() == ["Bob", "Ada"]
        assert df["Score"].tolist() == ["", "1/2"]
        assert df["Percentage"].tolist() == [0, 50]
        assert df["Submitted"].tolist() == ["2025-01-01", "2025-01-01"]
        assert df["Answers"].iloc[1] == "Question q0: A; Question q1: B"

    def test_empty_dataframe_has_columns(self) -> None:
        df = _aggregator().to_dataframe("quiz")
        assert df.empty
        assert list(df.columns) == EXPORT_COLUMNS

    def test_export_csv(self, tmp_path: Path) -> None:
        agg = _aggregator(
            _record("r1", ["A"], score=1, total_questions=1, name="Ada")
        )
        path = agg.export_csv("quiz", tmp_path / "out" / "quiz.csv")
        df = pd.read_csv(path, keep_default_na=False)
        assert df["Player"].tolist() == ["Ada"]
        assert df["Score"].tolist() == ["1/1"]
