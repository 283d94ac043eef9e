"""
Scoring of submitted answers against a questionnaire's answer key.
"""

from collections.abc import Sequence

from response_service.core.data_models import (
    AnswerRecord,
    CamelModel,
    Questionnaire,
    UserAnswer,
)


class ScoringResult(CamelModel):
    score: int
    total_questions: int
    answers: tuple[AnswerRecord, ...]


def _option_text(options: Sequence[str], index: int) -> str:
    if 0 <= index < len(options):
        return options[index]
    return ""


def score_answers(
    user_answers: Sequence[UserAnswer],
    questionnaire: Questionnaire,
) -> ScoringResult:
    """
    Score answers against the questionnaire's correct answer indices.

    An answer is correct only when its question defines a
    correct_answer_index equal to the selected index. Answers to unknown
    questions are kept with empty texts and marked incorrect.
    An index outside its question's options is kept as given, with an
    empty selected_option, and is never correct; the recorder only ever
    passes indices resolved from option texts.

    total_questions is the questionnaire's question count, not the number
    of answers given, so unanswered questions count as wrong.

    Args:
        user_answers: Answers in submission order.
        questionnaire: Questionnaire holding the answer key.

    Returns:
        ScoringResult with one enriched AnswerRecord per user answer, in
        the same order.
    """
    questions = questionnaire.question_index()

    score = 0
    answers: list[AnswerRecord] = []
    for user_answer in user_answers:
        question = questions.get(user_answer.question_id)
        if question is None:
            answers.append(
                AnswerRecord(
                    question_id=user_answer.question_id,
                    selected_option_index=user_answer.selected_option_index,
                    is_correct=False,
                )
            )
            continue

        is_correct = (
            question.correct_answer_index is not None
            and question.correct_answer_index
            == user_answer.selected_option_index
        )
        if is_correct:
            score += 1

        answers.append(
            AnswerRecord(
                question_id=user_answer.question_id,
                question_text=question.text,
                selected_option=_option_text(
                    question.options, user_answer.selected_option_index
                ),
                selected_option_index=user_answer.selected_option_index,
                is_correct=is_correct,
            )
        )

    return ScoringResult(
        score=score,
        total_questions=questionnaire.n_questions,
        answers=tuple(answers),
    )


def score_percentage(score: int | None, total_questions: int | None) -> int:
    """Rounded percentage of score out of total_questions (0 if undefined)."""
    if score is None or not total_questions:
        return 0
    return round(score / total_questions * 100)
