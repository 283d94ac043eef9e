"""
Recording of questionnaire submissions.

The recorder turns a raw submission (question id -> chosen option text)
into a canonical ResponseRecord and appends it to the store. When the
questionnaire is available, answers are resolved to option indices and
scored before the record is written.
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from response_service.core.constants import UNRESOLVED_OPTION_INDEX
from response_service.core.data_models import (
    ANONYMOUS,
    AnswerRecord,
    Questionnaire,
    ResponseRecord,
    Submitter,
    UserAnswer,
)
from response_service.core.exceptions import SubmissionValidationError
from response_service.core.utils import new_response_id, parse_timestamp
from response_service.scoring.scorer import score_answers
from response_service.storage.catalog import QuestionnaireCatalog
from response_service.storage.store import ResponseStore

logger = logging.getLogger(__name__)


def _validate_answers(answers: object) -> dict[str, str]:
    if not isinstance(answers, Mapping):
        raise SubmissionValidationError(
            "answers must map question ids to option texts"
        )
    validated: dict[str, str] = {}
    for question_id, option in answers.items():
        if not isinstance(question_id, str) or not question_id:
            raise SubmissionValidationError(
                f"Invalid question id: {question_id!r}"
            )
        if not isinstance(option, str):
            raise SubmissionValidationError(
                f"Answer to question {question_id!r} must be an option text"
            )
        validated[question_id] = option
    return validated


def resolve_answers(
    answers: Mapping[str, str], questionnaire: Questionnaire
) -> list[UserAnswer]:
    """
    Convert chosen option texts to option indices.

    Answers to questions missing from the questionnaire get
    UNRESOLVED_OPTION_INDEX; the scorer marks them incorrect.

    Raises:
        SubmissionValidationError: If an option text is not one of its
            question's options.
    """
    questions = questionnaire.question_index()
    user_answers: list[UserAnswer] = []
    for question_id, option in answers.items():
        question = questions.get(question_id)
        if question is None:
            index = UNRESOLVED_OPTION_INDEX
        elif option in question.options:
            index = question.options.index(option)
        else:
            raise SubmissionValidationError(
                f"{option!r} is not an option of question {question_id!r}"
            )
        user_answers.append(
            UserAnswer(question_id=question_id, selected_option_index=index)
        )
    return user_answers


class ResponseRecorder:
    def __init__(
        self,
        store: ResponseStore,
        catalog: QuestionnaireCatalog | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog

    def _lookup(self, questionnaire_id: str) -> Questionnaire | None:
        if self.catalog is None:
            return None
        return self.catalog.get(questionnaire_id)

    def submit(
        self,
        questionnaire_id: str,
        answers: Mapping[str, str],
        submitted_at: datetime | str,
        submitter: Submitter | None = None,
        questionnaire: Questionnaire | None = None,
    ) -> ResponseRecord:
        """
        Validate, resolve and persist one submission.

        Args:
            questionnaire_id: Questionnaire being answered.
            answers: Question id -> chosen option text. May be partial.
            submitted_at: Submission time (datetime or ISO-8601 string).
            submitter: Participant identity; anonymous if omitted.
            questionnaire: Answer key. If omitted, it is looked up in the
                catalog; if still unavailable the record is stored unscored.

        Returns:
            The stored ResponseRecord.

        Raises:
            SubmissionValidationError: If the submission is malformed.
            StorageError: If the record could not be persisted.
        """
        if not isinstance(questionnaire_id, str) or not questionnaire_id.strip():
            raise SubmissionValidationError("questionnaire_id must be non-empty")
        validated = _validate_answers(answers)
        timestamp = parse_timestamp(submitted_at)
        submitter = submitter or ANONYMOUS

        if questionnaire is None:
            questionnaire = self._lookup(questionnaire_id)
        elif questionnaire.id != questionnaire_id:
            raise SubmissionValidationError(
                f"Questionnaire {questionnaire.id!r} does not match "
                f"submission for {questionnaire_id!r}"
            )

        if questionnaire is None:
            record = ResponseRecord(
                id=new_response_id(),
                questionnaire_id=questionnaire_id,
                submitter_id=submitter.submitter_id,
                submitter_name=submitter.submitter_name,
                answers=tuple(
                    AnswerRecord(question_id=qid, selected_option=option)
                    for qid, option in validated.items()
                ),
                submitted_at=timestamp,
            )
        else:
            result = score_answers(
                resolve_answers(validated, questionnaire), questionnaire
            )
            record = ResponseRecord(
                id=new_response_id(),
                questionnaire_id=questionnaire_id,
                questionnaire_title=questionnaire.title,
                submitter_id=submitter.submitter_id,
                submitter_name=submitter.submitter_name,
                answers=result.answers,
                submitted_at=timestamp,
                score=result.score,
                total_questions=result.total_questions,
            )

        self.store.append(record)

        if record.is_scored:
            logger.info(
                f"Recorded response {record.id} for {questionnaire_id}: "
                f"{record.score}/{record.total_questions}"
            )
        else:
            logger.info(
                f"Recorded unscored response {record.id} for {questionnaire_id}"
            )
        return record
