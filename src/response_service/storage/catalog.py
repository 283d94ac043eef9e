"""
Questionnaire definitions readable by the recorder.

Questionnaires are owned by the course/test management side; it pushes
definitions in with ``save`` and the core only ever looks them up.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from response_service.core.constants import QUESTIONNAIRES_KEY
from response_service.core.data_models import Questionnaire
from response_service.core.exceptions import StorageError
from response_service.storage.medium import InMemoryMedium, KeyValueMedium

logger = logging.getLogger(__name__)

_QUESTIONNAIRES_ADAPTER = TypeAdapter(list[Questionnaire])


class QuestionnaireCatalog:
    def __init__(
        self,
        medium: KeyValueMedium | None = None,
        key: str = QUESTIONNAIRES_KEY,
    ) -> None:
        self.medium = medium if medium is not None else InMemoryMedium()
        self.key = key

    def get_all(self) -> list[Questionnaire]:
        raw = self.medium.read(self.key)
        if raw is None:
            return []
        try:
            return _QUESTIONNAIRES_ADAPTER.validate_json(raw)
        except ValidationError as e:
            raise StorageError("Stored questionnaires are corrupt") from e

    def get(self, questionnaire_id: str) -> Questionnaire | None:
        for questionnaire in self.get_all():
            if questionnaire.id == questionnaire_id:
                return questionnaire
        return None

    def save(self, questionnaire: Questionnaire) -> None:
        """Insert a questionnaire or replace the one with the same id."""
        questionnaires = [
            q for q in self.get_all() if q.id != questionnaire.id
        ]
        questionnaires.append(questionnaire)
        payload = _QUESTIONNAIRES_ADAPTER.dump_json(
            questionnaires, by_alias=True
        ).decode("utf-8")
        self.medium.write(self.key, payload)
        logger.info(
            f"Saved questionnaire {questionnaire.id} "
            f"({questionnaire.n_questions} questions)"
        )
