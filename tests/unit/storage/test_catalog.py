import pytest

from response_service.core.constants import QUESTIONNAIRES_KEY
from response_service.core.data_models import Question, Questionnaire
from response_service.core.exceptions import StorageError
from response_service.storage.catalog import QuestionnaireCatalog
from response_service.storage.medium import InMemoryMedium


def _quiz(quiz_id: str, title: str = "Quiz") -> Questionnaire:
    return Questionnaire(
        id=quiz_id,
        title=title,
        questions=(
            Question(id="q1", options=("a", "b"), correct_answer_index=0),
        ),
    )


class TestQuestionnaireCatalog:
    def test_get_missing(self) -> None:
        assert QuestionnaireCatalog().get("quiz") is None

    def test_save_and_get(self) -> None:
        catalog = QuestionnaireCatalog()
        catalog.save(_quiz("quiz"))
        assert catalog.get("quiz") == _quiz("quiz")

    def test_save_replaces_same_id(self) -> None:
        catalog = QuestionnaireCatalog()
        catalog.save(_quiz("quiz", title="Old"))
        catalog.save(_quiz("other"))
        catalog.save(_quiz("quiz", title="New"))
        assert len(catalog.get_all()) == 2
        found = catalog.get("quiz")
        assert found is not None
        assert found.title == "New"

    def test_corrupt_catalog(self) -> None:
        medium = InMemoryMedium()
        medium.write(QUESTIONNAIRES_KEY, "nope")
        with pytest.raises(StorageError):
            QuestionnaireCatalog(medium).get("quiz")
