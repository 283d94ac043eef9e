from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from response_service.core.data_models import Submitter

# --- Request schemas ---


class SubmitResponseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    questionnaire_id: str = Field(min_length=1)
    responses: dict[str, str]
    submitted_at: datetime
    submitter_id: str | None = None
    submitter_name: str | None = None

    def to_submitter(self) -> Submitter | None:
        if self.submitter_id is None and self.submitter_name is None:
            return None
        defaults = Submitter()
        return Submitter(
            submitter_id=self.submitter_id or defaults.submitter_id,
            submitter_name=self.submitter_name or defaults.submitter_name,
        )


# --- Response schemas ---


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
