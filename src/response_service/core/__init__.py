"""
Core shared types and utilities for the response service.

Questionnaire and response models live here so the storage, scoring and
analytics layers can depend on them without depending on each other.
"""

from response_service.core.data_models import (
    ANONYMOUS,
    AnswerRecord,
    Question,
    Questionnaire,
    ResponseRecord,
    Submitter,
    UserAnswer,
)
from response_service.core.exceptions import (
    ResponseServiceError,
    StorageError,
    SubmissionValidationError,
)
from response_service.core.utils import new_response_id, parse_timestamp, utc_now

__all__ = [
    "ANONYMOUS",
    "AnswerRecord",
    "new_response_id",
    "parse_timestamp",
    "Question",
    "Questionnaire",
    "ResponseRecord",
    "ResponseServiceError",
    "StorageError",
    "Submitter",
    "SubmissionValidationError",
    "UserAnswer",
    "utc_now",
]
