"""
Utility functions shared across response service modules.
"""

import uuid
from datetime import UTC, datetime

from pydantic import TypeAdapter, ValidationError

from response_service.core.data_models import ensure_utc
from response_service.core.exceptions import SubmissionValidationError

_DATETIME_ADAPTER = TypeAdapter(datetime)


def new_response_id() -> str:
    """
    Generate a response identifier.

    Uses a random 128-bit UUID so identifiers never depend on the clock.

    Returns:
        32-character lowercase hex string.
    """
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_timestamp(value: datetime | str) -> datetime:
    """
    Coerce a datetime or ISO-8601 string to an aware UTC datetime.

    Raises:
        SubmissionValidationError: If the value cannot be parsed.
    """
    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise SubmissionValidationError(
            f"Invalid submission timestamp: {value!r}"
        ) from e
    return ensure_utc(parsed)
