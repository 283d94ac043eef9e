from datetime import UTC, datetime

import pytest

from response_service.core.exceptions import SubmissionValidationError
from response_service.core.utils import new_response_id, parse_timestamp


def test_response_ids_are_unique_hex() -> None:
    ids = {new_response_id() for _ in range(1000)}
    assert len(ids) == 1000
    for rid in ids:
        assert len(rid) == 32
        int(rid, 16)


def test_parse_iso_string() -> None:
    ts = parse_timestamp("2025-03-01T08:30:00Z")
    assert ts == datetime(2025, 3, 1, 8, 30, tzinfo=UTC)


def test_parse_naive_datetime() -> None:
    ts = parse_timestamp(datetime(2025, 3, 1, 8, 30))
    assert ts.tzinfo == UTC


def test_parse_invalid_timestamp() -> None:
    with pytest.raises(SubmissionValidationError, match="timestamp"):
        parse_timestamp("yesterday-ish")
