"""
Append-only store of response records.

The whole collection lives under a single key of a KeyValueMedium as a
JSON array, newest record first. Appending reads the collection,
prepends the new record and writes everything back as one replace.
"""

import logging
import threading

from pydantic import TypeAdapter, ValidationError

from response_service.core.constants import RESPONSES_KEY
from response_service.core.data_models import ResponseRecord
from response_service.core.exceptions import StorageError
from response_service.storage.medium import InMemoryMedium, KeyValueMedium

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[ResponseRecord])


def encode_records(records: list[ResponseRecord]) -> str:
    return _RECORDS_ADAPTER.dump_json(records, by_alias=True).decode("utf-8")


def decode_records(raw: str) -> list[ResponseRecord]:
    """
    Parse a stored JSON array into response records.

    Raises:
        StorageError: If the data is not valid JSON or does not match the
            record schema. Corrupt data is never treated as empty.
    """
    try:
        return _RECORDS_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise StorageError(
            f"Stored responses are corrupt ({e.error_count()} errors)"
        ) from e


class ResponseStore:
    def __init__(
        self,
        medium: KeyValueMedium | None = None,
        key: str = RESPONSES_KEY,
    ) -> None:
        self.medium = medium if medium is not None else InMemoryMedium()
        self.key = key
        self._lock = threading.Lock()

    def get_all(self) -> list[ResponseRecord]:
        """Return every stored record, newest first."""
        raw = self.medium.read(self.key)
        if raw is None:
            return []
        return decode_records(raw)

    def append(self, record: ResponseRecord) -> None:
        """
        Prepend a record and persist the full collection.

        Raises:
            StorageError: If the current collection cannot be read, a record
                with the same id already exists, or the write fails. The
                persisted collection is unchanged in every failure case.
        """
        with self._lock:
            records = self.get_all()
            if any(r.id == record.id for r in records):
                raise StorageError(f"Duplicate response id: {record.id}")
            records.insert(0, record)
            try:
                payload = encode_records(records)
            except ValueError as e:
                raise StorageError(f"Failed to serialize responses: {e}") from e
            self.medium.write(self.key, payload)
        logger.debug(
            f"Appended response {record.id} ({len(records)} stored)"
        )
