"""
Key-value persistence media.

A medium stores opaque string values under string keys. Every write
replaces the whole value for a key; there are no partial updates.
"""

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from response_service.core.exceptions import StorageError

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[A-Za-z0-9_\-]+$")


def _check_key(key: str) -> None:
    if not _VALID_KEY.match(key):
        raise ValueError(f"Invalid storage key: {key!r}")


class KeyValueMedium(ABC):
    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the value stored under key, or None if never written."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the value stored under key in a single operation."""


class InMemoryMedium(KeyValueMedium):
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        _check_key(key)
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        _check_key(key)
        self._values[key] = value


class JsonFileMedium(KeyValueMedium):
    """
    File-backed medium storing each key as ``<data_dir>/<key>.json``.

    Writes go to a temporary file in the same directory which then
    replaces the target with ``os.replace``, so readers see either the
    previous value or the new one.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        _check_key(key)
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name: str | None = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {len(value)} bytes to {path}")
