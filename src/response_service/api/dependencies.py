from functools import lru_cache

from response_service.api.config import ServiceSettings
from response_service.core.version import get_project_version
from response_service.service import ResponseService
from response_service.storage.medium import (
    InMemoryMedium,
    JsonFileMedium,
    KeyValueMedium,
)
from response_service.storage.store import ResponseStore


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    return ServiceSettings()


_service: ResponseService | None = None


def build_service(settings: ServiceSettings) -> ResponseService:
    medium: KeyValueMedium
    if settings.storage_backend == "memory":
        medium = InMemoryMedium()
    else:
        medium = JsonFileMedium(settings.data_dir)
    return ResponseService(ResponseStore(medium))


def init_service(settings: ServiceSettings) -> ResponseService:
    global _service  # noqa: PLW0603
    _service = build_service(settings)
    return _service


def get_service() -> ResponseService:
    assert _service is not None, "ResponseService not initialized"
    return _service


def get_version() -> str:
    return get_project_version()
