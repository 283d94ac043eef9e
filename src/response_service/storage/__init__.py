from response_service.storage.catalog import QuestionnaireCatalog
from response_service.storage.medium import (
    InMemoryMedium,
    JsonFileMedium,
    KeyValueMedium,
)
from response_service.storage.store import (
    ResponseStore,
    decode_records,
    encode_records,
)

__all__ = [
    "decode_records",
    "encode_records",
    "InMemoryMedium",
    "JsonFileMedium",
    "KeyValueMedium",
    "QuestionnaireCatalog",
    "ResponseStore",
]
