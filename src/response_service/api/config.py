from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

ENV_PREFIX = "QUIZ_RESPONSES_"


class ServiceSettings(BaseSettings):
    model_config = {"env_prefix": ENV_PREFIX}

    data_dir: Path = Path("data")
    storage_backend: Literal["file", "memory"] = "file"
    host: str = "127.0.0.1"
    port: int = 8000
