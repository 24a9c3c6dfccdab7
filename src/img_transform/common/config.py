"""Runtime settings loaded from environment variables."""

import os
from functools import lru_cache
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "IMG_TRANSFORM_"


class Settings(BaseModel):
    """Handler settings.

    Timeouts are in seconds and apply to the source download and the
    destination upload independently.
    """

    log_level: str = Field(default="INFO", description="loguru level name")
    connect_timeout: float = Field(default=5.0, gt=0)
    fetch_timeout: float = Field(default=30.0, gt=0)
    upload_timeout: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="img-transform/0.1.0")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings so the environment is read once per process."""
    return Settings.from_env()
