# teesheet/config.py

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]

_SQLITE_RELATIVE = "sqlite:///./"


class Settings(BaseSettings):
    database_url: str
    redis_url: str

    log_level: str = "INFO"
    # POST /internal/* answers 404 unless this is on
    enable_internal_endpoints: bool = False

    cart_hold_ttl_seconds: int = Field(300, gt=0)
    hold_sweep_interval_seconds: int = Field(15, gt=0)

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def resolved_database_url(self) -> str:
        """SQLite paths like sqlite:///./data/x.db are anchored at the repo root."""
        if not self.database_url.startswith(_SQLITE_RELATIVE):
            return self.database_url
        path = BASE_DIR / self.database_url[len(_SQLITE_RELATIVE):]
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{path}"


settings = Settings()
