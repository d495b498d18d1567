from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from the environment (and an optional .env file).

    The classifier itself needs no configuration; these settings drive the logging
    stack that surrounds it.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/sqlstate-classifier")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # Statement text may carry literal values (emails, ids, ...); mask it in log records,
    # including sqlalchemy.engine output when ENABLE_SQL_LOGGING is on.
    LOG_REDACT_STATEMENTS: bool = True

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Upper-case LOG_LEVEL before validation so `LOG_LEVEL=debug` is accepted.
        """
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings never change during a process lifetime; build them once.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
