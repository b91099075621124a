# screengrab/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class ShortDisplayPolicy(str, Enum):
    """What to do when a display is not taller than the trim margin."""
    reject = "reject"
    full = "full"  # capture the untrimmed display height
    skip = "skip"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for screengrab.

    Values load in this order of precedence:
      1) Environment variables (prefixed with SCREENGRAB_)
      2) .env file in the working directory
      3) Defaults below

    The defaults reproduce the plain `screengrab` run: trimmed captures
    into ./img/.
    """

    # ---- Output ----
    OUTPUT_DIR: Path = Field(default=Path("img"), description="Folder for PNG files, relative to CWD")
    DIR_MODE: int = Field(default=0o755, ge=0, le=0o777, description="Mode used when creating OUTPUT_DIR")

    # ---- Capture ----
    TIMESTAMP_MODE: bool = Field(default=False, description="Capture full display (keep the system clock strip)")
    TRIM_MARGIN: int = Field(default=50, ge=0, description="Pixels cut from the bottom in trimmed mode")
    TRIM_AT_DISPLAY_ORIGIN: bool = Field(default=False, description="Anchor trimmed rect at the display origin, not (0, 0)")
    SHORT_DISPLAY_POLICY: ShortDisplayPolicy = Field(default=ShortDisplayPolicy.reject)

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./screengrab.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="SCREENGRAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("OUTPUT_DIR", "LOG_FILE", mode="before")
    @classmethod
    def _coerce_to_path(cls, v):
        if isinstance(v, Path):
            return v
        return Path(str(v)) if v is not None else v

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _absolutize_log_file(cls, v: Path):
        return v if v.is_absolute() else Path.cwd() / v

    @field_validator("DIR_MODE", mode="before")
    @classmethod
    def _parse_octal(cls, v):
        # Accept "755" / "0o755" from the environment
        if isinstance(v, str):
            return int(v, 8)
        return v


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()
