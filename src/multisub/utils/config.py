"""Library configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Codec defaults loaded from ``MULTISUB_*`` environment variables.

    Attributes:
        default_encoding: Text encoding used by the bytes facade
        microdvd_frame_rate: Frames per second for MicroDVD files without
            a frame-rate line
        lrc_time_format: Sub-second precision written by the LRC encoder
        csv_delimiter: Field delimiter for the CSV coder
        log_level: Minimum structlog level
        log_json: Render log events as JSON instead of console output
    """

    default_encoding: str = "utf-8"
    microdvd_frame_rate: float = Field(default=24.0, gt=0)
    lrc_time_format: Literal["hundredths", "milliseconds"] = "hundredths"
    csv_delimiter: str = Field(default=",", min_length=1, max_length=1)

    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MULTISUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached library settings.

    Returns:
        Settings instance loaded from environment

    Note:
        Settings are cached for performance. Use get_settings.cache_clear()
        to reload settings in tests.
    """
    return Settings()
