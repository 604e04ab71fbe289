"""
HKDF Engine Configuration

Settings for the high-level derivation helpers, with environment
variable support (prefix ``HKDF_``). The extract/expand core never reads
these: it always takes its MAC explicitly.
"""

import logging
import sys
from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Library settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="HKDF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Derivation defaults
    default_algorithm: Literal["sha256", "sha512", "sha1"] = "sha256"
    default_key_length: int = 32

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("default_algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls, v):
        """Accept names like "SHA-256" or "HMAC_SHA512"."""
        if isinstance(v, str):
            v = v.lower().replace("-", "").replace("_", "")
            if v.startswith("hmac"):
                v = v[len("hmac"):]
        return v

    @field_validator("default_key_length")
    @classmethod
    def validate_key_length(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_key_length must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a stdout handler to the package logger at the configured level.

    Intended for applications and scripts; the library itself only
    installs a NullHandler.
    """
    settings = settings or get_settings()

    package_logger = logging.getLogger("hkdf_engine")
    package_logger.setLevel(getattr(logging, settings.log_level))

    for handler in package_logger.handlers:
        if getattr(handler, "_hkdf_engine_handler", False):
            return package_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._hkdf_engine_handler = True
    package_logger.addHandler(handler)

    return package_logger
