"""
Runtime configuration for the certsign command line tools.

Values come from the environment, optionally seeded from a .env file. The
library functions never consult these settings; they only pick defaults for
the scripts.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from .codec import FORMATS

# Load environment variables
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseModel):
    """Defaults for the scripts."""
    model_config = ConfigDict(frozen=True)

    log_level: str = "INFO"
    digest: str = "sha256"
    signature_format: str = "base64"

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return value

    @field_validator("signature_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        if value not in FORMATS:
            raise ValueError(f"unsupported signature format: {value}")
        return value


def get_settings() -> Settings:
    """
    Build settings from CERTSIGN_* environment variables.

    Returns:
        Settings object
    """
    return Settings(
        log_level=os.getenv('CERTSIGN_LOG_LEVEL', 'INFO'),
        digest=os.getenv('CERTSIGN_DIGEST', 'sha256'),
        signature_format=os.getenv('CERTSIGN_SIGNATURE_FORMAT', 'base64'),
    )


def configure_logging(level: Optional[str] = None):
    """Install a root handler; used by the scripts, never by the library."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
