"""
Homomorphic Hash Configuration

Environment-based configuration for the tunable parts of homhash.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HomHashSettings(BaseSettings):
    """Settings read from HOMHASH_* environment variables."""

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format: json or text"
    )

    # LtHash parameters
    lthash_lanes: int = Field(
        default=1024,
        gt=0,
        description="Number of 16-bit lanes in an LtHash16 accumulator"
    )

    lthash_xof: Literal["shake128", "shake256"] = Field(
        default="shake128",
        description="Extendable-output function used to expand LtHash16 items"
    )

    model_config = SettingsConfigDict(
        env_prefix="HOMHASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = HomHashSettings()


def get_settings() -> HomHashSettings:
    """Get homhash settings."""
    return settings
