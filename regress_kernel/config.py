"""
Configuration management for the Regress Kernel.

Loads settings from environment variables (and an optional .env file).
The verification core itself is configuration-free; these settings only
shape the outer layers: domain size bound, ledger location, logging.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegressConfig(BaseSettings):
    """Regress Kernel configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
        alias="LOG_LEVEL",
    )

    ledger_db_path: str = Field(
        default=":memory:",
        description="SQLite path for the verification ledger",
        alias="REGRESS_LEDGER_DB",
    )

    # Exhaustive enumeration is only meaningful over tiny domains
    max_domain_size: int = Field(
        default=8,
        ge=1,
        description="Upper bound on entity domain cardinality",
        alias="REGRESS_MAX_DOMAIN_SIZE",
    )

    model_config = SettingsConfigDict(
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global config instance
_config: Optional[RegressConfig] = None


def get_config() -> RegressConfig:
    """Get the global Regress Kernel configuration."""
    global _config
    if _config is None:
        _config = RegressConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config
    _config = None
