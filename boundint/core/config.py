"""
Configuration Management Module

Centralized configuration using pydantic-settings (env prefix BOUNDINT_).
Settings only affect ambient behaviour (logging, formatter buffer pooling);
arithmetic and wire formats are fixed and never configurable.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoundIntSettings(BaseSettings):
    """boundint runtime configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Optional[str] = None  # If None, logs to stderr

    # Formatter scratch-buffer pool (max idle buffers kept for reuse)
    format_pool_size: int = Field(32, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="BOUNDINT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Optional[BoundIntSettings] = None


def get_settings() -> BoundIntSettings:
    """Get global settings instance"""
    global _settings
    if _settings is None:
        _settings = BoundIntSettings()
    return _settings


def reload_settings() -> BoundIntSettings:
    """Reload settings from environment"""
    global _settings
    _settings = BoundIntSettings()
    return _settings
