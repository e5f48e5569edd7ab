"""Configuration settings for the mcp-mem0 server.

This module provides Pydantic Settings for configuration management.
Settings are loaded from environment variables with the MEM0_ prefix,
optionally via a .env file.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Mem0Settings(BaseSettings):
    """Configuration settings for the mcp-mem0 server.

    The API key is not validated here: Mem0Store refuses to start without
    it, which keeps the failure at the single place that needs the key.

    Attributes:
        api_key: Mem0 platform API key (MEM0_API_KEY)
        user_id: Default user id for memory isolation (MEM0_USER_ID)
        log_level: Logging level (MEM0_LOG_LEVEL)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEM0_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra env vars without error
    )

    api_key: str = Field(default="", description="Mem0 platform API key")
    user_id: Optional[str] = Field(
        default=None,
        description="Default user id when a tool call does not provide one",
    )
    log_level: LogLevel = Field(default="INFO", description="Logging level")

    @field_validator("user_id", mode="before")
    @classmethod
    def _blank_user_id_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value
