"""Server configuration using pydantic-settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

READWISE_API_BASE_URL = "https://readwise.io/api/v2"
READWISE_API_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Settings loaded from environment variables and a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # An empty READWISE_API_TOKEN= line should not shadow the other sources
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    readwise_api_token: str | None = Field(default=None, validation_alias="READWISE_API_TOKEN")
    readwise_api_url: str = Field(
        default=READWISE_API_BASE_URL,
        validation_alias="READWISE_API_URL",
    )
    readwise_api_timeout: float = Field(
        default=READWISE_API_TIMEOUT, gt=0, validation_alias="READWISE_API_TIMEOUT",
    )

    # Logging never goes to stdout; stdout carries the MCP stream
    log_level: str = Field(default="INFO", validation_alias="READWISE_MCP_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="READWISE_MCP_LOG_FILE")
