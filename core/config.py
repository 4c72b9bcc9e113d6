"""
Application configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Project-wide settings"""

    PROJECT_NAME: str = Field(default="Airwallex Gateway")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    # Transport request/response logging (bodies are always scrubbed)
    LOG_PROVIDER_TRAFFIC: bool = Field(default=False)
    LOG_PROVIDER_BODY_MAX_BYTES: int = Field(default=2048)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


settings = Settings()
