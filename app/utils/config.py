"""Application configuration settings using Pydantic."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError


class Settings(BaseSettings):
    """Application configuration settings."""

    # OpenAI Configuration
    # Optional at load time: a missing key is reported per request.
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-4o", validation_alias="OPENAI_MODEL")
    openai_max_tokens: int = Field(4096, validation_alias="OPENAI_MAX_TOKENS")
    openai_temperature: float = Field(0.4, validation_alias="OPENAI_TEMPERATURE")

    # API Configuration
    api_host: str = Field("0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(8080, validation_alias="API_PORT")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # CORS Configuration
    allowed_origins: list[str] = Field(
        ["*"],
        validation_alias="ALLOWED_ORIGINS",
    )

    # Trusted Hosts Configuration
    trusted_hosts: list[str] = Field(["*"], validation_alias="TRUSTED_HOSTS")

    # Rate Limiting
    rate_limit_per_minute: int = Field(30, validation_alias="RATE_LIMIT_PER_MINUTE")

    # Uploaded designs arrive as data URLs; bare base64 is assumed to be this type
    default_image_mime_type: str = Field(
        "image/png", validation_alias="DEFAULT_IMAGE_MIME_TYPE"
    )

    class Config:
        """Pydantic configuration to load from .env file."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        s = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        # Raise a helpful message in logs for invalid envs
        raise RuntimeError(f"Configuration error: {e}") from e
    return s
