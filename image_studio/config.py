"""Configuration management for the application."""

from typing import Annotated, Literal

from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, field_validator


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    log_level: str = Field(default="INFO", description="Loguru log level")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware, comma separated",
    )

    # Proxy Configuration
    proxy: str | None = Field(default=None, description="HTTP proxy URL")

    # Timeout Configuration
    timeout: int = Field(default=120, description="Upstream request timeout in seconds")

    # Upload Configuration
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum reference image size in bytes"
    )

    # Gemini API Configuration
    gemini_api_key: str | None = Field(default=None, description="Gemini API key")
    gemini_image_model: str | None = Field(
        default=None, description="Model used for generateContent image requests"
    )
    gemini_model: str | None = Field(
        default=None, description="Fallback for GEMINI_IMAGE_MODEL"
    )
    imagen_model: str = Field(
        default="models/imagen-3.0-generate-001",
        description="Model used for generateImages requests",
    )
    reference_backend: Literal["gemini", "imagen"] = Field(
        default="gemini",
        description="Upstream operation used for image-plus-prompt requests",
    )
    gemini_base_api: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini base API URL",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def uvicorn_log_level(self) -> str:
        """Nearest uvicorn level for the configured loguru level."""
        if self.log_level == "SUCCESS":
            return "info"
        return self.log_level.lower()

    @property
    def image_model(self) -> str:
        """Resolved generateContent model, always prefixed with ``models/``."""
        return model_path(
            self.gemini_image_model or self.gemini_model or "gemini-2.5-flash-image"
        )


def model_path(name: str) -> str:
    """Normalize a model identifier to the ``models/<name>`` form used in URLs."""
    name = name.strip().strip("/")
    if name.startswith("models/"):
        return name
    return f"models/{name}"


# Global settings instance
settings = Settings()
