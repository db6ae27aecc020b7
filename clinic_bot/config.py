import os
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings with validation.
    Uses Pydantic Settings for automatic env var loading and type validation.
    """

    # --- Model Configuration ---
    llm_model: str = Field(
        default="gemini-2.0-flash",
        description="LLM used for intent classification and general chat",
    )
    llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for the chat model",
        ge=0.0,
        le=2.0,
    )

    # --- LLM Service Configuration ---
    llm_timeout: int | None = Field(
        default=None,
        description="Timeout in seconds for LLM calls (None keeps the client default)",
        ge=1,
        le=120,
    )
    llm_max_attempts: int = Field(
        default=1,
        description="Attempts per LLM call; 1 disables retries",
        ge=1,
        le=5,
    )

    # --- Conversation ---
    history_window: int = Field(
        default=5,
        description="History lines given to the intent classifier",
        ge=0,
        le=50,
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # --- HTTP API ---
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8000, description="Bind port for uvicorn")
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the chat endpoint (the widget host)",
    )

    # --- API Keys ---
    google_api_key: str | None = Field(
        default=None, description="Google API key for Gemini"
    )
    openai_api_key: str | None = Field(
        default=None, description="OpenAI API key (only for gpt models)"
    )

    class Config:
        """Pydantic config."""

        env_file = os.getenv("DOTENV_PATH", ".env")
        case_sensitive = False
        extra = "ignore"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If env vars are present but invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def api_key_for(model_name: str, settings: Settings | None = None) -> str | None:
    """
    Picks the provider key matching a model name.

    Args:
        model_name: Model identifier (e.g., "gemini-2.0-flash", "gpt-4o")
        settings: Settings to read from (defaults to the cached instance)

    Returns:
        API key or None when not configured
    """
    settings = settings or get_settings()
    if "gpt" in model_name:
        return settings.openai_api_key
    return settings.google_api_key


def check_env_vars() -> None:
    """
    Validates that the model credentials are loaded.

    Raises:
        ValueError: If no key is configured for the selected model
    """
    settings = get_settings()
    if not api_key_for(settings.llm_model, settings):
        raise ValueError(
            f"No API key configured for model '{settings.llm_model}'. "
            "Set GOOGLE_API_KEY (gemini) or OPENAI_API_KEY (gpt)."
        )
