"""
Configuration and constants for the ChefGPT generation service.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # OpenAI Configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TIMEOUT: float = float(os.getenv("OPENAI_TIMEOUT", 90))
    # Ask the provider for a bare JSON object where it supports it
    OPENAI_JSON_MODE: bool = _env_flag("OPENAI_JSON_MODE", True)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Server Configuration
    PORT: int = int(os.getenv("PORT", 10000))
    HOST: str = "0.0.0.0"

    # AI Temperature Settings
    TEMPERATURE_CREATIVE: float = 0.7   # Recipes and meal plans
    TEMPERATURE_ANALYSIS: float = 0.4   # Food photo estimates

    # Food photo handling
    IMAGE_DOWNLOAD_TIMEOUT: int = 20
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024  # 10 MB
    IMAGE_MAX_EDGE: int = 1568                # Longest side sent to the model

    # Rate limits (slowapi syntax)
    RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
    RATE_LIMIT_GENERATION: str = os.getenv("RATE_LIMIT_GENERATION", "10/minute")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration on startup."""
        missing = []

        if not cls.OPENAI_API_KEY:
            missing.append("OPENAI_API_KEY")

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )


settings = Settings()
