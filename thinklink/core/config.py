"""Configuration management for thinklink."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Weight persistence
    redis_url: str | None = Field(default=None, description="Redis connection URL (e.g., redis://localhost:6379)")
    weights_store_path: Path | None = Field(
        default=Path(".thinklink/store.json"),
        description="JSON file used as durable local storage when Redis is not configured",
    )
    weights_storage_key: str = Field(
        default="thinklink:neural_weights", description="Fixed key for the serialized weight blob"
    )

    # Trainable scorer
    learning_rate: float = Field(default=0.05, description="Fixed online learning rate")
    max_training_epochs: int = Field(default=300, description="Cap on passes over the training samples")
    accuracy_check_interval: int = Field(default=10, description="Epochs between priority accuracy checks")
    target_accuracy: float = Field(default=0.95, description="Priority accuracy that stops training early")

    # Command interpreter
    neural_blend_ratio: float = Field(
        default=0.7, description="Probability of using the neural priority instead of the keyword rule"
    )
    random_seed: int | None = Field(default=None, description="Seed for weight initialisation and priority blending")

    # Canvas
    canvas_width: int = Field(default=60, description="Fixed width of the rendered task canvas")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Task identity
    TASK_ID_HEX_LENGTH: int = 24

    # Tokenizer
    MIN_STEM_LENGTH: int = 3

    # Task namer
    SUMMARY_MAX_NAME_WORDS: int = 5
    SUMMARY_FALLBACK_WORDS: int = 4
    DEFAULT_TASK_NAME: str = "New Task"

    # Rule-based priority scoring
    HIGH_PRIORITY_SCORE: int = 6
    MEDIUM_PRIORITY_SCORE: int = 4
    URGENCY_POINTS: int = 2
    RELATIONSHIP_POINTS: int = 1
    DUE_SOON_DAYS: int = 2
    DUE_SOON_POINTS: int = 3
    DUE_THIS_WEEK_DAYS: int = 7
    DUE_THIS_WEEK_POINTS: int = 2
    SENTIMENT_MULTIPLIER: int = 2
    SENTIMENT_STEP: float = 0.2

    # Neural priority buckets
    NEURAL_HIGH_THRESHOLD: float = 0.7
    NEURAL_MEDIUM_THRESHOLD: float = 0.4


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
