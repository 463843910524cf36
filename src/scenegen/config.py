"""Configuration management."""

import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )

    # Model settings
    default_model: str = Field(
        default_factory=lambda: os.getenv("SCENEGEN_MODEL", "claude-sonnet-4-20250514"),
        description="Default Claude model"
    )

    # Pipeline settings
    generation_timeout: float = Field(
        default_factory=lambda: float(os.getenv("SCENEGEN_GENERATION_TIMEOUT", "60")),
        description="Seconds to wait for the text model before falling back",
        gt=0,
    )
    default_style: str = Field(
        default_factory=lambda: os.getenv("SCENEGEN_DEFAULT_STYLE", "educational"),
        description="Style used when a request does not name one"
    )
    default_scene_duration: float = Field(
        default_factory=lambda: float(os.getenv("SCENEGEN_DEFAULT_SCENE_DURATION", "5.0")),
        description="Scene duration used when none is known",
        gt=0,
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that required credentials are set."""
        if not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set")


# Global config instance
config = Config()
