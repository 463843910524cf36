"""Script data model."""

from enum import Enum
from pathlib import Path
from typing import Any, List

from pydantic import BaseModel, Field
import yaml

from .scene import Scene


class ScriptOrigin(str, Enum):
    """Which path produced a script's scenes."""
    AI = "ai"
    FALLBACK = "fallback"


class Script(BaseModel):
    """A generated video script: ordered scenes plus descriptive metadata."""

    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Short summary of the video")
    tags: List[str] = Field(default_factory=list, description="Related tags")
    scenes: List[Scene] = Field(default_factory=list, description="Ordered list of scenes")
    generated_by: ScriptOrigin = Field(default=ScriptOrigin.AI, description="Producing path")

    class Config:
        """Pydantic config."""
        frozen = False

    @property
    def total_duration(self) -> float:
        """Return the sum of all scene durations."""
        return round(sum(scene.duration for scene in self.scenes), 1)

    @property
    def is_fallback(self) -> bool:
        """Return True when the scenes were split mechanically."""
        return self.generated_by == ScriptOrigin.FALLBACK

    @classmethod
    def from_yaml(cls, path: Path) -> "Script":
        """Load script from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save script to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )

    def to_wire(self) -> dict[str, Any]:
        """Return the script in the snake_case JSON shape used by renderers."""
        return {
            "title": self.title,
            "description": self.description,
            "scenes": [scene.to_wire() for scene in self.scenes],
            "total_duration": self.total_duration,
            "tags": list(self.tags),
            "generated_by": self.generated_by.value,
        }
