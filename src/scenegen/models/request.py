"""Generation request model."""

from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_STYLE = "educational"
DEFAULT_TARGET_DURATION = 60.0


class GenerationRequest(BaseModel):
    """Input to a single script generation run.

    ``source_text`` emptiness is checked by the orchestrator rather than here
    so that it surfaces as a :class:`~scenegen.errors.ValidationError`.
    """

    source_text: str = Field(..., description="Theme, transcript or script to turn into scenes")
    requested_scene_count: Optional[int] = Field(
        None, description="Exact number of scenes; derived from duration when omitted"
    )
    style: str = Field(default=DEFAULT_STYLE, description="Style tag or free-text style keyword")
    target_duration: float = Field(
        default=DEFAULT_TARGET_DURATION, gt=0, description="Target video length in seconds"
    )

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def scene_count(self) -> int:
        """Return the requested scene count, deriving it from duration if unset."""
        if self.requested_scene_count is not None:
            return self.requested_scene_count
        from ..pipeline.prompts import calculate_scene_count

        return calculate_scene_count(self.target_duration)
