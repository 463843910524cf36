"""Image prompt enhancement data models."""

from typing import List, Literal

from pydantic import BaseModel, Field

from .scene import Emotion, ImageEffect


class SceneForEnhancement(BaseModel):
    """Read-only view of a scene handed to the enhancement pass."""

    scene_index: int = Field(..., ge=1, description="Index of the scene being enhanced")
    original_prompt: str = Field(default="", description="Current image prompt")
    narration_text: str = Field(default="", description="Narration spoken over the image")
    emotion: Emotion = Field(default=Emotion.NEUTRAL, description="Scene emotion")
    image_effect: ImageEffect = Field(default=ImageEffect.STATIC, description="Camera effect")

    class Config:
        """Pydantic config."""
        frozen = True


class EnhancementContext(BaseModel):
    """Everything the enhancement pass needs to know about a scene list."""

    theme: str = Field(..., description="Overall video theme")
    aspect_ratio: Literal["16:9", "9:16"] = Field(default="16:9", description="Output aspect ratio")
    total_scenes: int = Field(..., ge=0, description="Number of scenes in the list")
    scenes: List[SceneForEnhancement] = Field(default_factory=list, description="Scenes to enhance")

    class Config:
        """Pydantic config."""
        frozen = True


class EnhancedPrompt(BaseModel):
    """An enhanced image prompt for one scene."""

    scene_index: int = Field(..., description="Index of the target scene")
    original: str = Field(default="", description="Prompt before enhancement")
    enhanced: str = Field(default="", description="Prompt after enhancement")
