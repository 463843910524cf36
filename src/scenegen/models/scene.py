"""Scene data model."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class Emotion(str, Enum):
    """Speaker emotion for a scene."""
    NEUTRAL = "neutral"
    HAPPY = "happy"
    SERIOUS = "serious"
    EXCITED = "excited"
    THOUGHTFUL = "thoughtful"


class Transition(str, Enum):
    """Transition into the next scene."""
    FADE = "fade"
    SLIDE = "slide"
    ZOOM = "zoom"
    WIPE = "wipe"


class ImageEffect(str, Enum):
    """Camera effect applied to the scene's background image."""
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    PAN_LEFT = "panLeft"
    PAN_RIGHT = "panRight"
    STATIC = "static"


class TextAnimation(str, Enum):
    """Subtitle entrance animation."""
    TYPEWRITER = "typewriter"
    FADE_IN = "fadeIn"
    SLIDE_UP = "slideUp"
    BOUNCE = "bounce"
    NONE = "none"


class MainTextType(str, Enum):
    """Layout of the large on-screen text."""
    TITLE = "title"
    QUIZ = "quiz"
    BULLET = "bullet"
    HIGHLIGHT = "highlight"


class SoundEffectType(str, Enum):
    """Sound effect category."""
    AMBIENT = "ambient"
    ACTION = "action"
    TRANSITION = "transition"
    EMOTION = "emotion"


class SoundEffectTiming(str, Enum):
    """When a sound effect starts within its scene."""
    START = "start"
    MIDDLE = "middle"
    END = "end"
    THROUGHOUT = "throughout"


class SoundEffect(BaseModel):
    """A sound effect cue attached to a scene."""

    type: SoundEffectType = Field(..., description="Sound effect category")
    keyword: str = Field(..., description="English search keyword for the effect")
    timing: SoundEffectTiming = Field(default=SoundEffectTiming.START, description="Start timing")
    volume: float = Field(default=0.3, ge=0.0, le=1.0, description="Playback volume")

    class Config:
        """Pydantic config."""
        frozen = False


class MainText(BaseModel):
    """Large on-screen text shown over the scene image."""

    type: MainTextType = Field(default=MainTextType.TITLE, description="Text layout")
    lines: List[str] = Field(..., min_length=1, description="Lines shown in order")


class Scene(BaseModel):
    """Represents a single normalized scene in the video script."""

    index: int = Field(..., ge=1, description="1-based position in the scene list")
    duration: float = Field(..., gt=0, description="Scene duration in seconds")
    narration_text: str = Field(..., min_length=1, description="Text spoken aloud")
    subtitle_text: str = Field(..., min_length=1, description="Text displayed on screen")
    image_prompt: str = Field(..., description="Image generation prompt")
    emotion: Emotion = Field(default=Emotion.NEUTRAL, description="Speaker emotion")
    transition: Transition = Field(default=Transition.FADE, description="Scene transition")
    image_effect: ImageEffect = Field(default=ImageEffect.STATIC, description="Camera effect")
    emphasis_words: List[str] = Field(default_factory=list, max_length=3, description="Words to emphasise")
    sound_effects: List[SoundEffect] = Field(default_factory=list, description="Sound effect cues")
    voice_style: str = Field(default="", description="Acting direction for the narration voice")
    text_animation: TextAnimation = Field(default=TextAnimation.NONE, description="Subtitle animation")
    main_text: Optional[MainText] = Field(default=None, description="Large on-screen text")

    class Config:
        """Pydantic config."""
        frozen = False

    def to_wire(self) -> dict[str, Any]:
        """Return the scene in the snake_case JSON shape used by renderers."""
        return {
            "scene_index": self.index,
            "duration": self.duration,
            "avatar_script": self.narration_text,
            "subtitle": self.subtitle_text,
            "image_prompt": self.image_prompt,
            "emotion": self.emotion.value,
            "transition": self.transition.value,
            "image_effect": self.image_effect.value,
            "emphasis_words": list(self.emphasis_words),
            "sound_effects": [sfx.model_dump(mode="json") for sfx in self.sound_effects],
            "voice_style": self.voice_style,
            "text_animation": self.text_animation.value,
            "main_text": self.main_text.model_dump(mode="json") if self.main_text else None,
        }


class RawScene(BaseModel):
    """Untrusted scene object as returned by a text generation model.

    Every field is optional and loosely typed; the normalizer is responsible
    for turning these into valid :class:`Scene` objects.
    """

    index: Optional[Any] = Field(
        None, validation_alias=AliasChoices("index", "scene_index", "sceneIndex", "id")
    )
    duration: Optional[Any] = Field(
        None, validation_alias=AliasChoices("duration", "durationSeconds")
    )
    narration_text: Optional[Any] = Field(
        None,
        validation_alias=AliasChoices(
            "narration_text", "avatar_script", "voice_text", "narrationText", "voiceText"
        ),
    )
    subtitle_text: Optional[Any] = Field(
        None, validation_alias=AliasChoices("subtitle_text", "subtitle", "subtitleText")
    )
    image_prompt: Optional[Any] = Field(
        None, validation_alias=AliasChoices("image_prompt", "imagePrompt")
    )
    image_prompts: Optional[Any] = Field(
        None, validation_alias=AliasChoices("image_prompts", "imagePrompts")
    )
    emotion: Optional[Any] = None
    transition: Optional[Any] = None
    image_effect: Optional[Any] = Field(
        None, validation_alias=AliasChoices("image_effect", "imageEffect")
    )
    emphasis_words: Optional[Any] = Field(
        None, validation_alias=AliasChoices("emphasis_words", "emphasisWords")
    )
    sound_effects: Optional[Any] = Field(
        None, validation_alias=AliasChoices("sound_effects", "soundEffects")
    )
    voice_style: Optional[Any] = Field(
        None, validation_alias=AliasChoices("voice_style", "voiceStyle")
    )
    text_animation: Optional[Any] = Field(
        None, validation_alias=AliasChoices("text_animation", "textAnimation")
    )
    main_text: Optional[Any] = Field(
        None, validation_alias=AliasChoices("main_text", "mainText")
    )

    class Config:
        """Pydantic config."""
        extra = "ignore"
        populate_by_name = True
