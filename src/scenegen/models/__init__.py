"""Data models for the scene script generator."""

from .scene import (
    Emotion,
    ImageEffect,
    MainText,
    MainTextType,
    RawScene,
    Scene,
    SoundEffect,
    SoundEffectTiming,
    SoundEffectType,
    TextAnimation,
    Transition,
)
from .request import GenerationRequest
from .script import Script, ScriptOrigin
from .enhancement import EnhancedPrompt, EnhancementContext, SceneForEnhancement

__all__ = [
    "Emotion",
    "ImageEffect",
    "MainText",
    "MainTextType",
    "RawScene",
    "Scene",
    "SoundEffect",
    "SoundEffectTiming",
    "SoundEffectType",
    "TextAnimation",
    "Transition",
    "GenerationRequest",
    "Script",
    "ScriptOrigin",
    "EnhancedPrompt",
    "EnhancementContext",
    "SceneForEnhancement",
]
