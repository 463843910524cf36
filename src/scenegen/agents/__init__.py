"""Agents that run the scene script pipeline against a text model."""

from .base import BaseAgent, BoundedCapability
from .script import ScriptAgent, generate_script, split_script, validate_request
from .enhancer import EnhancementInput, PromptEnhancementAgent

__all__ = [
    "BaseAgent",
    "BoundedCapability",
    "ScriptAgent",
    "generate_script",
    "split_script",
    "validate_request",
    "EnhancementInput",
    "PromptEnhancementAgent",
]
