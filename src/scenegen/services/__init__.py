"""External service integrations."""

from .base import ResponseFormat, TextCapability
from .anthropic import AnthropicClient

__all__ = [
    "AnthropicClient",
    "ResponseFormat",
    "TextCapability",
]
