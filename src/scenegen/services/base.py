"""Text generation capability interface."""

from typing import Literal, Protocol, runtime_checkable

ResponseFormat = Literal["json", "text"]


@runtime_checkable
class TextCapability(Protocol):
    """Anything that turns a prompt into raw text.

    Implementations must raise on transport, auth or provider errors rather
    than returning a malformed success.
    """

    def generate(self, prompt: str, response_format: ResponseFormat = "text") -> str:
        ...
