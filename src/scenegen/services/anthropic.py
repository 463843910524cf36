"""Anthropic Claude API client wrapper."""

import logging
import time
from typing import Optional

from anthropic import Anthropic, APIError, APIConnectionError, RateLimitError

from ..config import config
from .base import ResponseFormat

logger = logging.getLogger(__name__)

MAX_TOKENS = 8192

JSON_SYSTEM_PROMPT = (
    "Respond with a single valid JSON object only. "
    "Do not wrap it in markdown and do not add any commentary."
)


class AnthropicClient:
    """Client wrapper for Anthropic Claude API with retry logic.

    Implements :class:`~scenegen.services.base.TextCapability`.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to config.default_model.
            max_retries: Maximum number of retry attempts for failed requests.
            retry_delay: Base delay between retries in seconds (exponential backoff).
            timeout: Per-request HTTP timeout in seconds.
        """
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ValueError(
                "Anthropic API key not provided. Set ANTHROPIC_API_KEY env var."
            )

        self._client = Anthropic(
            api_key=self._api_key,
            timeout=timeout or config.generation_timeout,
        )
        self._model = model or config.default_model
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    def generate(self, prompt: str, response_format: ResponseFormat = "text") -> str:
        """Generate text for a prompt.

        Claude has no JSON response mode, so JSON output is requested through
        the system prompt; callers still parse defensively.

        Raises:
            APIError: If the API request fails after all retries.
        """
        kwargs = {
            "model": self._model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        if response_format == "json":
            kwargs["system"] = JSON_SYSTEM_PROMPT

        for attempt in range(self._max_retries):
            try:
                logger.debug(
                    f"Sending request to Claude (attempt {attempt + 1}/{self._max_retries})"
                )
                response = self._client.messages.create(**kwargs)

                content = response.content[0]
                if hasattr(content, "text"):
                    return content.text
                return str(content)

            except (RateLimitError, APIConnectionError) as e:
                if attempt == self._max_retries - 1:
                    raise
                delay = self._retry_delay * (2**attempt)
                logger.warning(f"{type(e).__name__}: {e}. Retrying in {delay:.1f}s...")
                time.sleep(delay)

            except APIError as e:
                logger.error(f"API error: {e}")
                raise

        raise RuntimeError("Max retries exceeded")
