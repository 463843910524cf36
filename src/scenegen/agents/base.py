"""Base agent abstraction."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from ..config import config
from ..errors import CapabilityError
from ..services.base import ResponseFormat, TextCapability

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BoundedCapability:
    """Wraps a text capability so every call is time-bounded.

    Any failure of the wrapped call, including running past ``timeout``,
    is raised as :class:`CapabilityError`. A timed-out call is abandoned,
    not awaited.
    """

    def __init__(self, capability: TextCapability, timeout: Optional[float] = None) -> None:
        self._capability = capability
        self._timeout = timeout

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def generate(self, prompt: str, response_format: ResponseFormat = "text") -> str:
        outcome: dict[str, Any] = {}

        def call() -> None:
            try:
                outcome["response"] = self._capability.generate(prompt, response_format)
            except Exception as e:
                outcome["error"] = e

        # Daemon thread: an abandoned call must not keep the interpreter alive
        worker = threading.Thread(target=call, name="scenegen-generate", daemon=True)
        worker.start()
        worker.join(self._timeout)

        if worker.is_alive():
            raise CapabilityError(f"Text generation timed out after {self._timeout}s")
        if "error" in outcome:
            e = outcome["error"]
            raise CapabilityError(f"Text generation failed: {e}") from e

        response = outcome.get("response")
        if not isinstance(response, str):
            raise CapabilityError(
                f"Text generation returned {type(response).__name__}, expected str"
            )
        return response


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for pipeline agents.

    Provides shared functionality for agents that call a text generation
    capability. Subclasses must implement the `run` method.
    """

    def __init__(
        self,
        capability: Optional[TextCapability] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the agent.

        Args:
            capability: Text generation capability. An AnthropicClient is
                created if not provided.
            timeout: Seconds to wait for each generation call. Defaults to
                config.generation_timeout.
        """
        if capability is None:
            from ..services.anthropic import AnthropicClient

            capability = AnthropicClient()
        self._capability = BoundedCapability(
            capability, timeout if timeout is not None else config.generation_timeout
        )
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the agent's name."""
        ...

    @property
    def capability(self) -> BoundedCapability:
        """Return the time-bounded capability used by this agent."""
        return self._capability

    @abstractmethod
    def run(self, input_data: InputT) -> OutputT:
        """Execute the agent's main task.

        Args:
            input_data: Input data for the agent.

        Returns:
            Structured output from the agent.
        """
        ...

    def _generate(self, prompt: str, response_format: ResponseFormat = "json") -> str:
        """Send a prompt to the capability.

        Raises:
            CapabilityError: If the call fails or times out.
        """
        self._logger.debug(f"Generating with prompt length: {len(prompt)}")

        try:
            response = self._capability.generate(prompt, response_format)
        except CapabilityError as e:
            self._logger.warning(f"Error generating text: {e}")
            raise

        self._logger.debug(f"Received response of length: {len(response)}")
        return response
