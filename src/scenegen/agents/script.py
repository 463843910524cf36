"""Script agent: turns a generation request into a normalized scene list."""

import logging
from typing import Callable, Optional

from ..errors import CapabilityError, ValidationError
from ..models import GenerationRequest, Script, ScriptOrigin
from ..pipeline import (
    ParseFailure,
    build_script_prompt,
    build_split_prompt,
    normalize_scenes,
    parse_script_response,
    split_by_sentence_boundary,
    vary_transitions,
)
from ..services.base import TextCapability
from .base import BaseAgent

logger = logging.getLogger(__name__)


def validate_request(request: GenerationRequest) -> None:
    """Reject requests the pipeline cannot act on.

    Raises:
        ValidationError: If the source text is blank or the scene count is below 1.
    """
    if not request.source_text or not request.source_text.strip():
        raise ValidationError("empty theme")
    if request.requested_scene_count is not None and request.requested_scene_count < 1:
        raise ValidationError(
            f"requested scene count must be at least 1, got {request.requested_scene_count}"
        )


class ScriptAgent(BaseAgent[GenerationRequest, Script]):
    """Agent for generating a scene script from freeform text.

    Makes exactly one call to the text capability. If that call fails, times
    out, or returns something that is not a scene list, the source text is
    split mechanically instead and the result is marked as fallback.
    """

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScriptAgent"

    def run(self, input_data: GenerationRequest) -> Script:
        """Generate a script from a theme, transcript or long script.

        Raises:
            ValidationError: If the request is invalid.
        """
        return self._produce(input_data, build_script_prompt)

    def split(self, input_data: GenerationRequest) -> Script:
        """Split an existing script into scenes, keeping its wording.

        Raises:
            ValidationError: If the request is invalid.
        """
        return self._produce(
            input_data,
            lambda request: build_split_prompt(
                request.source_text, request.scene_count, request.style
            ),
        )

    def _produce(
        self,
        request: GenerationRequest,
        build_prompt: Callable[[GenerationRequest], str],
    ) -> Script:
        validate_request(request)
        scene_count = request.scene_count

        self._logger.info(
            f"Generating {scene_count} scene(s) "
            f"(duration: {request.target_duration:g}s, style: {request.style})"
        )

        prompt = build_prompt(request)

        try:
            response = self._generate(prompt, response_format="json")
        except CapabilityError as e:
            self._logger.warning(f"Falling back to sentence split: {e}")
            return self._fallback(request)

        parsed = parse_script_response(response)
        if isinstance(parsed, ParseFailure):
            self._logger.warning(f"Falling back to sentence split: {parsed.reason}")
            return self._fallback(request)

        scenes = normalize_scenes(parsed.scenes, scene_count, request.target_duration)
        self._logger.info(f"Generated {len(scenes)} scenes")

        return Script(
            title=parsed.title,
            description=parsed.description,
            tags=parsed.tags,
            scenes=vary_transitions(scenes),
            generated_by=ScriptOrigin.AI,
        )

    def _fallback(self, request: GenerationRequest) -> Script:
        scenes = split_by_sentence_boundary(
            request.source_text, request.scene_count, request.target_duration
        )
        return Script(scenes=vary_transitions(scenes), generated_by=ScriptOrigin.FALLBACK)


def generate_script(
    request: GenerationRequest,
    capability: TextCapability,
    timeout: Optional[float] = None,
) -> Script:
    """Generate a normalized script for a request.

    Args:
        request: What to generate.
        capability: Text generation capability to call once.
        timeout: Seconds to wait for the capability before falling back.

    Returns:
        A script with exactly the requested number of scenes. Check
        ``Script.generated_by`` to tell model output from a fallback split.

    Raises:
        ValidationError: If the request is invalid. No other error escapes.
    """
    return ScriptAgent(capability=capability, timeout=timeout).run(request)


def split_script(
    request: GenerationRequest,
    capability: TextCapability,
    timeout: Optional[float] = None,
) -> Script:
    """Split an existing script into scenes; same contract as generate_script."""
    return ScriptAgent(capability=capability, timeout=timeout).split(request)
