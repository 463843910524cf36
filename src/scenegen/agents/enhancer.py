"""Image prompt enhancement agent."""

import logging
from dataclasses import dataclass

from ..models import Script
from ..pipeline import (
    build_enhancement_context,
    enhance_image_prompts,
    merge_enhanced_prompts,
)
from .base import BaseAgent

logger = logging.getLogger(__name__)


@dataclass
class EnhancementInput:
    """Input data for the enhancement agent."""

    script: Script
    theme: str
    aspect_ratio: str = "16:9"


class PromptEnhancementAgent(BaseAgent[EnhancementInput, Script]):
    """Agent that rewrites a script's image prompts in one batched call.

    The returned script is a copy; on any failure it carries the original
    prompts unchanged.
    """

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "PromptEnhancementAgent"

    def run(self, input_data: EnhancementInput) -> Script:
        """Enhance every scene's image prompt."""
        script = input_data.script
        context = build_enhancement_context(
            input_data.theme, script.scenes, input_data.aspect_ratio
        )

        enhanced = enhance_image_prompts(context, self.capability)
        if enhanced is None:
            self._logger.warning("Enhancement failed; keeping original image prompts")
            return script.model_copy(deep=True)

        scenes = merge_enhanced_prompts(script.scenes, enhanced)
        changed = sum(
            1 for before, after in zip(script.scenes, scenes)
            if before.image_prompt != after.image_prompt
        )
        self._logger.info(f"Enhanced {changed} of {len(scenes)} image prompt(s)")

        return script.model_copy(update={"scenes": scenes}, deep=True)
