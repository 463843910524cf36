"""Image prompt enhancement.

Builds a single batched request asking the text model for richer,
visually consistent image prompts, parses the answer, and merges it back
into a scene list without touching anything but ``image_prompt``.
"""

import json
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..errors import EnhancementFailure
from ..models import (
    Emotion,
    EnhancedPrompt,
    EnhancementContext,
    ImageEffect,
    Scene,
    SceneForEnhancement,
)
from ..services.base import TextCapability
from .parser import find_balanced_object

logger = logging.getLogger(__name__)

EMOTION_VISUAL_GUIDES: Mapping[Emotion, Mapping[str, str]] = MappingProxyType({
    Emotion.NEUTRAL: MappingProxyType({
        "lighting": "neutral natural light, soft shadows",
        "color_tone": "balanced, natural colour tone",
    }),
    Emotion.HAPPY: MappingProxyType({
        "lighting": "bright, warm natural light, golden hour glow",
        "color_tone": "warm orange and yellow tones, bright",
    }),
    Emotion.SERIOUS: MappingProxyType({
        "lighting": "high-contrast dramatic lighting",
        "color_tone": "subdued cool blue and grey tones",
    }),
    Emotion.EXCITED: MappingProxyType({
        "lighting": "vivid, energetic high-key lighting",
        "color_tone": "vivid, highly saturated colours",
    }),
    Emotion.THOUGHTFUL: MappingProxyType({
        "lighting": "soft indirect window light, quiet atmosphere",
        "color_tone": "calm pastel tones, slightly desaturated",
    }),
})

IMAGE_EFFECT_COMPOSITION: Mapping[ImageEffect, str] = MappingProxyType({
    ImageEffect.ZOOM_IN: "subject centred with generous margins to allow zooming in",
    ImageEffect.ZOOM_OUT: "subject slightly below centre with open space above",
    ImageEffect.PAN_LEFT: "subject on the right third, open space on the left for the pan",
    ImageEffect.PAN_RIGHT: "subject on the left third, open space on the right for the pan",
    ImageEffect.STATIC: "stable rule-of-thirds composition, subject on an intersection",
})


def build_enhancement_system_prompt() -> str:
    """Return the system instructions for the enhancement request."""
    return """You are the visual director for a short commercial video.
Write a detailed image generation prompt for every scene of the video.

RULES:
1. Keep the language of the original prompts.
2. Name people and places explicitly (nationality, setting).
3. Each prompt is roughly 80 to 120 characters.

INCLUDE:
- camera angle (eye level, low angle, overhead)
- lighting (natural light, golden hour, studio lighting)
- colour tone (warm, cool, vivid)
- depth of field (shallow depth of field, blurred background)
- composition with margins suited to Ken Burns pan and zoom
- natural expressions and realistic light so the image does not look artificial

BAD: "a person in an office", "a pretty landscape" (too abstract)
GOOD: "a young office worker typing on a laptop in a modern office, warm window light,
eye-level camera, shallow depth of field, subject placed right of centre, 16:9 cinematic composition\""""


def _describe_scene(scene: SceneForEnhancement) -> str:
    emotion_guide = EMOTION_VISUAL_GUIDES.get(scene.emotion, EMOTION_VISUAL_GUIDES[Emotion.NEUTRAL])
    composition = IMAGE_EFFECT_COMPOSITION.get(
        scene.image_effect, IMAGE_EFFECT_COMPOSITION[ImageEffect.STATIC]
    )
    return "\n".join([
        f"[SCENE {scene.scene_index}]",
        f"- Original prompt: {scene.original_prompt}",
        f"- Narration: {scene.narration_text}",
        f"- Emotion: {scene.emotion.value}",
        f"- Suggested lighting: {emotion_guide['lighting']}",
        f"- Suggested colour tone: {emotion_guide['color_tone']}",
        f"- Camera effect: {scene.image_effect.value}",
        f"- Suggested composition: {composition}",
    ])


def build_enhancement_user_prompt(context: EnhancementContext) -> str:
    """Build the per-batch enhancement request for a context."""
    output_example = json.dumps(
        {"enhancedPrompts": [{"sceneIndex": 1, "enhanced": "enhanced prompt"}]},
        indent=2,
    )
    parts = [
        "THEME:",
        context.theme,
        "",
        f"ASPECT RATIO: {context.aspect_ratio}",
        f"SCENES: {context.total_scenes}",
        "",
        "IMPORTANT:",
        "- Keep every scene visually consistent with the others",
        "- Use one coherent colour palette and tone across the video",
        "- Match each scene's lighting to its emotion",
        "",
        "\n\n".join(_describe_scene(scene) for scene in context.scenes),
        "",
        "Write a detailed image prompt (80 to 120 characters) for each scene above.",
        "",
        "Output format (this JSON shape only):",
        output_example,
    ]
    return "\n".join(parts)


def build_enhancement_context(
    theme: str,
    scenes: Sequence[Scene],
    aspect_ratio: str = "16:9",
) -> EnhancementContext:
    """Build an enhancement context from a scene list.

    Any aspect ratio other than 9:16 is treated as 16:9.
    """
    return EnhancementContext(
        theme=theme,
        aspect_ratio="9:16" if aspect_ratio == "9:16" else "16:9",
        total_scenes=len(scenes),
        scenes=[
            SceneForEnhancement(
                scene_index=scene.index,
                original_prompt=scene.image_prompt,
                narration_text=scene.narration_text,
                emotion=scene.emotion,
                image_effect=scene.image_effect,
            )
            for scene in scenes
        ],
    )


def _load_enhancements(response_text: str) -> List[EnhancedPrompt]:
    json_str = find_balanced_object(response_text or "")
    if json_str is None:
        raise EnhancementFailure("no JSON found in response")

    try:
        data = json.loads(json_str)
    except ValueError as e:
        raise EnhancementFailure(f"invalid JSON in response: {e}") from e

    items = data.get("enhancedPrompts") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise EnhancementFailure("response does not contain an enhancedPrompts array")

    prompts: List[EnhancedPrompt] = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug(f"Skipping non-object enhanced prompt entry: {item!r}")
            continue
        try:
            prompts.append(EnhancedPrompt(
                scene_index=item.get("sceneIndex", item.get("scene_index")),
                original=item.get("original") or "",
                enhanced=item.get("enhanced") or "",
            ))
        except PydanticValidationError:
            # Never matches a scene, so the rest of the batch still applies
            logger.debug(f"Skipping invalid enhanced prompt entry: {item!r}")
    return prompts


def parse_enhancement_response(response_text: str) -> Optional[List[EnhancedPrompt]]:
    """Parse an enhancement response.

    Returns:
        The enhanced prompts, or None if the response is unusable.
    """
    try:
        return _load_enhancements(response_text)
    except EnhancementFailure as e:
        logger.warning(f"Discarding enhancement response: {e}")
        return None


def enhance_image_prompts(
    context: EnhancementContext,
    capability: TextCapability,
) -> Optional[List[EnhancedPrompt]]:
    """Ask the text model for enhanced prompts for every scene in one call.

    Returns:
        Enhanced prompts, or None when the call or its response fails. Callers
        keep the original prompts in that case.
    """
    if not context.scenes:
        return []

    prompt = "\n\n".join([build_enhancement_system_prompt(), build_enhancement_user_prompt(context)])
    logger.info(f"Enhancing image prompts for {context.total_scenes} scene(s)")

    try:
        response = capability.generate(prompt, response_format="json")
    except Exception as e:
        logger.warning(f"Image prompt enhancement call failed: {e}")
        return None

    enhanced = parse_enhancement_response(response)
    if enhanced is not None:
        logger.info(f"Received {len(enhanced)} enhanced prompt(s)")
    return enhanced


def merge_enhanced_prompts(
    scenes: Sequence[Scene],
    enhanced_prompts: Sequence[EnhancedPrompt],
) -> List[Scene]:
    """Replace image prompts with their enhanced versions.

    A scene changes only when an enhancement with a matching ``scene_index``
    has a non-empty ``enhanced`` text. Count and order are preserved and
    every other field is left untouched.
    """
    by_index = {}
    for prompt in enhanced_prompts:
        # First enhancement for an index wins
        by_index.setdefault(prompt.scene_index, prompt)

    merged: List[Scene] = []
    for scene in scenes:
        enhancement = by_index.get(scene.index)
        if enhancement is not None and enhancement.enhanced.strip():
            merged.append(scene.model_copy(update={"image_prompt": enhancement.enhanced.strip()}))
        else:
            merged.append(scene)
    return merged
