"""Pure building blocks of the scene script pipeline."""

from .prompts import (
    STYLE_GUIDES,
    build_script_prompt,
    build_split_prompt,
    calculate_scene_count,
    get_style_guide,
)
from .parser import ParseFailure, ParsedScenes, parse_script_response
from .normalizer import (
    DEFAULT_IMAGE_PROMPT,
    coerce_raw_scene,
    normalize_scenes,
    vary_transitions,
)
from .fallback import split_by_sentence_boundary, split_sentences
from .enhancer import (
    EMOTION_VISUAL_GUIDES,
    IMAGE_EFFECT_COMPOSITION,
    build_enhancement_context,
    build_enhancement_system_prompt,
    build_enhancement_user_prompt,
    enhance_image_prompts,
    merge_enhanced_prompts,
    parse_enhancement_response,
)

__all__ = [
    "STYLE_GUIDES",
    "build_script_prompt",
    "build_split_prompt",
    "calculate_scene_count",
    "get_style_guide",
    "ParseFailure",
    "ParsedScenes",
    "parse_script_response",
    "DEFAULT_IMAGE_PROMPT",
    "coerce_raw_scene",
    "normalize_scenes",
    "vary_transitions",
    "split_by_sentence_boundary",
    "split_sentences",
    "EMOTION_VISUAL_GUIDES",
    "IMAGE_EFFECT_COMPOSITION",
    "build_enhancement_context",
    "build_enhancement_system_prompt",
    "build_enhancement_user_prompt",
    "enhance_image_prompts",
    "merge_enhanced_prompts",
    "parse_enhancement_response",
]
