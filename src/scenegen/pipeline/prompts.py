"""Prompt construction for script generation.

Everything in this module is pure: the same input always yields the same
prompt text, with no timestamps or randomness.
"""

import json
import math
from types import MappingProxyType
from typing import Mapping, Optional

from ..models import (
    Emotion,
    GenerationRequest,
    ImageEffect,
    MainTextType,
    SoundEffectTiming,
    SoundEffectType,
    TextAnimation,
    Transition,
)

MIN_SCENES = 3
MAX_SCENES = 25
SECONDS_PER_SCENE = 8

STYLE_GUIDES: Mapping[str, str] = MappingProxyType({
    "educational": "Educational and easy to follow. Briefly explain any technical terms.",
    "entertainment": "Highly entertaining, written to keep viewers amused.",
    "news": "Objective and concise, like a news broadcast.",
    "storytelling": "Narrative storytelling that pulls the viewer in.",
    "tutorial": "Step-by-step tutorial that walks through each action.",
})

IMAGE_PROMPT_RULES = """IMAGE PROMPT RULES (image_prompt):
- Write in the same language as the source text, at least 50 characters, concrete and specific.
- Name the people and places explicitly (nationality, setting).
- Include a camera angle (eye level, low angle, overhead), lighting (natural light,
  golden hour, studio lighting), colour tone and depth of field.
- Leave negative space so the image survives pan and zoom (Ken Burns) motion;
  place the subject slightly left or right of centre with visible depth.
- Avoid an artificial look: natural composition, realistic light, natural expressions.
- Bad: "a person working in an office". Good: "a young office worker typing on a
  laptop in a modern office, warm natural window light, eye-level camera, shallow
  depth of field, subject placed right of centre, cinematic composition"."""


def _enum_values(enum_cls) -> str:
    return "/".join(member.value for member in enum_cls)


def calculate_scene_count(target_duration: float) -> int:
    """Derive a scene count from a target duration.

    Assumes roughly eight seconds per scene, clamped to 3..25 scenes.
    """
    return max(MIN_SCENES, min(MAX_SCENES, math.ceil(target_duration / SECONDS_PER_SCENE)))


def get_style_guide(style: Optional[str] = None) -> str:
    """Return the style guide for a known style, or the educational guide."""
    return STYLE_GUIDES.get(style or "educational", STYLE_GUIDES["educational"])


def _describe_style(style: Optional[str]) -> str:
    # Free-text keywords are passed through as written
    if style and style not in STYLE_GUIDES:
        return style
    return get_style_guide(style)


def _scene_schema_example() -> str:
    example = {
        "title": "catchy video title",
        "description": "one-line summary of the video",
        "scenes": [
            {
                "scene_index": 1,
                "duration": 5,
                "avatar_script": "narration read aloud for this scene",
                "subtitle": "short on-screen caption",
                "voice_style": "acting direction for the narrator: tone, emotion, pace",
                "main_text": {"type": _enum_values(MainTextType), "lines": ["large on-screen line"]},
                "image_prompt": "detailed background image prompt",
                "emotion": _enum_values(Emotion),
                "transition": _enum_values(Transition),
                "image_effect": _enum_values(ImageEffect),
                "text_animation": _enum_values(TextAnimation),
                "emphasis_words": ["keyword1", "keyword2"],
                "sound_effects": [
                    {
                        "type": _enum_values(SoundEffectType),
                        "keyword": "english search keyword, e.g. keyboard typing, whoosh",
                        "timing": _enum_values(SoundEffectTiming),
                        "volume": 0.3,
                    }
                ],
            }
        ],
        "total_duration": 60,
        "tags": ["tag1", "tag2", "tag3"],
    }
    return json.dumps(example, ensure_ascii=False, indent=2)


def build_script_prompt(request: GenerationRequest) -> str:
    """Build the script generation prompt for a request.

    Args:
        request: The generation request. ``source_text`` is assumed non-empty.

    Returns:
        A single instruction string for the text generation model.
    """
    scene_count = request.scene_count
    target_duration = request.target_duration
    per_scene = round(target_duration / scene_count, 1)

    prompt_parts = [
        "You are a professional video director and scriptwriter.",
        "Write a complete short-form video script based on the source below.",
        "",
        "SOURCE:",
        request.source_text,
        "",
        f"STYLE: {_describe_style(request.style)}",
        "",
        "REQUIREMENTS:",
        f"- Target duration: about {target_duration:g} seconds",
        f"- Produce EXACTLY {scene_count} scene objects, numbered 1 to {scene_count}",
        f"- Each scene lasts about {per_scene:g} seconds (5 to 10 seconds)",
        "- Narration must read naturally aloud, in the same language as the source",
        "- Open with a hook and close with a clear conclusion",
        "",
        "OUTPUT FORMAT:",
        "Return a single JSON object with exactly this shape:",
        _scene_schema_example(),
        "",
        "FIELD RULES:",
        "- Required in every scene: scene_index, duration, avatar_script, subtitle, voice_style,",
        "  image_prompt, emotion, transition, image_effect, emphasis_words, sound_effects",
        "- Optional: main_text, text_animation",
        "- scene_index is an integer; duration, total_duration and volume are numbers",
        f"- emotion is one of: {', '.join(e.value for e in Emotion)}",
        f"- transition is one of: {', '.join(t.value for t in Transition)}",
        f"- image_effect is one of: {', '.join(e.value for e in ImageEffect)}",
        f"- text_animation is one of: {', '.join(a.value for a in TextAnimation)}",
        f"- main_text type is one of: {', '.join(t.value for t in MainTextType)}",
        "- voice_style is never empty; describe how the line should sound",
        f"- sound effect type is one of: {', '.join(t.value for t in SoundEffectType)}",
        f"- sound effect timing is one of: {', '.join(t.value for t in SoundEffectTiming)}",
        "- volume is between 0.0 and 1.0; include 1 or 2 sound effects per scene",
        "- emphasis_words holds 2 or 3 key words (numbers, proper nouns, keywords)",
        "",
        "TRANSITION RULES:",
        "- Opening scene: zoom. Explanations: fade. Key points: zoom. Faster pacing: slide or wipe",
        "- Never use the same transition three times in a row",
        "",
        "IMAGE EFFECT RULES:",
        "- Opening: zoomIn. Explanations: panLeft or panRight. Summary: zoomOut",
        "- Never use the same image effect twice in a row",
        "",
        IMAGE_PROMPT_RULES,
    ]

    return "\n".join(prompt_parts)


def build_split_prompt(script_text: str, scene_count: int, style_keyword: Optional[str] = None) -> str:
    """Build the prompt that splits an existing script into scenes.

    Subtitles are taken verbatim from the script; image prompts are English.
    """
    prompt_parts = [
        "You split video scripts into scenes.",
        "",
        "SCRIPT:",
        script_text,
        "",
        "CONDITIONS:",
        f"- Split into exactly {scene_count} scenes",
        "- Keep the reading time of each scene as even as possible",
        f"- Style: {style_keyword or 'general explainer video'}",
        "",
        "OUTPUT FORMAT:",
        "```json",
        json.dumps(
            {
                "scenes": [
                    {
                        "id": 1,
                        "subtitle": "the script text for this scene, verbatim",
                        "imagePrompt": "english background prompt, e.g. modern office, bright lighting",
                    }
                ]
            },
            ensure_ascii=False,
            indent=2,
        ),
        "```",
        "",
        "NOTES:",
        "- subtitle is the script text exactly as it will be read aloud",
        "- imagePrompt is written in English and matches the scene content",
        f"- Always return data for all {scene_count} scenes",
    ]

    return "\n".join(prompt_parts)
