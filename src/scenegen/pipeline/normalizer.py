"""Scene normalization.

Turns an untrusted list of raw scenes into exactly ``requested_count`` valid
:class:`Scene` objects. All functions here are pure and deterministic.
"""

import logging
import math
from typing import Any, Iterable, List, Optional, Sequence, Union

from ..config import config
from ..models import (
    Emotion,
    ImageEffect,
    MainText,
    MainTextType,
    RawScene,
    Scene,
    SoundEffect,
    SoundEffectTiming,
    SoundEffectType,
    TextAnimation,
    Transition,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PROMPT = "abstract modern background with soft lighting"
DEFAULT_SFX_VOLUME = 0.3
MAX_EMPHASIS_WORDS = 3

_IMAGE_EFFECTS_BY_KEY = {effect.value.lower(): effect for effect in ImageEffect}
_TEXT_ANIMATIONS_BY_KEY = {animation.value.lower(): animation for animation in TextAnimation}

SceneLike = Union[RawScene, Scene, dict]


def placeholder_text(index: int) -> str:
    """Return the placeholder text for a scene without material."""
    return f"シーン {index}"


def coerce_raw_scene(obj: Any) -> RawScene:
    """Convert a dict, Scene or RawScene into a RawScene."""
    if isinstance(obj, RawScene):
        return obj
    if isinstance(obj, Scene):
        return RawScene.model_validate(obj.model_dump(mode="json"))
    if isinstance(obj, dict):
        return RawScene.model_validate(obj)
    return RawScene()


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return str(value)
        except ValueError:
            # int too long to render as a string
            return ""
    return ""


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _positive_number(value: Any) -> Optional[float]:
    number = _finite_number(value)
    if number is None or number <= 0:
        return None
    return number


def _volume(value: Any) -> float:
    if not isinstance(value, (int, float)):
        return DEFAULT_SFX_VOLUME
    number = _finite_number(value)
    if number is None:
        return DEFAULT_SFX_VOLUME
    return min(1.0, max(0.0, number))


def _image_prompt(raw: RawScene) -> str:
    prompt = _text(raw.image_prompt)
    if prompt:
        return prompt
    if isinstance(raw.image_prompts, list):
        for candidate in raw.image_prompts:
            if _text(candidate):
                return _text(candidate)
    return DEFAULT_IMAGE_PROMPT


def _emotion(value: Any) -> Emotion:
    try:
        return Emotion(_text(value).lower())
    except ValueError:
        return Emotion.NEUTRAL


def _transition(value: Any) -> Transition:
    try:
        return Transition(_text(value).lower())
    except ValueError:
        return Transition.FADE


def _image_effect(value: Any) -> ImageEffect:
    return _IMAGE_EFFECTS_BY_KEY.get(_text(value).lower(), ImageEffect.STATIC)


def _text_animation(value: Any) -> TextAnimation:
    return _TEXT_ANIMATIONS_BY_KEY.get(_text(value).lower(), TextAnimation.NONE)


def _main_text(value: Any) -> Optional[MainText]:
    if not isinstance(value, dict):
        return None
    lines = value.get("lines")
    if isinstance(lines, str):
        lines = [lines]
    if not isinstance(lines, list):
        return None
    lines = [line for line in (_text(line) for line in lines) if line]
    if not lines:
        return None
    try:
        text_type = MainTextType(_text(value.get("type")).lower())
    except ValueError:
        text_type = MainTextType.TITLE
    return MainText(type=text_type, lines=lines)


def _emphasis_words(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    words = [_text(word) for word in value]
    return [word for word in words if word][:MAX_EMPHASIS_WORDS]


def _sound_effects(value: Any) -> List[SoundEffect]:
    if not isinstance(value, list):
        return []

    effects: List[SoundEffect] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        keyword = _text(item.get("keyword"))
        try:
            sfx_type = SoundEffectType(_text(item.get("type")).lower())
        except ValueError:
            continue
        if not keyword:
            continue
        try:
            timing = SoundEffectTiming(_text(item.get("timing")).lower())
        except ValueError:
            timing = SoundEffectTiming.START

        effects.append(SoundEffect(
            type=sfx_type, keyword=keyword, timing=timing, volume=_volume(item.get("volume"))
        ))
    return effects


def default_scene_duration(requested_count: int, target_duration: Optional[float]) -> float:
    """Return the duration given to scenes that do not specify one."""
    if target_duration and target_duration > 0:
        return target_duration / requested_count
    return config.default_scene_duration


def _pad_or_truncate(raw_scenes: List[RawScene], requested_count: int) -> List[RawScene]:
    if len(raw_scenes) > requested_count:
        logger.info(
            f"Discarding {len(raw_scenes) - requested_count} extra scene(s) "
            f"(got {len(raw_scenes)}, need {requested_count})"
        )
        return raw_scenes[:requested_count]

    if len(raw_scenes) < requested_count:
        missing = requested_count - len(raw_scenes)
        logger.warning(
            f"Model returned {len(raw_scenes)} scene(s), need {requested_count}; "
            f"duplicating the last scene {missing} time(s)"
        )
        last = raw_scenes[-1]
        return raw_scenes + [last.model_copy() for _ in range(missing)]

    return raw_scenes


def normalize_scenes(
    raw_scenes: Iterable[SceneLike],
    requested_count: int,
    target_duration: Optional[float] = None,
) -> List[Scene]:
    """Normalize raw scenes into exactly ``requested_count`` valid scenes.

    Pads by duplicating the last scene, truncates extras, renumbers indices
    to ``1..requested_count`` and backfills missing fields. Normalizing an
    already normalized list returns an equal list.

    Args:
        raw_scenes: Scene objects from a model response, in order.
        requested_count: Exact number of scenes to return.
        target_duration: Total duration used to size scenes missing a duration.

    Returns:
        Exactly ``requested_count`` scenes (empty when the count is below 1).
    """
    if requested_count < 1:
        return []

    raws = [coerce_raw_scene(scene) for scene in raw_scenes]
    default_duration = default_scene_duration(requested_count, target_duration)

    if not raws:
        logger.warning(f"No scenes to normalize; synthesizing {requested_count} placeholders")
        raws = [RawScene() for _ in range(requested_count)]
    else:
        raws = _pad_or_truncate(raws, requested_count)

    scenes: List[Scene] = []
    previous_narration = ""
    for position, raw in enumerate(raws, start=1):
        narration = _text(raw.narration_text) or _text(raw.subtitle_text)
        narration = narration or previous_narration or placeholder_text(position)
        previous_narration = narration

        scenes.append(Scene(
            index=position,
            duration=_positive_number(raw.duration) or default_duration,
            narration_text=narration,
            subtitle_text=_text(raw.subtitle_text) or narration,
            image_prompt=_image_prompt(raw),
            emotion=_emotion(raw.emotion),
            transition=_transition(raw.transition),
            image_effect=_image_effect(raw.image_effect),
            emphasis_words=_emphasis_words(raw.emphasis_words),
            sound_effects=_sound_effects(raw.sound_effects),
            voice_style=_text(raw.voice_style),
            text_animation=_text_animation(raw.text_animation),
            main_text=_main_text(raw.main_text),
        ))

    return scenes


def vary_transitions(scenes: Sequence[Scene]) -> List[Scene]:
    """Break up runs of three identical transitions.

    The third scene of a run gets the next transition in
    fade, slide, zoom, wipe order. Returns new scene objects; only
    ``transition`` ever changes.
    """
    order = list(Transition)
    result: List[Scene] = []
    for scene in scenes:
        if (
            len(result) >= 2
            and result[-1].transition == scene.transition
            and result[-2].transition == scene.transition
        ):
            replacement = order[(order.index(scene.transition) + 1) % len(order)]
            result.append(scene.model_copy(update={"transition": replacement}))
        else:
            result.append(scene.model_copy())
    return result
