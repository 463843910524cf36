"""Deterministic sentence-boundary scene splitter.

Used whenever the text model is unavailable or returns something unusable.
Never calls an external service.
"""

import logging
import math
import re
from typing import List, Optional

from ..models import Scene
from .normalizer import DEFAULT_IMAGE_PROMPT, default_scene_duration, placeholder_text

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY_RE = re.compile(r"(?:[。！？!?\n]|\.(?=\s|$))+")
SENTENCE_JOINER = "。"


def split_sentences(text: Optional[str]) -> List[str]:
    """Split text on sentence-terminal punctuation and newlines."""
    if not text:
        return []
    fragments = SENTENCE_BOUNDARY_RE.split(text)
    return [fragment.strip() for fragment in fragments if fragment.strip()]


def split_by_sentence_boundary(
    source_text: Optional[str],
    requested_count: int,
    target_duration: Optional[float] = None,
) -> List[Scene]:
    """Split source text into exactly ``requested_count`` scenes.

    Sentences are grouped into chunks of ``ceil(sentences / requested_count)``
    and joined back with a full stop. Scenes past the available material get
    a placeholder subtitle.
    """
    if requested_count < 1:
        return []

    sentences = split_sentences(source_text)
    chunk_size = max(1, math.ceil(len(sentences) / requested_count))
    duration = default_scene_duration(requested_count, target_duration)

    logger.info(
        f"Fallback split: {len(sentences)} sentence(s) into {requested_count} scene(s)"
    )

    scenes: List[Scene] = []
    for i in range(requested_count):
        chunk = sentences[i * chunk_size:(i + 1) * chunk_size]
        text = SENTENCE_JOINER.join(chunk) or placeholder_text(i + 1)
        scenes.append(Scene(
            index=i + 1,
            duration=duration,
            narration_text=text,
            subtitle_text=text,
            image_prompt=DEFAULT_IMAGE_PROMPT,
        ))

    return scenes
