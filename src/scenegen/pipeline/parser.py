"""Extract scene lists from raw text model responses."""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..models import RawScene

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


@dataclass
class ParsedScenes:
    """Successfully parsed scene list plus script-level metadata."""

    scenes: List[RawScene]
    title: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParseFailure:
    """The response did not contain a usable scene list."""

    reason: str


ParseResult = Union[ParsedScenes, ParseFailure]


def find_balanced_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of ``text``.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            char = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        # Unbalanced from this brace; try the next one
        start = text.find("{", start + 1)
    return None


def _candidates(text: str) -> Iterator[str]:
    yield text
    for match in FENCE_RE.finditer(text):
        yield match.group(1).strip()
    obj = find_balanced_object(text)
    if obj is not None:
        yield obj


def _has_scenes(data: Any) -> bool:
    scenes = data.get("scenes") if isinstance(data, dict) else data
    return isinstance(scenes, list) and all(isinstance(item, dict) for item in scenes)


def _decode(text: str) -> Optional[Any]:
    """Decode the first candidate holding a scene list.

    Falls back to the first candidate that decodes at all, so callers can
    report why it is unusable.
    """
    first = None
    for candidate in _candidates(text):
        try:
            data = json.loads(candidate)
        except ValueError:
            # JSONDecodeError, or an integer past the interpreter's digit limit
            continue
        if _has_scenes(data):
            return data
        if first is None:
            first = data
    return first


def _as_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_script_response(raw_text: Optional[str]) -> ParseResult:
    """Parse a model response into raw scenes.

    Tries, in order: the whole string as JSON, each fenced code block, and
    the first balanced JSON object. The first candidate carrying a list of
    scene objects wins. Never raises.

    Args:
        raw_text: Text returned by the text generation capability.

    Returns:
        ParsedScenes on success, otherwise a ParseFailure describing why.
    """
    if not raw_text or not raw_text.strip():
        return ParseFailure("empty response")

    data = _decode(raw_text.strip())
    if data is None:
        logger.debug(f"No JSON found in response of length {len(raw_text)}")
        return ParseFailure("no JSON found in response")

    metadata: dict[str, Any] = {}
    if isinstance(data, dict):
        scenes_data = data.get("scenes")
        metadata = data
    else:
        scenes_data = data

    if not isinstance(scenes_data, list):
        return ParseFailure("response does not contain a scenes array")

    if not all(isinstance(item, dict) for item in scenes_data):
        return ParseFailure("scenes array contains non-object entries")

    try:
        scenes = [RawScene.model_validate(item) for item in scenes_data]
    except PydanticValidationError as e:
        return ParseFailure(f"invalid scene object: {e.error_count()} error(s)")

    tags = metadata.get("tags")
    return ParsedScenes(
        scenes=scenes,
        title=_as_str(metadata.get("title")),
        description=_as_str(metadata.get("description")),
        tags=[t for t in tags if isinstance(t, str)] if isinstance(tags, list) else [],
    )
