"""Shared test fixtures."""

import json
import time

import pytest

from scenegen.models import Scene


class FakeCapability:
    """Text capability double that records calls."""

    def __init__(self, response=None, error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []

    def generate(self, prompt, response_format="text"):
        self.calls.append((prompt, response_format))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_capability():
    """Return the FakeCapability class for building doubles in tests."""
    return FakeCapability


def make_raw_scene(n, **overrides):
    scene = {
        "scene_index": n,
        "duration": 6,
        "avatar_script": f"narration {n}",
        "subtitle": f"subtitle {n}",
        "image_prompt": f"image prompt {n}",
        "emotion": "happy",
        "transition": "slide",
        "image_effect": "panLeft",
        "emphasis_words": ["alpha", "beta"],
        "sound_effects": [
            {"type": "action", "keyword": "keyboard typing", "timing": "start", "volume": 0.4}
        ],
    }
    scene.update(overrides)
    return scene


@pytest.fixture
def raw_scene():
    """Return a factory for well-formed raw scene dicts."""
    return make_raw_scene


@pytest.fixture
def script_response():
    """Return a factory for JSON script responses with ``n`` scenes."""
    def _build(n, **top_level):
        data = {
            "title": "Test video",
            "description": "A test",
            "scenes": [make_raw_scene(i + 1) for i in range(n)],
            "total_duration": 6 * n,
            "tags": ["one", "two"],
        }
        data.update(top_level)
        return json.dumps(data, ensure_ascii=False)
    return _build


@pytest.fixture
def scenes():
    """Return three normalized scenes."""
    return [
        Scene(
            index=i,
            duration=5.0,
            narration_text=f"narration {i}",
            subtitle_text=f"subtitle {i}",
            image_prompt=f"prompt {i}",
            emotion=emotion,
            transition=transition,
            image_effect=effect,
        )
        for i, emotion, transition, effect in [
            (1, "happy", "zoom", "zoomIn"),
            (2, "serious", "fade", "panLeft"),
            (3, "thoughtful", "slide", "zoomOut"),
        ]
    ]
