"""Tests for data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from scenegen.models import (
    GenerationRequest,
    MainText,
    MainTextType,
    RawScene,
    Scene,
    Script,
    ScriptOrigin,
    TextAnimation,
)


def test_request_is_immutable():
    request = GenerationRequest(source_text="cats", requested_scene_count=3)

    with pytest.raises(PydanticValidationError):
        request.source_text = "dogs"


def test_request_defaults():
    request = GenerationRequest(source_text="cats")

    assert request.style == "educational"
    assert request.target_duration == 60
    assert request.scene_count == 8


def test_request_rejects_non_positive_duration():
    with pytest.raises(PydanticValidationError):
        GenerationRequest(source_text="cats", target_duration=0)


def test_scene_rejects_too_many_emphasis_words():
    with pytest.raises(PydanticValidationError):
        Scene(index=1, duration=1, narration_text="n", subtitle_text="s", image_prompt="p",
              emphasis_words=["a", "b", "c", "d"])


def test_raw_scene_accepts_camel_case():
    raw = RawScene.model_validate({"sceneIndex": 2, "imagePrompt": "x", "voiceText": "v"})

    assert raw.index == 2
    assert raw.image_prompt == "x"
    assert raw.narration_text == "v"


def test_wire_shape(scenes):
    script = Script(title="t", scenes=scenes, generated_by=ScriptOrigin.FALLBACK)

    wire = script.to_wire()

    assert wire["generated_by"] == "fallback"
    assert wire["total_duration"] == 15
    assert set(wire["scenes"][0]) == {
        "scene_index", "duration", "avatar_script", "subtitle", "image_prompt",
        "emotion", "transition", "image_effect", "emphasis_words", "sound_effects",
        "voice_style", "text_animation", "main_text",
    }
    assert wire["scenes"][1]["emotion"] == "serious"
    assert wire["scenes"][1]["text_animation"] == "none"
    assert wire["scenes"][1]["main_text"] is None


def test_yaml_file_round_trip(tmp_path, scenes):
    script = Script(title="日本語のタイトル", tags=["a"], scenes=scenes)
    path = tmp_path / "script.yaml"

    script.to_yaml(path)

    assert "日本語のタイトル" in path.read_text(encoding="utf-8")
    assert Script.from_yaml(path) == script


def test_main_text_survives_yaml(tmp_path, scenes):
    scenes[0].main_text = MainText(type=MainTextType.BULLET, lines=["one", "two"])
    scenes[0].text_animation = TextAnimation.TYPEWRITER
    script = Script(title="t", scenes=scenes)
    path = tmp_path / "script.yaml"

    script.to_yaml(path)
    loaded = Script.from_yaml(path)

    assert loaded.scenes[0].main_text.lines == ["one", "two"]
    assert loaded.to_wire()["scenes"][0]["main_text"] == {"type": "bullet", "lines": ["one", "two"]}
    assert loaded.scenes[0].text_animation == TextAnimation.TYPEWRITER
