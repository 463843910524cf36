"""Tests for the image prompt enhancement pass."""

import json

import pytest

from scenegen.models import Emotion, EnhancedPrompt, ImageEffect
from scenegen.pipeline.enhancer import (
    EMOTION_VISUAL_GUIDES,
    IMAGE_EFFECT_COMPOSITION,
    build_enhancement_context,
    build_enhancement_user_prompt,
    enhance_image_prompts,
    merge_enhanced_prompts,
    parse_enhancement_response,
)


def _response(*pairs):
    return json.dumps({
        "enhancedPrompts": [{"sceneIndex": i, "enhanced": text} for i, text in pairs]
    })


def test_lookup_tables_cover_every_value():
    assert set(EMOTION_VISUAL_GUIDES) == set(Emotion)
    assert set(IMAGE_EFFECT_COMPOSITION) == set(ImageEffect)


def test_lookup_tables_are_read_only():
    with pytest.raises(TypeError):
        EMOTION_VISUAL_GUIDES[Emotion.HAPPY] = {}


def test_context_from_scenes(scenes):
    context = build_enhancement_context("cats", scenes, aspect_ratio="4:3")

    assert context.aspect_ratio == "16:9"
    assert context.total_scenes == 3
    assert context.scenes[1].scene_index == 2
    assert context.scenes[1].original_prompt == "prompt 2"
    assert context.scenes[1].emotion == Emotion.SERIOUS


def test_user_prompt_includes_per_scene_guidance(scenes):
    context = build_enhancement_context("cats", scenes, aspect_ratio="9:16")
    prompt = build_enhancement_user_prompt(context)

    assert "ASPECT RATIO: 9:16" in prompt
    assert "[SCENE 3]" in prompt
    assert EMOTION_VISUAL_GUIDES[Emotion.SERIOUS]["lighting"] in prompt
    assert IMAGE_EFFECT_COMPOSITION[ImageEffect.PAN_LEFT] in prompt
    assert "enhancedPrompts" in prompt


def test_parse_response_with_surrounding_text():
    text = "Here you go:\n" + _response((1, "better one"), (2, "better two")) + "\nDone."

    prompts = parse_enhancement_response(text)

    assert prompts == [
        EnhancedPrompt(scene_index=1, enhanced="better one"),
        EnhancedPrompt(scene_index=2, enhanced="better two"),
    ]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no json",
        '{"prompts": []}',
        '{"enhancedPrompts": "x"}',
    ],
)
def test_parse_response_returns_none_on_bad_structure(text):
    assert parse_enhancement_response(text) is None


def test_parse_response_rejects_oversized_integers():
    text = '{"enhancedPrompts": [{"sceneIndex": ' + "1" * 5000 + ', "enhanced": "x"}]}'

    assert parse_enhancement_response(text) is None


def test_parse_response_skips_only_bad_entries():
    text = json.dumps({
        "enhancedPrompts": [
            {"enhanced": "missing index"},
            1,
            {"sceneIndex": 2, "enhanced": "better two"},
        ]
    })

    assert parse_enhancement_response(text) == [EnhancedPrompt(scene_index=2, enhanced="better two")]


def test_merge_applies_batch_with_a_bad_entry(scenes):
    text = json.dumps({
        "enhancedPrompts": [
            {"sceneIndex": 1, "enhanced": "better one"},
            {"enhanced": "no index"},
        ]
    })

    merged = merge_enhanced_prompts(scenes, parse_enhancement_response(text))

    assert [s.image_prompt for s in merged] == ["better one", "prompt 2", "prompt 3"]


def test_merge_with_no_enhancements_is_identity(scenes):
    assert merge_enhanced_prompts(scenes, []) == scenes


def test_merge_changes_only_matching_image_prompts(scenes):
    enhanced = [
        EnhancedPrompt(scene_index=3, enhanced="new three"),
        EnhancedPrompt(scene_index=1, enhanced="new one"),
        EnhancedPrompt(scene_index=2, enhanced="   "),
        EnhancedPrompt(scene_index=9, enhanced="no such scene"),
    ]

    merged = merge_enhanced_prompts(scenes, enhanced)

    assert [s.image_prompt for s in merged] == ["new one", "prompt 2", "new three"]
    for before, after in zip(scenes, merged):
        assert before.model_dump(exclude={"image_prompt"}) == after.model_dump(exclude={"image_prompt"})
    assert scenes[0].image_prompt == "prompt 1"


def test_enhance_makes_one_batched_json_call(scenes, fake_capability):
    capability = fake_capability(response=_response((1, "a"), (2, "b"), (3, "c")))
    context = build_enhancement_context("cats", scenes)

    prompts = enhance_image_prompts(context, capability)

    assert [p.enhanced for p in prompts] == ["a", "b", "c"]
    assert len(capability.calls) == 1
    assert capability.calls[0][1] == "json"


def test_enhance_returns_none_on_capability_error(scenes, fake_capability):
    capability = fake_capability(error=RuntimeError("boom"))
    context = build_enhancement_context("cats", scenes)

    assert enhance_image_prompts(context, capability) is None


def test_enhance_returns_none_on_unparseable_response(scenes, fake_capability):
    capability = fake_capability(response="I could not do that.")
    context = build_enhancement_context("cats", scenes)

    assert enhance_image_prompts(context, capability) is None


def test_enhance_skips_call_for_empty_context(fake_capability):
    capability = fake_capability(response="unused")
    context = build_enhancement_context("cats", [])

    assert enhance_image_prompts(context, capability) == []
    assert capability.calls == []
