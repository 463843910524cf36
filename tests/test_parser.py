"""Tests for script response parsing."""

import json

import pytest

from scenegen.pipeline.parser import (
    ParseFailure,
    ParsedScenes,
    find_balanced_object,
    parse_script_response,
)


@pytest.fixture
def payload(script_response):
    return script_response(3)


def _subtitles(result):
    return [scene.subtitle_text for scene in result.scenes]


def test_parses_raw_json(payload):
    result = parse_script_response(payload)

    assert isinstance(result, ParsedScenes)
    assert len(result.scenes) == 3
    assert result.title == "Test video"
    assert result.tags == ["one", "two"]


def test_parses_identically_across_wrappings(payload):
    raw = parse_script_response(payload)
    fenced = parse_script_response(f"Here is the script:\n```json\n{payload}\n```\nEnjoy!")
    bare_fence = parse_script_response(f"```\n{payload}\n```")
    prose = parse_script_response(f"Sure! {payload} Let me know if you need changes.")

    for result in (fenced, bare_fence, prose):
        assert isinstance(result, ParsedScenes)
        assert result.scenes == raw.scenes
        assert result.title == raw.title


def test_accepts_top_level_scene_array(raw_scene):
    result = parse_script_response(json.dumps([raw_scene(1), raw_scene(2)]))

    assert isinstance(result, ParsedScenes)
    assert len(result.scenes) == 2
    assert result.title == ""


def test_maps_wire_aliases(raw_scene):
    result = parse_script_response(json.dumps({"scenes": [raw_scene(4)]}))
    scene = result.scenes[0]

    assert scene.index == 4
    assert scene.narration_text == "narration 4"
    assert scene.image_prompt == "image prompt 4"
    assert scene.image_effect == "panLeft"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        None,
        "I'm sorry, I can't help with that.",
        "{not json at all}",
        '{"title": "no scenes here"}',
        '{"scenes": "nope"}',
        '{"scenes": [1, 2, 3]}',
        "42",
    ],
)
def test_failure_is_returned_not_raised(text):
    result = parse_script_response(text)

    assert isinstance(result, ParseFailure)
    assert result.reason


def test_balanced_object_ignores_braces_in_strings():
    text = 'prefix {"a": "}{", "b": {"c": 1}} suffix }'
    assert find_balanced_object(text) == '{"a": "}{", "b": {"c": 1}}'


def test_balanced_object_skips_unbalanced_prefix():
    assert find_balanced_object("{ oops") is None


def test_oversized_integer_is_a_failure():
    result = parse_script_response('{"scenes": [{"duration": ' + "1" * 5000 + "}]}")

    assert isinstance(result, ParseFailure)


def test_skips_fenced_json_without_scenes(payload):
    text = (
        "Settings:\n```json\n{\"language\": \"en\"}\n```\n"
        f"Script:\n```json\n{payload}\n```"
    )

    result = parse_script_response(text)

    assert isinstance(result, ParsedScenes)
    assert len(result.scenes) == 3


def test_falls_through_to_balanced_object(payload):
    text = f"```json\n[\"not\", \"scenes\"]\n``` actually: {payload}"

    result = parse_script_response(text)

    assert isinstance(result, ParsedScenes)
    assert len(result.scenes) == 3
