"""Tests for the prompt enhancement agent."""

import json

from scenegen.agents import EnhancementInput, PromptEnhancementAgent
from scenegen.models import Script


def _script(scenes):
    return Script(title="t", scenes=scenes)


def test_merges_enhanced_prompts_into_copy(scenes, fake_capability):
    response = json.dumps({"enhancedPrompts": [
        {"sceneIndex": 1, "enhanced": "rich one"},
        {"sceneIndex": 3, "enhanced": "rich three"},
    ]})
    script = _script(scenes)
    agent = PromptEnhancementAgent(capability=fake_capability(response=response), timeout=1)

    result = agent.run(EnhancementInput(script=script, theme="cats", aspect_ratio="9:16"))

    assert [s.image_prompt for s in result.scenes] == ["rich one", "prompt 2", "rich three"]
    assert [s.image_prompt for s in script.scenes] == ["prompt 1", "prompt 2", "prompt 3"]
    assert result.title == "t"
    assert "ASPECT RATIO: 9:16" in agent.capability._capability.calls[0][0]


def test_keeps_original_prompts_on_failure(scenes, fake_capability):
    script = _script(scenes)
    agent = PromptEnhancementAgent(capability=fake_capability(error=TimeoutError()), timeout=1)

    result = agent.run(EnhancementInput(script=script, theme="cats"))

    assert result == script
    assert result is not script


def test_keeps_original_prompts_on_timeout(scenes, fake_capability):
    script = _script(scenes)
    capability = fake_capability(response='{"enhancedPrompts": []}', delay=0.5)
    agent = PromptEnhancementAgent(capability=capability, timeout=0.05)

    result = agent.run(EnhancementInput(script=script, theme="cats"))

    assert result.scenes == script.scenes
