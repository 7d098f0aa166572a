"""
Tests for the copywriting pipeline
"""

import pytest

from notus.schemas.agent import ProviderType
from notus.schemas.generation import CopyRequest
from notus.services.agent_registry import DEFAULT_AGENT_CONFIGS
from notus.services.copywriter_service import CopywriterService, PLATFORM_GUIDES


@pytest.fixture
def copywriter(registry, dispatcher):
    return CopywriterService(registry, dispatcher)


class TestCopywriterService:
    @pytest.mark.asyncio
    async def test_general_copy(self, copywriter, providers):
        providers[ProviderType.ANTHROPIC].reply = "Three short words"

        response = await copywriter.generate(
            CopyRequest(prompt="Announce our beta", tone="casual", length="short", type="email", audience="founders")
        )

        call = providers[ProviderType.ANTHROPIC].calls[0]
        assert call["system_prompt"].startswith(DEFAULT_AGENT_CONFIGS["long_form_writer"].prompt)
        assert "- Tone: casual" in call["system_prompt"]
        assert "- Target audience: founders" in call["system_prompt"]
        assert "subject line" in call["system_prompt"]
        assert call["messages"][-1].content == "Announce our beta"
        assert response.copy_text == "Three short words"
        assert response.metadata.word_count == 3
        assert response.metadata.structured is False

    @pytest.mark.asyncio
    async def test_empty_prompt_is_rejected(self, copywriter, providers):
        with pytest.raises(ValueError, match="Prompt is required"):
            await copywriter.generate(CopyRequest(prompt="   "))
        assert providers[ProviderType.ANTHROPIC].calls == []

    @pytest.mark.asyncio
    async def test_structured_transcript_mode(self, copywriter, providers):
        request = CopyRequest.model_validate(
            {
                "useStructuredPrompt": True,
                "transcript": "We cut churn by 30% after calling every new customer.",
                "clientName": "Dana",
                "previousPosts": ["Shipping beats polishing."],
                "type": "twitter_thread",
            }
        )

        response = await copywriter.generate(request)

        call = providers[ProviderType.ANTHROPIC].calls[0]
        assert PLATFORM_GUIDES["twitter_thread"] in call["system_prompt"]
        assert "<example_1>\nShipping beats polishing.\n</example_1>" in call["system_prompt"]
        assert call["messages"][-1].content.startswith("Transcript:")
        assert response.metadata.structured is True

    @pytest.mark.asyncio
    async def test_structured_flag_without_transcript_needs_prompt(self, copywriter):
        with pytest.raises(ValueError):
            await copywriter.generate(CopyRequest.model_validate({"useStructuredPrompt": True}))
