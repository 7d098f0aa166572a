"""
Tests for tone of voice analysis and brand write-back
"""

import json

import pytest

from notus.core.exceptions import ResponseParseError
from notus.db.models import PersonalBrand
from notus.schemas.agent import ProviderType
from notus.services.brand_profile_store import BrandProfileStore
from notus.services.tone_analyzer import POST_SEPARATOR, ToneAnalyzer, parse_analysis

FALLBACK_KEYS = {
    "tone_description",
    "key_characteristics",
    "writing_style",
    "content_patterns",
    "personality_traits",
    "content_themes",
}


class TestParseAnalysis:
    def test_plain_json(self):
        assert parse_analysis('{"tone_description": "Warm"}') == {"tone_description": "Warm"}

    def test_code_fenced_json(self):
        assert parse_analysis('```json\n{"tone_description": "Warm"}\n```') == {"tone_description": "Warm"}

    def test_non_object_is_rejected(self):
        with pytest.raises(ResponseParseError):
            parse_analysis('["Warm"]')


class TestToneAnalyzer:
    @pytest.mark.asyncio
    async def test_non_json_reply_returns_fallback(self, registry, dispatcher, providers):
        providers[ProviderType.ANTHROPIC].reply = "The author sounds upbeat and direct."

        analysis = await ToneAnalyzer(registry, dispatcher).analyze(["Post one", "Post two"])

        assert set(analysis) == FALLBACK_KEYS
        assert analysis["tone_description"] == "The author sounds upbeat and direct."
        assert analysis["writing_style"]["formality_level"] == "professional"

    @pytest.mark.asyncio
    async def test_posts_are_joined_with_separator(self, registry, dispatcher, providers):
        providers[ProviderType.ANTHROPIC].reply = "{}"

        await ToneAnalyzer(registry, dispatcher).analyze(["Post one", "Post two"])

        user_message = providers[ProviderType.ANTHROPIC].calls[0]["messages"][-1].content
        assert f"Post one{POST_SEPARATOR}Post two" in user_message

    @pytest.mark.asyncio
    async def test_partial_analysis_is_completed(self, registry, dispatcher, providers):
        providers[ProviderType.ANTHROPIC].reply = json.dumps(
            {"tone_description": "Calm", "content_themes": ["leadership"]}
        )

        analysis = await ToneAnalyzer(registry, dispatcher).analyze(["Post"])

        assert set(analysis) == FALLBACK_KEYS
        assert analysis["tone_description"] == "Calm"
        assert analysis["content_themes"] == ["leadership"]
        assert analysis["personality_traits"] == ["authentic", "knowledgeable"]


class TestBrandProfileStore:
    def test_analysis_is_written_to_brand(self, session_factory):
        db = session_factory()
        try:
            brand = PersonalBrand(workspace_id="ws-a", name="Acme", knowledge_base={"notes": "keep"})
            db.add(brand)
            db.commit()
            brand_id = brand.id
        finally:
            db.close()

        updated = BrandProfileStore(session_factory).apply_tone_analysis(
            brand_id, {"tone_description": "Warm"}, ["Post"], workspace_id="ws-a"
        )

        db = session_factory()
        try:
            brand = db.get(PersonalBrand, brand_id)
            assert updated is True
            assert brand.tone_of_voice == "Warm"
            assert brand.knowledge_base["linkedin_posts"] == ["Post"]
            assert brand.knowledge_base["tone_analysis"] == {"tone_description": "Warm"}
            assert brand.knowledge_base["notes"] == "keep"
        finally:
            db.close()

    def test_brand_of_other_workspace_is_not_touched(self, session_factory):
        db = session_factory()
        try:
            brand = PersonalBrand(workspace_id="ws-b", name="Beta")
            db.add(brand)
            db.commit()
            brand_id = brand.id
        finally:
            db.close()

        updated = BrandProfileStore(session_factory).apply_tone_analysis(
            brand_id, {"tone_description": "Warm"}, ["Post"], workspace_id="ws-a"
        )

        assert updated is False

    @pytest.mark.parametrize("description", [None, "", "   ", 42])
    def test_missing_description_keeps_tone_of_voice(self, session_factory, description):
        db = session_factory()
        try:
            brand = PersonalBrand(workspace_id="ws-a", name="Acme", tone_of_voice="Direct")
            db.add(brand)
            db.commit()
            brand_id = brand.id
        finally:
            db.close()

        updated = BrandProfileStore(session_factory).apply_tone_analysis(
            brand_id, {"tone_description": description}, ["Post"], workspace_id="ws-a"
        )

        db = session_factory()
        try:
            brand = db.get(PersonalBrand, brand_id)
            assert updated is True
            assert brand.tone_of_voice == "Direct"
            assert brand.knowledge_base["linkedin_posts"] == ["Post"]
        finally:
            db.close()
