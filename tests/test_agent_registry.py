"""
Tests for agent configuration resolution and workspace overrides
"""

import json

import pytest

from notus.core.exceptions import MalformedOverrideError
from notus.schemas.agent import AgentConfig, ProviderType
from notus.services.agent_registry import (
    DEFAULT_AGENT_CONFIGS,
    DEFAULT_ROLE,
    parse_override,
)


def _override(**fields):
    data = {
        "name": "Custom Strategist",
        "provider": "anthropic",
        "model": "claude-3-5-haiku-20241022",
        "prompt": "You are our in-house strategist.",
        "temperature": 0.3,
        "maxTokens": 800,
    }
    data.update(fields)
    return data


class TestDefaults:
    def test_chat_roles_have_defaults(self):
        for role in ("content_strategist", "copywriter", "brand_analyst", "client_consultant"):
            assert role in DEFAULT_AGENT_CONFIGS

    def test_no_workspace_returns_default(self, registry):
        config = registry.resolve_agent_config("content_strategist", None)
        assert config == DEFAULT_AGENT_CONFIGS["content_strategist"]
        assert config.provider == ProviderType.OPENAI

    def test_unknown_role_falls_back_to_default_role(self, registry):
        config = registry.resolve_agent_config("astrologer", "ws-1")
        assert config == DEFAULT_AGENT_CONFIGS[DEFAULT_ROLE]


class TestOverrides:
    def test_override_wins_over_default(self, registry, config_store):
        config_store.save_override("ws-1", "content_strategist", json.dumps(_override()))

        config = registry.resolve_agent_config("content_strategist", "ws-1")

        assert config.name == "Custom Strategist"
        assert config.provider == ProviderType.ANTHROPIC
        assert config.max_tokens == 800

    def test_override_is_workspace_scoped(self, registry, config_store):
        config_store.save_override("ws-1", "content_strategist", json.dumps(_override()))

        config = registry.resolve_agent_config("content_strategist", "ws-2")

        assert config == DEFAULT_AGENT_CONFIGS["content_strategist"]

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[1, 2, 3]",
            json.dumps(_override(provider="mistral")),
            json.dumps(_override(temperature=1.5)),
        ],
    )
    def test_malformed_override_is_ignored(self, registry, config_store, raw):
        config_store.save_override("ws-1", "brand_analyst", raw)

        config = registry.resolve_agent_config("brand_analyst", "ws-1")

        assert config == DEFAULT_AGENT_CONFIGS["brand_analyst"]

    def test_parse_override_raises_with_reason(self):
        with pytest.raises(MalformedOverrideError) as exc_info:
            parse_override("{not json", "copywriter", "ws-1")
        assert exc_info.value.role == "copywriter"
        assert "invalid JSON" in exc_info.value.reason

    def test_save_and_reset_round_trip(self, registry):
        custom = AgentConfig.model_validate(_override())
        registry.save_override("ws-1", "copywriter", custom, user_id="u-1")

        assert registry.resolve_agent_config("copywriter", "ws-1") == custom

        restored = registry.reset_override("ws-1", "copywriter")
        assert restored == DEFAULT_AGENT_CONFIGS["copywriter"]
        assert registry.resolve_agent_config("copywriter", "ws-1") == DEFAULT_AGENT_CONFIGS["copywriter"]

    def test_stored_override_uses_camel_case_keys(self, registry, config_store):
        registry.save_override("ws-1", "copywriter", AgentConfig.model_validate(_override()))

        stored = json.loads(config_store.get_override("ws-1", "copywriter"))

        assert stored["maxTokens"] == 800
        assert "max_tokens" not in stored


class TestListing:
    def test_list_marks_customized_roles(self, registry, config_store):
        config_store.save_override("ws-1", "copywriter", json.dumps(_override()))
        config_store.save_override("ws-1", "newsletter_editor", json.dumps(_override(name="Editor")))

        agents = {a.role: a for a in registry.list_agents("ws-1")}

        assert agents["copywriter"].customized is True
        assert agents["content_strategist"].customized is False
        assert agents["newsletter_editor"].config.name == "Editor"

    def test_describe_unknown_role(self, registry):
        assert registry.describe_agent("astrologer", "ws-1") is None
        assert registry.describe_agent("copywriter", "ws-1").customized is False
