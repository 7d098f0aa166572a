"""
Test cases for the knowledge-grounded chat pipeline
"""

import json
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from notus.core.exceptions import ConfigurationError
from notus.core.credentials import StaticCredentialsProvider
from notus.db.models import ChatConversation, ContentSource, PersonalBrand
from notus.schemas.agent import ProviderType
from notus.schemas.chat import ChatRequest
from notus.services.agent_registry import DEFAULT_AGENT_CONFIGS
from notus.services.chat_pipeline import ChatPipeline
from notus.services.conversation_store import ConversationStore
from notus.services.dispatcher import ModelDispatcher
from notus.services.knowledge_retriever import KnowledgeRetriever
from notus.services.prompt_assembler import KNOWLEDGE_HEADING


@pytest.fixture
def conversations(session_factory):
    return ConversationStore(session_factory)


@pytest.fixture
def pipeline(registry, session_factory, conversations, dispatcher):
    return ChatPipeline(registry, KnowledgeRetriever(session_factory), conversations, dispatcher)


def _request(**fields):
    data = {"message": "What should I post about?", "workspaceId": "ws-a"}
    data.update(fields)
    return ChatRequest(**data)


class TestChatPipeline:
    @pytest.mark.asyncio
    async def test_default_strategist_without_knowledge(self, pipeline, providers):
        response = await pipeline.run(_request(agentType="content_strategist"))

        call = providers[ProviderType.OPENAI].calls[0]
        assert call["system_prompt"] == DEFAULT_AGENT_CONFIGS["content_strategist"].prompt
        assert KNOWLEDGE_HEADING not in call["system_prompt"]
        assert [m.content for m in call["messages"]] == ["What should I post about?"]
        assert response.response == "openai reply"
        assert response.agent_type == "content_strategist"
        assert response.knowledge_used is False

    @pytest.mark.asyncio
    async def test_workspace_override_routes_to_anthropic(self, pipeline, config_store, providers):
        override = DEFAULT_AGENT_CONFIGS["copywriter"].model_dump(by_alias=True, mode="json")
        override.update({"provider": "anthropic", "prompt": "House copywriter."})
        config_store.save_override("ws-a", "copywriter", json.dumps(override))

        response = await pipeline.run(_request(agentType="copywriter", message="Write a hook"))

        assert providers[ProviderType.OPENAI].calls == []
        assert providers[ProviderType.ANTHROPIC].calls[0]["system_prompt"] == "House copywriter."
        assert response.response == "anthropic reply"

    @pytest.mark.asyncio
    async def test_override_can_move_openai_role_to_anthropic(self, pipeline, config_store, providers):
        override = DEFAULT_AGENT_CONFIGS["content_strategist"].model_dump(by_alias=True, mode="json")
        override["provider"] = "anthropic"
        config_store.save_override("ws-a", "content_strategist", json.dumps(override))

        await pipeline.run(_request(agentType="content_strategist"))

        assert providers[ProviderType.OPENAI].calls == []
        assert len(providers[ProviderType.ANTHROPIC].calls) == 1

    @pytest.mark.asyncio
    async def test_knowledge_is_rendered_into_system_prompt(self, pipeline, session_factory, providers):
        db = session_factory()
        try:
            db.add(ContentSource(workspace_id="ws-a", title="Q1 Strategy", content="Focus on thought leadership"))
            db.add(PersonalBrand(workspace_id="ws-a", name="Acme", description="B2B SaaS"))
            db.commit()
        finally:
            db.close()

        response = await pipeline.run(_request())

        section = providers[ProviderType.OPENAI].calls[0]["system_prompt"].split(KNOWLEDGE_HEADING, 1)[1]
        assert "Q1 Strategy: Focus on thought leadership" in section
        assert "Brand: Acme - B2B SaaS" in section
        assert response.knowledge_used is True

    @pytest.mark.asyncio
    async def test_turns_are_stored_and_replayed(self, pipeline, conversations, providers):
        await pipeline.run(_request(conversationId="c-1", userId="u-1", message="First"))
        await pipeline.run(_request(conversationId="c-1", userId="u-1", message="Second"))

        second_call = providers[ProviderType.OPENAI].calls[1]
        assert [(m.role, m.content) for m in second_call["messages"]] == [
            ("user", "First"),
            ("assistant", "openai reply"),
            ("user", "Second"),
        ]
        assert len(conversations.load_history("c-1", "ws-a")) == 2

    @pytest.mark.asyncio
    async def test_shared_conversation_id_does_not_leak_across_workspaces(
        self, pipeline, conversations, providers
    ):
        conversations.append_turn(
            conversation_id="c-shared",
            workspace_id="ws-a",
            user_id="u-a",
            agent_type="client_consultant",
            user_message="ws-a secret question",
            assistant_message="ws-a secret answer",
        )

        await pipeline.run(_request(message="hi", workspaceId="ws-b", conversationId="c-shared"))

        call = providers[ProviderType.OPENAI].calls[0]
        assert [m.content for m in call["messages"]] == ["hi"]
        assert [t.user_message for t in conversations.load_history("c-shared", "ws-a")] == [
            "ws-a secret question"
        ]
        assert [t.user_message for t in conversations.load_history("c-shared", "ws-b")] == ["hi"]

    @pytest.mark.asyncio
    async def test_no_conversation_id_stores_nothing(self, pipeline, session_factory):
        await pipeline.run(_request())

        db = session_factory()
        try:
            assert db.query(ChatConversation).count() == 0
        finally:
            db.close()

    @pytest.mark.asyncio
    async def test_storage_failure_still_returns_reply(self, registry, session_factory, dispatcher):
        conversations = Mock(spec=ConversationStore)
        conversations.load_history.return_value = []
        conversations.append_turn.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        pipeline = ChatPipeline(registry, KnowledgeRetriever(session_factory), conversations, dispatcher)

        response = await pipeline.run(_request(conversationId="c-1"))

        assert response.response == "openai reply"
        conversations.append_turn.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_key_aborts_turn(self, registry, session_factory, conversations, providers):
        dispatcher = ModelDispatcher(StaticCredentialsProvider({}), providers)
        pipeline = ChatPipeline(registry, KnowledgeRetriever(session_factory), conversations, dispatcher)

        with pytest.raises(ConfigurationError):
            await pipeline.run(_request(conversationId="c-1"))

        assert providers[ProviderType.OPENAI].calls == []
        assert conversations.load_history("c-1", "ws-a") == []
