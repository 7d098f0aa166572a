"""
Tests for system prompt and message assembly
"""

from datetime import datetime, timezone

from notus.schemas.chat import ConversationTurn
from notus.schemas.knowledge import KnowledgeRecord, KnowledgeSource
from notus.services.agent_registry import DEFAULT_AGENT_CONFIGS
from notus.services.prompt_assembler import (
    KNOWLEDGE_HEADING,
    KNOWLEDGE_INSTRUCTION,
    assemble_prompt,
    build_system_prompt,
    render_knowledge_record,
)

STRATEGIST = DEFAULT_AGENT_CONFIGS["content_strategist"]


def _source(title, content):
    return KnowledgeRecord(
        source=KnowledgeSource.CONTENT_SOURCE, workspace_id="ws-a", title=title, content=content
    )


def _brand(**fields):
    return KnowledgeRecord(source=KnowledgeSource.BRAND_PROFILE, workspace_id="ws-a", **fields)


class TestRendering:
    def test_title_and_content(self):
        assert render_knowledge_record(_source("Q1 Strategy", "Focus on thought leadership")) == (
            "Q1 Strategy: Focus on thought leadership"
        )

    def test_brand_name_and_description(self):
        assert render_knowledge_record(_brand(name="Acme", description="B2B SaaS")) == "Brand: Acme - B2B SaaS"

    def test_first_matching_rule_wins(self):
        record = _brand(name="Acme", tone_of_voice="Warm", bio="Founder")
        assert render_knowledge_record(record) == "Tone of Voice: Warm"

    def test_expertise_list(self):
        record = _brand(name="Acme", expertise_areas=["SEO", "B2B"])
        assert render_knowledge_record(record) == "Expertise: SEO, B2B"

    def test_structural_fallback(self):
        record = _brand(name="Acme")
        assert render_knowledge_record(record) == '{"name": "Acme"}'


class TestSystemPrompt:
    def test_no_knowledge_section_when_empty(self):
        prompt = build_system_prompt(STRATEGIST, [])
        assert prompt == STRATEGIST.prompt
        assert KNOWLEDGE_HEADING not in prompt

    def test_agent_prompt_is_verbatim_prefix(self):
        prompt = build_system_prompt(STRATEGIST, [_source("Q1 Strategy", "Focus on thought leadership")])

        assert prompt.startswith(STRATEGIST.prompt)
        assert prompt.endswith(KNOWLEDGE_INSTRUCTION)

    def test_knowledge_section_holds_all_records(self):
        prompt = build_system_prompt(
            STRATEGIST,
            [_source("Q1 Strategy", "Focus on thought leadership"), _brand(name="Acme", description="B2B SaaS")],
        )

        section = prompt.split(KNOWLEDGE_HEADING, 1)[1]
        assert "Q1 Strategy: Focus on thought leadership" in section
        assert "Brand: Acme - B2B SaaS" in section


class TestMessages:
    def test_history_replayed_before_new_message(self):
        history = [
            ConversationTurn(
                conversation_id="c-1",
                workspace_id="ws-a",
                agent_type="copywriter",
                user_message="Hi",
                assistant_message="Hello!",
                created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
        ]

        assembled = assemble_prompt(STRATEGIST, [], history, "Draft a post")

        assert [(m.role, m.content) for m in assembled.messages] == [
            ("user", "Hi"),
            ("assistant", "Hello!"),
            ("user", "Draft a post"),
        ]
        assert "Hello!" not in assembled.system_prompt
