"""
Prompt assembly

The agent prompt plus rendered workspace knowledge becomes the system
prompt. Conversation history is never folded into that text: it is replayed
as role-tagged messages and each provider variant decides where the system
prompt goes.
"""

import json
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel

from notus.schemas.agent import AgentConfig
from notus.schemas.chat import ChatMessage, ConversationTurn
from notus.schemas.knowledge import KnowledgeRecord

KNOWLEDGE_HEADING = "KNOWLEDGE BASE:"

KNOWLEDGE_INSTRUCTION = (
    "IMPORTANT: Use this knowledge base to provide contextual and accurate responses. "
    "When generating content, especially for LinkedIn posts, follow the tone of voice "
    "patterns and personal brand guidelines provided. Reference specific information "
    "when relevant and maintain consistency with the established brand voice."
)


class AssembledPrompt(BaseModel):
    system_prompt: str
    messages: List[ChatMessage]


def _title_content(record: KnowledgeRecord) -> Optional[str]:
    if record.title and record.content:
        return f"{record.title}: {record.content}"
    return None


def _brand(record: KnowledgeRecord) -> Optional[str]:
    if record.name and record.description:
        return f"Brand: {record.name} - {record.description}"
    return None


def _tone_of_voice(record: KnowledgeRecord) -> Optional[str]:
    if record.tone_of_voice:
        return f"Tone of Voice: {record.tone_of_voice}"
    return None


def _bio(record: KnowledgeRecord) -> Optional[str]:
    if record.bio:
        return f"Bio: {record.bio}"
    return None


def _expertise(record: KnowledgeRecord) -> Optional[str]:
    if record.expertise_areas:
        return f"Expertise: {', '.join(record.expertise_areas)}"
    return None


# First rule that yields text wins
RENDER_RULES: List[Callable[[KnowledgeRecord], Optional[str]]] = [
    _title_content,
    _brand,
    _tone_of_voice,
    _bio,
    _expertise,
]


def _structural_dump(record: KnowledgeRecord) -> str:
    data = record.model_dump(exclude={"source", "workspace_id"}, exclude_none=True)
    if not data.get("attributes"):
        data.pop("attributes", None)
    return json.dumps(data, ensure_ascii=False, default=str)


def render_knowledge_record(record: KnowledgeRecord) -> str:
    """Render one record with the first matching shape rule"""
    for rule in RENDER_RULES:
        text = rule(record)
        if text is not None:
            return text
    return _structural_dump(record)


def build_system_prompt(agent_config: AgentConfig, knowledge: Sequence[KnowledgeRecord]) -> str:
    """Agent prompt, verbatim, followed by the knowledge section when there is any"""
    system_prompt = agent_config.prompt
    if not knowledge:
        return system_prompt

    rendered = "\n\n".join(render_knowledge_record(record) for record in knowledge)
    return f"{system_prompt}\n\n{KNOWLEDGE_HEADING}\n{rendered}\n\n{KNOWLEDGE_INSTRUCTION}"


def build_turn_messages(
    history: Optional[Sequence[ConversationTurn]], user_message: str
) -> List[ChatMessage]:
    """Prior turns as alternating user/assistant messages, then the new user message"""
    messages: List[ChatMessage] = []
    for turn in history or []:
        messages.append(ChatMessage(role="user", content=turn.user_message))
        messages.append(ChatMessage(role="assistant", content=turn.assistant_message))
    messages.append(ChatMessage(role="user", content=user_message))
    return messages


def assemble_prompt(
    agent_config: AgentConfig,
    knowledge: Sequence[KnowledgeRecord],
    history: Optional[Sequence[ConversationTurn]],
    user_message: str,
) -> AssembledPrompt:
    return AssembledPrompt(
        system_prompt=build_system_prompt(agent_config, knowledge),
        messages=build_turn_messages(history, user_message),
    )
