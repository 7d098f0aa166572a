"""
Database models package
"""

from notus.db.database import Base
from .workspace_context import (
    WorkspaceContext,
    AGENT_CONFIG_CONTEXT_TYPE,
    CONVERSATION_CONTEXT_TYPE,
)
from .content_source import ContentSource
from .personal_brand import PersonalBrand
from .chat_conversation import ChatConversation

__all__ = [
    "Base",
    "WorkspaceContext",
    "AGENT_CONFIG_CONTEXT_TYPE",
    "CONVERSATION_CONTEXT_TYPE",
    "ContentSource",
    "PersonalBrand",
    "ChatConversation",
]
