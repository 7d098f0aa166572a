"""
Chat conversation turn model (insert-only log)
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text

from notus.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatConversation(Base):
    """One completed (user message, assistant reply) round trip"""

    __tablename__ = "chat_conversations"

    id = Column(Integer, primary_key=True, index=True)

    conversation_id = Column(String(64), nullable=False, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)
    agent_type = Column(String(64), nullable=False)

    user_message = Column(Text, nullable=False)
    assistant_message = Column(Text, nullable=False)

    # Client-side timestamp: SQLite CURRENT_TIMESTAMP only has second resolution
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
