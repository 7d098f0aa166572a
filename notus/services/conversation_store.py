"""
Conversation store

Insert-only log of chat turns keyed by conversation id. There is no lock
between reading history and appending the next turn, so two concurrent
turns of the same conversation may interleave.
"""

from typing import Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from notus.core.config import settings
from notus.db.database import SessionLocal
from notus.db.models import ChatConversation
from notus.schemas.chat import ConversationTurn

logger = structlog.get_logger(__name__)


class ConversationStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def append_turn(
        self,
        conversation_id: str,
        workspace_id: str,
        user_id: Optional[str],
        agent_type: str,
        user_message: str,
        assistant_message: str,
    ) -> ConversationTurn:
        db = self.session_factory()
        try:
            row = ChatConversation(
                conversation_id=conversation_id,
                workspace_id=workspace_id,
                user_id=user_id,
                agent_type=agent_type,
                user_message=user_message,
                assistant_message=assistant_message,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return ConversationTurn.model_validate(row)
        finally:
            db.close()

    def load_history(
        self,
        conversation_id: Optional[str],
        workspace_id: str,
        limit: Optional[int] = None,
    ) -> List[ConversationTurn]:
        """Most recent ``limit`` turns of a conversation within one workspace, oldest first"""
        if not conversation_id or not workspace_id:
            return []
        limit = settings.HISTORY_LIMIT if limit is None else limit

        db = self.session_factory()
        try:
            rows = (
                db.query(ChatConversation)
                .filter(
                    ChatConversation.conversation_id == conversation_id,
                    ChatConversation.workspace_id == workspace_id,
                )
                .order_by(ChatConversation.created_at.desc(), ChatConversation.id.desc())
                .limit(limit)
                .all()
            )
            return [ConversationTurn.model_validate(row) for row in reversed(rows)]
        finally:
            db.close()

    def list_turns(self, conversation_id: str, workspace_id: str) -> List[ConversationTurn]:
        """Full conversation within one workspace, oldest first"""
        db = self.session_factory()
        try:
            rows = (
                db.query(ChatConversation)
                .filter(
                    ChatConversation.conversation_id == conversation_id,
                    ChatConversation.workspace_id == workspace_id,
                )
                .order_by(ChatConversation.created_at, ChatConversation.id)
                .all()
            )
            return [ConversationTurn.model_validate(row) for row in rows]
        finally:
            db.close()
