"""
Workspace context model

Free-form context notes, stored agent configuration overrides
(context_type="agent_config") and recorded processor interactions
(context_type="conversation") share this table.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from notus.db.database import Base

AGENT_CONFIG_CONTEXT_TYPE = "agent_config"
CONVERSATION_CONTEXT_TYPE = "conversation"


class WorkspaceContext(Base):
    """Workspace-scoped context entry"""

    __tablename__ = "workspace_context"

    id = Column(Integer, primary_key=True, index=True)

    workspace_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)

    context_type = Column(String(50), nullable=False, default="note")
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")

    # "metadata" is reserved on declarative classes
    context_metadata = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            "workspace_id", "context_type", "title", name="uq_workspace_context_title"
        ),
    )
