"""
Agent configuration override store

Overrides live in ``workspace_context`` rows (context_type="agent_config",
title=<role>) as raw JSON text; parsing is left to the registry.
"""

from typing import Callable, Dict, Optional

import structlog
from sqlalchemy.orm import Session

from notus.db.database import SessionLocal
from notus.db.models import WorkspaceContext, AGENT_CONFIG_CONTEXT_TYPE

logger = structlog.get_logger(__name__)


class ConfigStore:
    """Workspace-scoped access to stored agent overrides"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def _query(self, db: Session, workspace_id: str):
        return db.query(WorkspaceContext).filter(
            WorkspaceContext.workspace_id == workspace_id,
            WorkspaceContext.context_type == AGENT_CONFIG_CONTEXT_TYPE,
        )

    def get_override(self, workspace_id: str, role: str) -> Optional[str]:
        """Raw override text for (workspace, role), or None"""
        db = self.session_factory()
        try:
            row = self._query(db, workspace_id).filter(WorkspaceContext.title == role).first()
            return row.content if row is not None else None
        finally:
            db.close()

    def list_overrides(self, workspace_id: str) -> Dict[str, str]:
        """role -> raw override text"""
        db = self.session_factory()
        try:
            return {row.title: row.content for row in self._query(db, workspace_id).all()}
        finally:
            db.close()

    def save_override(
        self, workspace_id: str, role: str, content: str, user_id: Optional[str] = None
    ) -> None:
        """Create or replace the override of a role"""
        db = self.session_factory()
        try:
            row = self._query(db, workspace_id).filter(WorkspaceContext.title == role).first()
            if row is None:
                row = WorkspaceContext(
                    workspace_id=workspace_id,
                    context_type=AGENT_CONFIG_CONTEXT_TYPE,
                    title=role,
                    context_metadata={},
                )
                db.add(row)
            row.content = content
            row.user_id = user_id
            db.commit()
            logger.info("Agent override saved", workspace_id=workspace_id, role=role)
        finally:
            db.close()

    def delete_override(self, workspace_id: str, role: str) -> bool:
        db = self.session_factory()
        try:
            deleted = (
                self._query(db, workspace_id)
                .filter(WorkspaceContext.title == role)
                .delete(synchronize_session=False)
            )
            db.commit()
            return bool(deleted)
        finally:
            db.close()
