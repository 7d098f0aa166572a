"""
Knowledge retriever

Bounded fetch of workspace knowledge: a fixed number of rows per source
table, in insertion order, without ranking against the user message.
Every query is filtered by workspace id.
"""

from typing import Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from notus.core.config import settings
from notus.db.database import SessionLocal
from notus.db.models import (
    ContentSource,
    PersonalBrand,
    WorkspaceContext,
    AGENT_CONFIG_CONTEXT_TYPE,
)
from notus.schemas.knowledge import KnowledgeRecord, KnowledgeSource

logger = structlog.get_logger(__name__)


def _content_source_record(row: ContentSource) -> KnowledgeRecord:
    attributes = {}
    if row.summary:
        attributes["summary"] = row.summary
    if row.insights:
        attributes["insights"] = row.insights
    if row.related_topics:
        attributes["related_topics"] = row.related_topics
    return KnowledgeRecord(
        source=KnowledgeSource.CONTENT_SOURCE,
        workspace_id=row.workspace_id,
        title=row.title,
        content=row.content,
        attributes=attributes,
    )


def _context_entry_record(row: WorkspaceContext) -> KnowledgeRecord:
    return KnowledgeRecord(
        source=KnowledgeSource.CONTEXT_ENTRY,
        workspace_id=row.workspace_id,
        title=row.title,
        content=row.content,
        attributes={"context_type": row.context_type},
    )


def _brand_profile_record(row: PersonalBrand) -> KnowledgeRecord:
    expertise = row.expertise_areas if isinstance(row.expertise_areas, list) else None
    return KnowledgeRecord(
        source=KnowledgeSource.BRAND_PROFILE,
        workspace_id=row.workspace_id,
        name=row.name,
        description=row.description,
        bio=row.bio,
        tone_of_voice=row.tone_of_voice,
        expertise_areas=[str(x) for x in expertise] if expertise else None,
    )


class KnowledgeRetriever:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        content_source_limit: Optional[int] = None,
        context_entry_limit: Optional[int] = None,
        brand_profile_limit: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.content_source_limit = (
            settings.CONTENT_SOURCE_LIMIT if content_source_limit is None else content_source_limit
        )
        self.context_entry_limit = (
            settings.CONTEXT_ENTRY_LIMIT if context_entry_limit is None else context_entry_limit
        )
        self.brand_profile_limit = (
            settings.BRAND_PROFILE_LIMIT if brand_profile_limit is None else brand_profile_limit
        )

    def fetch_knowledge(self, workspace_id: str) -> List[KnowledgeRecord]:
        """Content sources, then context entries, then brand profiles of one workspace"""
        if not workspace_id:
            return []

        db = self.session_factory()
        try:
            sources = (
                db.query(ContentSource)
                .filter(ContentSource.workspace_id == workspace_id)
                .order_by(ContentSource.id)
                .limit(self.content_source_limit)
                .all()
            )
            # Stored agent overrides are configuration, not knowledge
            entries = (
                db.query(WorkspaceContext)
                .filter(
                    WorkspaceContext.workspace_id == workspace_id,
                    WorkspaceContext.context_type != AGENT_CONFIG_CONTEXT_TYPE,
                )
                .order_by(WorkspaceContext.id)
                .limit(self.context_entry_limit)
                .all()
            )
            brands = (
                db.query(PersonalBrand)
                .filter(PersonalBrand.workspace_id == workspace_id)
                .order_by(PersonalBrand.id)
                .limit(self.brand_profile_limit)
                .all()
            )

            records = (
                [_content_source_record(r) for r in sources]
                + [_context_entry_record(r) for r in entries]
                + [_brand_profile_record(r) for r in brands]
            )
        finally:
            db.close()

        logger.info(
            "Knowledge fetched",
            workspace_id=workspace_id,
            content_sources=len(sources),
            context_entries=len(entries),
            brand_profiles=len(brands),
        )
        return records
