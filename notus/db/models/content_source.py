"""
Content source model (ingested transcripts, articles, analytics notes)
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.sql import func

from notus.db.database import Base


class ContentSource(Base):
    """Content source owned by one workspace"""

    __tablename__ = "content_sources"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    summary = Column(Text)
    content = Column(Text)
    insights = Column(JSON, default=list)
    related_topics = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
