"""
Personal brand profile model
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.sql import func

from notus.db.database import Base


class PersonalBrand(Base):
    """Personal brand managed inside a workspace"""

    __tablename__ = "personal_brands"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    bio = Column(Text)
    tone_of_voice = Column(Text)
    expertise_areas = Column(JSON, default=list)

    # Raw material behind the profile (analysed posts, tone analysis)
    knowledge_base = Column(JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
