"""
Knowledge record: one normalized shape over the workspace knowledge tables
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class KnowledgeSource(str, Enum):
    CONTENT_SOURCE = "content_source"
    CONTEXT_ENTRY = "context_entry"
    BRAND_PROFILE = "brand_profile"


class KnowledgeRecord(BaseModel):
    """Read-only view of a workspace knowledge row"""

    source: KnowledgeSource
    workspace_id: str

    title: Optional[str] = None
    content: Optional[str] = None

    name: Optional[str] = None
    description: Optional[str] = None
    bio: Optional[str] = None
    tone_of_voice: Optional[str] = None
    expertise_areas: Optional[List[str]] = None

    # Columns without a dedicated rendering rule (summary, insights, ...)
    attributes: Dict[str, Any] = Field(default_factory=dict)
