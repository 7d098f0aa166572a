"""
Personal brand write-back of tone analyses
"""

from typing import Any, Callable, Dict, List, Optional

import structlog
from sqlalchemy.orm import Session

from notus.db.database import SessionLocal
from notus.db.models import PersonalBrand

logger = structlog.get_logger(__name__)


class BrandProfileStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def apply_tone_analysis(
        self,
        brand_id: int,
        analysis: Dict[str, Any],
        posts: List[str],
        workspace_id: Optional[str] = None,
    ) -> bool:
        """Store the analysis on the brand; False when the brand is not found"""
        db = self.session_factory()
        try:
            query = db.query(PersonalBrand).filter(PersonalBrand.id == brand_id)
            if workspace_id:
                query = query.filter(PersonalBrand.workspace_id == workspace_id)
            brand = query.first()
            if brand is None:
                logger.warning("Brand not found for tone update", brand_id=brand_id, workspace_id=workspace_id)
                return False

            description = analysis.get("tone_description")
            if isinstance(description, str) and description.strip():
                brand.tone_of_voice = description
            else:
                logger.info("No tone description in analysis, keeping tone of voice", brand_id=brand_id)
            knowledge_base = dict(brand.knowledge_base or {})
            knowledge_base["linkedin_posts"] = posts
            knowledge_base["tone_analysis"] = analysis
            brand.knowledge_base = knowledge_base
            db.commit()
            logger.info("Brand tone of voice updated", brand_id=brand_id)
            return True
        finally:
            db.close()
