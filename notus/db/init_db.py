"""
Database initialisation
"""

import structlog

from notus.db.database import engine
from notus.db.models import Base

logger = structlog.get_logger(__name__)


async def init_db(bind=None):
    """Create all tables that do not exist yet"""
    target = bind or engine
    logger.info("Initialising database", dialect=target.dialect.name)
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ready", tables=sorted(Base.metadata.tables))
