"""
notus OS - FastAPI application entry point
Knowledge-grounded chat and content generation service
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from notus.core.config import settings
from notus.core.logging import configure_logging
from notus.api.api_v1.api import api_router
from notus.db.init_db import init_db

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan"""
    logger.info("Starting notus OS", debug=settings.DEBUG)

    if not settings.DEBUG:
        allowed = settings.get_allowed_origins()
        if "*" in allowed:
            logger.error("ALLOWED_ORIGINS must not contain * outside DEBUG")
            raise RuntimeError("In production, ALLOWED_ORIGINS must be a whitelist without *")

    try:
        await init_db()
        logger.info("Database ready")
    except Exception as e:
        logger.error("Database initialisation failed", error=str(e))
        raise

    yield

    logger.info("Shutting down notus OS")


def create_application() -> FastAPI:
    """Build the FastAPI application"""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Knowledge-grounded chat and content generation",
        version="1.0.0",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    if settings.DEBUG:
        allow_origins = ["*"]
    else:
        allow_origins = settings.get_allowed_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root():
        return {
            "message": "notus OS API",
            "version": "1.0.0",
            "docs": f"{settings.API_V1_STR}/docs",
        }

    @app.get("/health")
    async def health_check():
        """Liveness probe"""
        return {"status": "healthy", "service": "notus"}

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notus.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG, log_level="info"
    )
