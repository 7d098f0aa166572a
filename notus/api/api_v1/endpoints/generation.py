"""
Single-shot generation endpoints
Copywriting, tone analysis, context processing and content archetypes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from notus.core.dependencies import (
    get_brand_profile_store,
    get_content_archetype_service,
    get_context_processor,
    get_copywriter,
    get_tone_analyzer,
)
from notus.core.exceptions import NotusError
from notus.schemas.chat import ErrorResponse
from notus.schemas.generation import (
    ContentArchetypeRequest,
    ContentArchetypeResponse,
    ContextProcessRequest,
    ContextProcessResponse,
    CopyRequest,
    CopyResponse,
    ToneAnalysisRequest,
    ToneAnalysisResponse,
)
from notus.services.brand_profile_store import BrandProfileStore
from notus.services.content_archetype import ContentArchetypeService
from notus.services.context_processor import ContextProcessor
from notus.services.copywriter_service import CopywriterService
from notus.services.tone_analyzer import ToneAnalyzer

router = APIRouter()
logger = structlog.get_logger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _error(e: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(e)})


@router.post("/copy", response_model=CopyResponse, responses=ERROR_RESPONSES)
async def generate_copy(
    request: CopyRequest,
    copywriter: CopywriterService = Depends(get_copywriter),
):
    """General copy or transcript-to-post generation"""
    try:
        return await copywriter.generate(request)
    except ValueError as e:
        return _error(e, status_code=400)
    except NotusError as e:
        logger.error("Copy generation failed", error=str(e))
        return _error(e)
    except Exception as e:
        logger.error("Copy generation failed", error=str(e), exc_info=True)
        return _error(e)


@router.post("/tone-analysis", response_model=ToneAnalysisResponse, responses=ERROR_RESPONSES)
async def analyze_tone(
    request: ToneAnalysisRequest,
    analyzer: ToneAnalyzer = Depends(get_tone_analyzer),
    brands: BrandProfileStore = Depends(get_brand_profile_store),
):
    """Tone of voice analysis, optionally stored on a personal brand"""
    try:
        analysis = await analyzer.analyze(request.posts, workspace_id=request.workspace_id)
        brand_updated = False
        if request.personal_brand_id is not None:
            brand_updated = brands.apply_tone_analysis(
                request.personal_brand_id,
                analysis,
                request.posts,
                workspace_id=request.workspace_id,
            )
        return ToneAnalysisResponse(tone_analysis=analysis, success=True, brand_updated=brand_updated)
    except NotusError as e:
        logger.error("Tone analysis failed", error=str(e))
        return _error(e)
    except Exception as e:
        logger.error("Tone analysis failed", error=str(e), exc_info=True)
        return _error(e)


@router.post("/context", response_model=ContextProcessResponse, responses=ERROR_RESPONSES)
async def process_context(
    request: ContextProcessRequest,
    processor: ContextProcessor = Depends(get_context_processor),
):
    try:
        return await processor.process(
            request.workspace_id,
            request.content,
            request.action,
            user_id=request.user_id,
        )
    except NotusError as e:
        logger.error("Context processing failed", action=request.action.value, error=str(e))
        return _error(e)
    except Exception as e:
        logger.error("Context processing failed", error=str(e), exc_info=True)
        return _error(e)


@router.post("/content-archetype", response_model=ContentArchetypeResponse, responses=ERROR_RESPONSES)
async def generate_content_archetype(
    request: ContentArchetypeRequest,
    service: ContentArchetypeService = Depends(get_content_archetype_service),
):
    """Four-pillar content archetype from onboarding material"""
    try:
        return await service.generate(request)
    except NotusError as e:
        logger.error("Content archetype generation failed", error=str(e))
        return _error(e)
    except Exception as e:
        logger.error("Content archetype generation failed", error=str(e), exc_info=True)
        return _error(e)
