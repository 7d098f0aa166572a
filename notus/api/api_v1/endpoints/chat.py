"""
Chat API Endpoints
Knowledge-grounded chat turns and stored conversation history.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import structlog

from notus.core.dependencies import get_chat_pipeline, get_conversation_store
from notus.core.exceptions import NotusError
from notus.core.logging import bind_workspace
from notus.schemas.chat import ChatRequest, ChatResponse, ConversationHistoryResponse, ErrorResponse
from notus.services.chat_pipeline import ChatPipeline
from notus.services.conversation_store import ConversationStore

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post(
    "/",
    response_model=ChatResponse,
    response_model_by_alias=True,
    responses={500: {"model": ErrorResponse}},
)
async def handle_chat(
    request: ChatRequest,
    pipeline: ChatPipeline = Depends(get_chat_pipeline),
):
    """
    Run one chat turn: agent resolution, workspace knowledge, history,
    model call and (when a conversation id is given) persistence.
    """
    bind_workspace(request.workspace_id)
    try:
        return await pipeline.run(request)
    except NotusError as e:
        logger.error("Chat turn failed", agent_type=request.agent_type, error=str(e))
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logger.error("Chat completion failed", error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/history/{conversation_id}", response_model=ConversationHistoryResponse)
async def get_history(
    conversation_id: str,
    workspace_id: str = Query(..., min_length=1),
    limit: Optional[int] = Query(default=None, gt=0),
    conversations: ConversationStore = Depends(get_conversation_store),
):
    """Stored turns of a conversation, oldest first"""
    try:
        turns = conversations.list_turns(conversation_id, workspace_id)
        if limit:
            turns = turns[-limit:]
        return ConversationHistoryResponse(conversation_id=conversation_id, turns=turns)
    except Exception as e:
        logger.error("Failed to load conversation history", conversation_id=conversation_id, error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
