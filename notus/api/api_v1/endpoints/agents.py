"""
Agent configuration endpoints
List, inspect, override and reset the per-workspace agent configurations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import structlog

from notus.core.dependencies import get_agent_registry
from notus.schemas.agent import AgentConfigSaveRequest, AgentListResponse, AgentSummary
from notus.services.agent_registry import AgentRegistry

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/", response_model=AgentListResponse)
async def list_agents(
    workspace_id: Optional[str] = Query(default=None),
    registry: AgentRegistry = Depends(get_agent_registry),
):
    """Effective configuration of every role (defaults merged with overrides)"""
    try:
        return AgentListResponse(workspace_id=workspace_id, agents=registry.list_agents(workspace_id))
    except Exception as e:
        logger.error("Failed to list agents", workspace_id=workspace_id, error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/{role}", response_model=AgentSummary)
async def get_agent(
    role: str,
    workspace_id: Optional[str] = Query(default=None),
    registry: AgentRegistry = Depends(get_agent_registry),
):
    try:
        summary = registry.describe_agent(role, workspace_id)
    except Exception as e:
        logger.error("Failed to load agent", role=role, error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
    if summary is None:
        return JSONResponse(status_code=404, content={"error": f"Unknown agent role: {role}"})
    return summary


@router.put("/{role}", response_model=AgentSummary)
async def save_agent(
    role: str,
    request: AgentConfigSaveRequest,
    registry: AgentRegistry = Depends(get_agent_registry),
):
    """Create or replace the workspace override of a role"""
    try:
        config = registry.save_override(request.workspace_id, role, request.config, user_id=request.user_id)
        return AgentSummary(role=role, customized=True, config=config)
    except Exception as e:
        logger.error("Failed to save agent override", role=role, error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.delete("/{role}", response_model=AgentSummary)
async def reset_agent(
    role: str,
    workspace_id: str = Query(..., min_length=1),
    registry: AgentRegistry = Depends(get_agent_registry),
):
    """Drop the workspace override; the default configuration is returned"""
    try:
        config = registry.reset_override(workspace_id, role)
        return AgentSummary(role=role, customized=False, config=config)
    except Exception as e:
        logger.error("Failed to reset agent override", role=role, error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
