"""
API v1 router
"""

from fastapi import APIRouter

from notus.api.api_v1.endpoints import agents, chat, generation

api_router = APIRouter()

api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
api_router.include_router(agents.router, prefix="/agents", tags=["Agents"])
api_router.include_router(generation.router, prefix="/generation", tags=["Generation"])
