"""
Chat pipeline request/response models
"""

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Role-tagged message handed to a provider"""

    role: str = Field(..., description="user/assistant")
    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    """Chat request as sent by the dashboard"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "What should I post about?",
                "agentType": "content_strategist",
                "workspaceId": "2f1c6c9e-workspace",
                "userId": "8d0f-user",
                "conversationId": "c0ffee00-conversation",
            }
        },
    )

    message: str = Field(..., min_length=1, description="User message")
    agent_type: str = Field(default="client_consultant", alias="agentType")
    workspace_id: str = Field(..., min_length=1, alias="workspaceId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    conversation_id: Optional[str] = Field(default=None, alias="conversationId")


class ChatResponse(BaseModel):
    """Chat reply"""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    agent_type: str = Field(..., alias="agentType")
    knowledge_used: bool = Field(..., alias="knowledgeUsed")


class ConversationTurn(BaseModel):
    """Stored round trip of a conversation"""

    model_config = ConfigDict(from_attributes=True)

    conversation_id: str
    workspace_id: str
    user_id: Optional[str] = None
    agent_type: str
    user_message: str
    assistant_message: str
    created_at: Optional[datetime] = None


class ConversationHistoryResponse(BaseModel):
    conversation_id: str
    turns: List[ConversationTurn]


class ErrorResponse(BaseModel):
    error: str
