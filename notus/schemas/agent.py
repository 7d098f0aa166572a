"""
Agent configuration data models
"""

from enum import Enum
from typing import Any, Dict, Optional, List

from pydantic import BaseModel, ConfigDict, Field


class ProviderType(str, Enum):
    """Model provider"""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    PERPLEXITY = "perplexity"


class AgentConfig(BaseModel):
    """Model + prompt configuration of one agent role.

    Serialized with the camelCase keys the configuration UI stores
    (``maxTokens``, ``extraParams``); snake_case is accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display name")
    provider: ProviderType = Field(..., description="Model provider")
    model: str = Field(..., min_length=1, description="Provider model identifier")
    prompt: str = Field(..., description="System prompt template")
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    max_tokens: int = Field(default=2000, gt=0, alias="maxTokens")
    extra_params: Dict[str, Any] = Field(default_factory=dict, alias="extraParams")

    def to_storage(self) -> str:
        """JSON text as stored in a workspace override"""
        return self.model_dump_json(by_alias=True)


class AgentSummary(BaseModel):
    """Effective configuration of a role within a workspace"""

    role: str
    customized: bool = Field(default=False, description="Served from a workspace override")
    config: AgentConfig


class AgentConfigSaveRequest(BaseModel):
    """Save (create or replace) a workspace override"""

    model_config = ConfigDict(populate_by_name=True)

    workspace_id: str = Field(..., alias="workspaceId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    config: AgentConfig


class AgentListResponse(BaseModel):
    workspace_id: Optional[str] = None
    agents: List[AgentSummary]
