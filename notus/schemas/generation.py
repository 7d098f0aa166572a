"""
Single-shot generation pipeline models
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CopyTone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    CREATIVE = "creative"
    PERSUASIVE = "persuasive"
    TECHNICAL = "technical"


class CopyLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class CopyRequest(BaseModel):
    """Copywriting request (general copy or transcript-to-post)"""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    context: Optional[str] = None
    tone: CopyTone = CopyTone.PROFESSIONAL
    length: CopyLength = CopyLength.MEDIUM
    type: str = "general"
    audience: Optional[str] = None
    brand_voice: Optional[str] = Field(default=None, alias="brandVoice")

    # Structured transcript-to-post mode
    use_structured_prompt: bool = Field(default=False, alias="useStructuredPrompt")
    transcript: Optional[str] = None
    client_name: Optional[str] = Field(default=None, alias="clientName")
    previous_posts: List[str] = Field(default_factory=list, alias="previousPosts")

    workspace_id: Optional[str] = Field(default=None, alias="workspaceId")


class CopyMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tone: str
    length: str
    type: str
    audience: Optional[str] = None
    structured: bool = False
    word_count: int = Field(..., alias="wordCount")


class CopyResponse(BaseModel):
    copy_text: str = Field(..., alias="copy")
    metadata: CopyMetadata

    model_config = ConfigDict(populate_by_name=True)


class WritingStyle(BaseModel):
    formality_level: str = "professional"
    sentence_structure: str = "varied"
    vocabulary: str = "mixed"
    emotional_tone: str = "confident"


class ContentPatterns(BaseModel):
    common_phrases: List[str] = Field(default_factory=list)
    post_structure: str = "standard"
    call_to_action_style: str = "engaging"
    hashtag_usage: str = "moderate"


class ToneAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    posts: List[str] = Field(..., min_length=1)
    personal_brand_id: Optional[int] = Field(default=None, alias="personalBrandId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    workspace_id: Optional[str] = Field(default=None, alias="workspaceId")


class ToneAnalysisResponse(BaseModel):
    tone_analysis: Dict[str, Any]
    success: bool = True
    brand_updated: bool = False


class ContextAction(str, Enum):
    ENHANCE = "enhance"
    SUMMARIZE = "summarize"
    EXTRACT_INSIGHTS = "extract_insights"
    GENERATE_IDEAS = "generate_ideas"


class ContextProcessRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workspace_id: str = Field(..., min_length=1, alias="workspaceId")
    content: str = Field(..., min_length=1)
    action: ContextAction
    context_type: Optional[str] = Field(default=None, alias="contextType")
    user_id: Optional[str] = Field(default=None, alias="userId")


class ContextProcessResponse(BaseModel):
    result: str
    action: ContextAction
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ContentArchetypeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    onboarding_questionnaire: str = Field(default="", alias="onboardingQuestionnaire")
    deep_dive_interview: str = Field(default="", alias="deepDiveInterview")
    media_strategy: str = Field(default="", alias="mediaStrategy")
    additional_context: str = Field(default="", alias="additionalContext")
    websites: List[str] = Field(default_factory=list)
    language: str = "English"
    workspace_id: Optional[str] = Field(default=None, alias="workspaceId")


class ContentArchetypeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_archetype: str = Field(..., alias="contentArchetype")
    website_research: str = Field(..., alias="websiteResearch")
