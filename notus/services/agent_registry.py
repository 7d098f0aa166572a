"""
Agent registry

Resolves an agent role to its AgentConfig. A well-formed workspace override
wins as a whole (no field merge); otherwise the built-in default is used,
and unknown roles get the client consultant.
"""

import json
from typing import Dict, List, Optional

import structlog
from pydantic import ValidationError

from notus.core.exceptions import MalformedOverrideError
from notus.schemas.agent import AgentConfig, AgentSummary, ProviderType
from notus.services.config_store import ConfigStore

logger = structlog.get_logger(__name__)

DEFAULT_ROLE = "client_consultant"

OPENAI_DEFAULT_MODEL = "gpt-4.1-2025-04-14"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"

DEFAULT_AGENT_CONFIGS: Dict[str, AgentConfig] = {
    "content_strategist": AgentConfig(
        name="Content Strategist AI",
        provider=ProviderType.OPENAI,
        model=OPENAI_DEFAULT_MODEL,
        prompt="""You are an expert content strategist with deep knowledge of content marketing, social media strategy, and brand building.

Your expertise includes:
- Content planning and editorial calendars
- Platform-specific content optimization
- Audience analysis and targeting
- Brand voice and messaging
- Content performance analysis
- SEO and content distribution strategies

Always provide actionable, strategic advice that considers business goals, target audience, and platform best practices. Use the knowledge base provided to give contextual recommendations.""",
        temperature=0.7,
        max_tokens=2000,
    ),
    "copywriter": AgentConfig(
        name="AI Copywriter",
        provider=ProviderType.ANTHROPIC,
        model=ANTHROPIC_DEFAULT_MODEL,
        prompt="""You are a professional copywriter specializing in persuasive, engaging content across all platforms and formats.

Your expertise includes:
- Sales copy and conversion optimization
- Social media copy that drives engagement
- Email marketing campaigns
- Brand messaging and voice development
- A/B testing and copy optimization
- Storytelling and emotional connection

Write compelling copy that converts while maintaining authenticity and brand alignment. Always consider the target audience and desired action. Use the provided knowledge base to ensure brand consistency.""",
        temperature=0.8,
        max_tokens=1500,
    ),
    "brand_analyst": AgentConfig(
        name="Brand Analyst AI",
        provider=ProviderType.OPENAI,
        model=OPENAI_DEFAULT_MODEL,
        prompt="""You are a brand analyst with expertise in brand strategy, market positioning, and competitive analysis.

Your expertise includes:
- Brand positioning and differentiation
- Competitive landscape analysis
- Market research and insights
- Brand perception and reputation management
- Visual identity and brand guidelines
- Brand extension and growth strategies

Provide data-driven insights and strategic recommendations for brand development and positioning. Use the knowledge base to understand the current brand context and market position.""",
        temperature=0.6,
        max_tokens=2000,
    ),
    "client_consultant": AgentConfig(
        name="Client Consultant AI",
        provider=ProviderType.OPENAI,
        model=OPENAI_DEFAULT_MODEL,
        prompt="""You are a helpful client consultant focused on understanding client needs and providing tailored solutions.

Your expertise includes:
- Client relationship management
- Solution consulting and recommendations
- Project planning and timeline management
- Communication and expectation setting
- Problem-solving and troubleshooting
- Strategic business advice

Always be professional, empathetic, and solution-focused. Ask clarifying questions when needed and provide clear, actionable recommendations. Use the knowledge base to provide contextual and relevant advice.""",
        temperature=0.7,
        max_tokens=1800,
    ),
    # Single-shot pipelines
    "long_form_writer": AgentConfig(
        name="Long-form Copywriter",
        provider=ProviderType.ANTHROPIC,
        model=ANTHROPIC_DEFAULT_MODEL,
        prompt="You are an expert copywriter and content strategist. Your job is to create compelling, effective copy that achieves the user's goals.",
        temperature=0.7,
        max_tokens=4000,
    ),
    "tone_analyst": AgentConfig(
        name="Tone of Voice Analyst",
        provider=ProviderType.ANTHROPIC,
        model=ANTHROPIC_DEFAULT_MODEL,
        prompt="""You are an expert content strategist and brand voice analyst. Analyze the provided LinkedIn posts to extract detailed tone of voice characteristics that can be used for AI content generation.

Respond with JSON only, in the following format:
{
  "tone_description": "A comprehensive description of the tone of voice",
  "key_characteristics": ["characteristic1", "characteristic2", ...],
  "writing_style": {
    "formality_level": "casual/professional/formal",
    "sentence_structure": "short/medium/long/varied",
    "vocabulary": "simple/technical/sophisticated/mixed",
    "emotional_tone": "enthusiastic/confident/thoughtful/etc"
  },
  "content_patterns": {
    "common_phrases": ["phrase1", "phrase2", ...],
    "post_structure": "typical structure pattern",
    "call_to_action_style": "how they typically end posts",
    "hashtag_usage": "description of hashtag patterns"
  },
  "personality_traits": ["trait1", "trait2", ...],
  "content_themes": ["theme1", "theme2", ...]
}""",
        temperature=0.3,
        max_tokens=1500,
    ),
    "context_processor": AgentConfig(
        name="Context Processor",
        provider=ProviderType.ANTHROPIC,
        model=ANTHROPIC_DEFAULT_MODEL,
        prompt="You are an AI content strategist and copywriting expert. You have access to workspace context to provide more relevant and personalized responses.",
        temperature=0.6,
        max_tokens=3000,
    ),
    "content_archetype": AgentConfig(
        name="Content Archetype Architect",
        provider=ProviderType.ANTHROPIC,
        model="claude-3-5-sonnet-20241022",
        prompt="""You develop customized content Archetypes for clients and their companies. An Archetype is the foundation of a client's LinkedIn branding strategy and manifests in four content pillars: Tactical, Aspirational, Insightful, and Personal.

A content archetype is a strategic framework that defines how a personal brand should communicate across different content types. It keeps content creation consistent and authentic, aligned with business goals and audience needs, and makes every piece of content serve a specific purpose in building authority, trust, and engagement.""",
        temperature=0.7,
        max_tokens=4000,
    ),
    "web_researcher": AgentConfig(
        name="Web Researcher",
        provider=ProviderType.PERPLEXITY,
        model="sonar",
        prompt="Analyze the provided websites and extract valuable information for content strategy and personal branding. Focus on industry insights, company positioning, market trends, and competitive landscape.",
        temperature=0.2,
        max_tokens=1000,
        extra_params={
            "return_images": False,
            "return_related_questions": False,
            "search_recency_filter": "month",
        },
    ),
}


def parse_override(raw: str, role: str, workspace_id: str) -> AgentConfig:
    """Parse stored override text, raising MalformedOverrideError"""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedOverrideError(role, workspace_id, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedOverrideError(role, workspace_id, "override is not a JSON object")
    try:
        return AgentConfig.model_validate(data)
    except ValidationError as e:
        raise MalformedOverrideError(role, workspace_id, f"{e.error_count()} invalid field(s)") from e


class AgentRegistry:
    """Role -> AgentConfig resolution with workspace overrides"""

    def __init__(
        self,
        config_store: ConfigStore,
        defaults: Optional[Dict[str, AgentConfig]] = None,
        default_role: str = DEFAULT_ROLE,
    ):
        self.config_store = config_store
        self.defaults = defaults if defaults is not None else DEFAULT_AGENT_CONFIGS
        self.default_role = default_role

    def default_config(self, role: str) -> AgentConfig:
        if role in self.defaults:
            return self.defaults[role]
        logger.info("Unknown agent role, using default", role=role, default_role=self.default_role)
        return self.defaults[self.default_role]

    def _override(self, role: str, workspace_id: str) -> Optional[AgentConfig]:
        raw = self.config_store.get_override(workspace_id, role)
        if raw is None:
            return None
        try:
            return parse_override(raw, role, workspace_id)
        except MalformedOverrideError as e:
            logger.warning(
                "Ignoring malformed agent override",
                role=role,
                workspace_id=workspace_id,
                reason=e.reason,
            )
            return None

    def resolve_agent_config(self, role: str, workspace_id: Optional[str]) -> AgentConfig:
        if workspace_id:
            override = self._override(role, workspace_id)
            if override is not None:
                logger.debug("Using workspace agent override", role=role, workspace_id=workspace_id)
                return override
        return self.default_config(role)

    def describe_agent(self, role: str, workspace_id: Optional[str]) -> Optional[AgentSummary]:
        """Effective configuration of one role; None for an unknown role without override"""
        override = self._override(role, workspace_id) if workspace_id else None
        if override is not None:
            return AgentSummary(role=role, customized=True, config=override)
        if role in self.defaults:
            return AgentSummary(role=role, customized=False, config=self.defaults[role])
        return None

    def list_agents(self, workspace_id: Optional[str]) -> List[AgentSummary]:
        """Effective configuration of every known role, built-in roles first"""
        overrides: Dict[str, AgentConfig] = {}
        if workspace_id:
            for role, raw in self.config_store.list_overrides(workspace_id).items():
                try:
                    overrides[role] = parse_override(raw, role, workspace_id)
                except MalformedOverrideError as e:
                    logger.warning(
                        "Ignoring malformed agent override",
                        role=role,
                        workspace_id=workspace_id,
                        reason=e.reason,
                    )

        roles = list(self.defaults) + sorted(r for r in overrides if r not in self.defaults)
        return [
            AgentSummary(
                role=role,
                customized=role in overrides,
                config=overrides.get(role) or self.defaults[role],
            )
            for role in roles
        ]

    def save_override(
        self,
        workspace_id: str,
        role: str,
        config: AgentConfig,
        user_id: Optional[str] = None,
    ) -> AgentConfig:
        self.config_store.save_override(workspace_id, role, config.to_storage(), user_id=user_id)
        return config

    def reset_override(self, workspace_id: str, role: str) -> AgentConfig:
        """Drop the override; the role falls back to its default"""
        removed = self.config_store.delete_override(workspace_id, role)
        logger.info("Agent override reset", workspace_id=workspace_id, role=role, removed=removed)
        return self.default_config(role)
