"""
Content archetype generator

Builds a four-pillar LinkedIn content archetype (Tactical, Aspirational,
Insightful, Personal) from onboarding material. Websites, when given, are
first researched through the ``web_researcher`` agent; research is optional
and its failures never fail the archetype.
"""

from typing import List, Optional

import structlog

from notus.core.exceptions import ConfigurationError, ProviderError
from notus.schemas.generation import ContentArchetypeRequest, ContentArchetypeResponse
from notus.services.agent_registry import AgentRegistry
from notus.services.dispatcher import ModelDispatcher

logger = structlog.get_logger(__name__)

ARCHETYPE_ROLE = "content_archetype"
RESEARCH_ROLE = "web_researcher"

PILLARS = """Create a Content Archetype with four pillars:

1. **Tactical**: Provide immediate, actionable value to the audience.
2. **Aspirational**: Inspire through transformation stories and success narratives.
3. **Insightful**: Position the client as an industry authority, offering in-depth perspectives.
4. **Personal**: Build deeper trust and humanize the personal brand.

For each pillar, develop:
- Three specific sub-points
- For each sub-point, add three detailed explanations (5 to 12 words each)
- Craft two post ideas for each sub-point

Guidelines for post ideas:
- Write in a professional yet conversational tone
- Never use direct questions in the post text
- Rarely begin with "How"
- Never use colons (":") or dashes ("–") in post ideas
- Avoid direct bragging or influencer-style hooks
- Be specific, using placeholders like [X] for unknown data

Format each explanation bullet starting with action words like: How, Show, Identify, Provide, Share, Explain, etc."""

OUTPUT_STRUCTURE = """Present your output in this exact structure:

1. Tactical
    - Sub-point 1
        - [Explanation bullet]
        - [Explanation bullet]
        - [Explanation bullet]

        - Post 1: "[Post text]"
        - Post 2: "[Post text]"

    - Sub-point 2
        - [Follow same format]

    - Sub-point 3
        - [Follow same format]

2. Aspirational
    [Follow same format as Tactical]

3. Insightful
    [Follow same format as Tactical]

4. Personal
    [Follow same format as Tactical]

Ensure all content aligns with the client's voice and business goals."""


def build_archetype_message(request: ContentArchetypeRequest, website_research: str) -> str:
    return f"""Based on the following client information:

**Onboarding Questionnaire:**
{request.onboarding_questionnaire}

**Deep Dive Interview:**
{request.deep_dive_interview}

**Media Strategy:**
{request.media_strategy}

**Additional Context:**
{request.additional_context}

**Website Research:**
{website_research}

{PILLARS}

Language: {request.language}

{OUTPUT_STRUCTURE}"""


class ContentArchetypeService:
    def __init__(self, registry: AgentRegistry, dispatcher: ModelDispatcher):
        self.registry = registry
        self.dispatcher = dispatcher

    async def research_websites(self, websites: List[str], workspace_id: Optional[str] = None) -> str:
        """Web research summary, or "" when unavailable"""
        if not websites:
            return ""
        agent_config = self.registry.resolve_agent_config(RESEARCH_ROLE, workspace_id)
        message = f"Research and analyze these websites for content strategy insights: {', '.join(websites)}"
        try:
            result = await self.dispatcher.dispatch(agent_config, agent_config.prompt, message)
        except ConfigurationError as e:
            logger.info("Web research skipped", reason=str(e))
            return ""
        except ProviderError as e:
            logger.warning("Web research failed, continuing without it", error=str(e))
            return ""
        return result.text

    async def generate(self, request: ContentArchetypeRequest) -> ContentArchetypeResponse:
        website_research = await self.research_websites(request.websites, request.workspace_id)

        agent_config = self.registry.resolve_agent_config(ARCHETYPE_ROLE, request.workspace_id)
        logger.info(
            "Generating content archetype",
            websites=len(request.websites),
            research=bool(website_research),
            language=request.language,
        )
        result = await self.dispatcher.dispatch(
            agent_config,
            agent_config.prompt,
            build_archetype_message(request, website_research),
        )
        return ContentArchetypeResponse(
            content_archetype=result.text,
            website_research=(
                "Website research included" if website_research else "No website research performed"
            ),
        )
