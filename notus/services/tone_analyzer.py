"""
Tone of voice analyzer

Sends a batch of prior posts to the ``tone_analyst`` agent and expects a
JSON description of the author's voice. Replies that are not JSON are
replaced by a fixed fallback object carrying the raw text as description.
"""

import json
import re
from typing import Any, Dict, List, Optional

import structlog

from notus.core.exceptions import ResponseParseError
from notus.schemas.generation import ContentPatterns, WritingStyle
from notus.services.agent_registry import AgentRegistry
from notus.services.dispatcher import ModelDispatcher

logger = structlog.get_logger(__name__)

ANALYST_ROLE = "tone_analyst"
POST_SEPARATOR = "\n\n---\n\n"

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def fallback_analysis(raw_text: str) -> Dict[str, Any]:
    return {
        "tone_description": raw_text,
        "key_characteristics": ["professional", "engaging"],
        "writing_style": WritingStyle().model_dump(),
        "content_patterns": ContentPatterns().model_dump(),
        "personality_traits": ["authentic", "knowledgeable"],
        "content_themes": ["business", "professional development"],
    }


def parse_analysis(text: str) -> Dict[str, Any]:
    """Decode the model reply, tolerating a markdown code fence"""
    candidate = text.strip()
    fenced = _FENCE_RE.match(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        data = json.loads(candidate)
    except ValueError as e:
        raise ResponseParseError(f"tone analysis is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("tone analysis is not a JSON object")
    return data


class ToneAnalyzer:
    def __init__(self, registry: AgentRegistry, dispatcher: ModelDispatcher):
        self.registry = registry
        self.dispatcher = dispatcher

    async def analyze(self, posts: List[str], workspace_id: Optional[str] = None) -> Dict[str, Any]:
        agent_config = self.registry.resolve_agent_config(ANALYST_ROLE, workspace_id)
        combined = POST_SEPARATOR.join(posts)
        user_message = (
            "Analyze these LinkedIn posts and extract the tone of voice characteristics:"
            f"\n\n{combined}"
        )

        logger.info("Analyzing tone of voice", posts=len(posts), workspace_id=workspace_id)
        result = await self.dispatcher.dispatch(agent_config, agent_config.prompt, user_message)

        fallback = fallback_analysis(result.text)
        try:
            analysis = parse_analysis(result.text)
        except ResponseParseError as e:
            logger.warning("Tone analysis reply not parseable, using fallback", error=str(e))
            return fallback

        missing = [key for key in fallback if key not in analysis]
        if missing:
            logger.info("Tone analysis incomplete, filling defaults", missing=missing)
            for key in missing:
                analysis[key] = fallback[key]
        return analysis
