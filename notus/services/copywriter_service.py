"""
Copywriter pipeline

Two single-shot modes on the ``long_form_writer`` agent:
 - general copy: tone/length/type guidelines appended to the agent prompt
 - structured: a multi-step template that turns a transcript plus prior
   example posts into one platform-specific post

No retrieval, no history, nothing persisted.
"""

from typing import Dict, List

import structlog

from notus.schemas.generation import CopyLength, CopyMetadata, CopyRequest, CopyResponse
from notus.services.agent_registry import AgentRegistry
from notus.services.dispatcher import ModelDispatcher

logger = structlog.get_logger(__name__)

WRITER_ROLE = "long_form_writer"

LENGTH_GUIDES: Dict[CopyLength, str] = {
    CopyLength.SHORT: "Keep it concise - 1-2 paragraphs or bullet points",
    CopyLength.MEDIUM: "Provide substantial content - 3-5 paragraphs with clear structure",
    CopyLength.LONG: "Create comprehensive content - multiple sections with headings and detailed explanations",
}

TYPE_INSTRUCTIONS: Dict[str, str] = {
    "email": "Write as an email with subject line, greeting, body, and call-to-action",
    "social": "Create engaging social media content with hooks and hashtags",
    "blog": "Structure as a blog post with title, introduction, main points, and conclusion",
    "ad": "Focus on grabbing attention, highlighting benefits, and driving action",
    "product_description": "Highlight features, benefits, and create desire for the product",
    "landing_page": "Create persuasive copy with clear value proposition and strong CTA",
    "general": "Create well-structured, engaging content appropriate for the context",
}

PLATFORM_GUIDES: Dict[str, str] = {
    "linkedin_post": (
        "A LinkedIn post of 150-300 words. Open with a one or two line hook that stands on its own "
        "above the 'see more' fold. Short paragraphs, generous line breaks, bullet lists where they "
        "help scanning. No more than three hashtags, placed at the very end."
    ),
    "twitter_thread": (
        "An X/Twitter thread of 5-8 posts, each under 280 characters, numbered 1/, 2/, ... "
        "The first post carries the hook, the last one the takeaway."
    ),
    "newsletter": (
        "A newsletter section with a subject line, a short personal opening, two or three "
        "subheadings and a closing line that invites replies."
    ),
    "youtube_description": (
        "A YouTube description: a two sentence summary, key moments as bullet points, "
        "and a closing call to subscribe."
    ),
}

DEFAULT_PLATFORM = "linkedin_post"


def build_general_system_prompt(base_prompt: str, request: CopyRequest) -> str:
    lines = [
        base_prompt,
        "",
        "Guidelines:",
        f"- Tone: {request.tone.value}",
        f"- Length: {request.length.value}",
        f"- Content type: {request.type}",
        "- Always write clear, engaging, and actionable content",
        "- Focus on benefits over features",
        "- Use persuasive language appropriate for the tone",
        "- Make it scannable with good structure",
    ]
    if request.audience:
        lines.append(f"- Target audience: {request.audience}")
    if request.brand_voice:
        lines.append(f"- Brand voice: {request.brand_voice}")
    if request.context:
        lines.append(f"- Additional context: {request.context}")
    lines.append(f"- {LENGTH_GUIDES[request.length]}")
    lines.append(f"- {TYPE_INSTRUCTIONS.get(request.type, TYPE_INSTRUCTIONS['general'])}")
    return "\n".join(lines)


def _format_examples(previous_posts: List[str]) -> str:
    if not previous_posts:
        return "(no previous posts supplied - write in a clear, first-person professional voice)"
    return "\n\n".join(
        f"<example_{i}>\n{post.strip()}\n</example_{i}>"
        for i, post in enumerate(previous_posts, start=1)
    )


def build_structured_prompt(request: CopyRequest) -> str:
    """Transcript-to-post template; the transcript travels in the user message"""
    platform = request.type if request.type in PLATFORM_GUIDES else DEFAULT_PLATFORM
    client_name = request.client_name or "the client"

    sections = [
        f"You are ghostwriting for {client_name}. Turn the transcript you receive into one "
        f"{platform.replace('_', ' ')} written in {client_name}'s own voice.",
        "",
        "Work through these steps before writing the final answer:",
        "1. Extract insights: list the two or three strongest ideas, stories or numbers in the "
        "transcript. Prefer concrete experiences over general advice.",
        "2. Pick one angle: choose the single idea with the most tension or surprise. "
        "Everything else is cut.",
        f"3. Study the voice: read the example posts by {client_name} below. Mirror their sentence "
        "length, formatting habits, vocabulary and the way they close a post. Do not copy their content.",
        "4. Draft: a hook, a body that tells the story or makes the argument with specifics from "
        "the transcript, and a closing line or question that invites a response.",
        "5. Edit: remove filler, corporate phrasing and anything the transcript does not support. "
        "Use placeholders like [X] for numbers that are missing.",
        "",
        f"Platform format: {PLATFORM_GUIDES[platform]}",
        f"Tone: {request.tone.value}",
    ]
    if request.audience:
        sections.append(f"Target audience: {request.audience}")
    if request.brand_voice:
        sections.append(f"Brand voice: {request.brand_voice}")
    if request.context:
        sections.append(f"Additional context: {request.context}")
    sections += [
        "",
        f"Example posts by {client_name}:",
        _format_examples(request.previous_posts),
        "",
        "Return only the final post text, without step notes, headings or commentary.",
    ]
    return "\n".join(sections)


def build_structured_user_message(request: CopyRequest) -> str:
    message = f"Transcript:\n\n{request.transcript.strip()}"
    if request.prompt:
        message += f"\n\nAdditional instructions: {request.prompt}"
    return message


class CopywriterService:
    def __init__(self, registry: AgentRegistry, dispatcher: ModelDispatcher):
        self.registry = registry
        self.dispatcher = dispatcher

    def is_structured(self, request: CopyRequest) -> bool:
        return bool(request.use_structured_prompt and request.transcript and request.transcript.strip())

    async def generate(self, request: CopyRequest) -> CopyResponse:
        structured = self.is_structured(request)
        if not structured and not request.prompt.strip():
            raise ValueError("Prompt is required")

        agent_config = self.registry.resolve_agent_config(WRITER_ROLE, request.workspace_id)
        if structured:
            system_prompt = f"{agent_config.prompt}\n\n{build_structured_prompt(request)}"
            user_message = build_structured_user_message(request)
        else:
            system_prompt = build_general_system_prompt(agent_config.prompt, request)
            user_message = request.prompt

        logger.info(
            "Generating copy",
            structured=structured,
            tone=request.tone.value,
            length=request.length.value,
            type=request.type,
        )
        result = await self.dispatcher.dispatch(agent_config, system_prompt, user_message)

        return CopyResponse(
            copy_text=result.text,
            metadata=CopyMetadata(
                tone=request.tone.value,
                length=request.length.value,
                type=request.type,
                audience=request.audience,
                structured=structured,
                word_count=len(result.text.split()),
            ),
        )
