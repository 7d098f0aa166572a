"""
Context processor

Runs one of a fixed set of actions (enhance, summarize, extract insights,
generate ideas) over a piece of content, with the workspace's context notes
embedded in the system prompt. Interactions made on behalf of a known user
are recorded back as "conversation" context entries.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import structlog
from sqlalchemy.orm import Session

from notus.core.config import settings
from notus.db.database import SessionLocal
from notus.db.models import (
    WorkspaceContext,
    AGENT_CONFIG_CONTEXT_TYPE,
    CONVERSATION_CONTEXT_TYPE,
)
from notus.schemas.generation import ContextAction, ContextProcessResponse
from notus.services.agent_registry import AgentRegistry
from notus.services.dispatcher import ModelDispatcher

logger = structlog.get_logger(__name__)

PROCESSOR_ROLE = "context_processor"

ACTION_PROMPTS: Dict[ContextAction, str] = {
    ContextAction.ENHANCE: "Enhance and improve the following content. Make it more engaging, clear, and compelling while maintaining the original intent and tone:",
    ContextAction.SUMMARIZE: "Create a comprehensive summary of the following content, extracting key points and main ideas:",
    ContextAction.EXTRACT_INSIGHTS: "Analyze the following content and extract valuable insights, patterns, and actionable recommendations:",
    ContextAction.GENERATE_IDEAS: "Based on the following content, generate creative ideas and suggestions for related content, improvements, or new directions:",
}

GUIDELINES = """Guidelines:
- Be specific and actionable
- Maintain consistency with workspace context when relevant
- Provide clear, well-structured responses
- Focus on practical value and implementation"""

SNIPPET_CHARS = 200
RECORD_CHARS = 500


class ContextProcessor:
    def __init__(
        self,
        registry: AgentRegistry,
        dispatcher: ModelDispatcher,
        session_factory: Callable[[], Session] = SessionLocal,
        context_limit: Optional[int] = None,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.session_factory = session_factory
        self.context_limit = settings.CONTEXT_PROCESSOR_LIMIT if context_limit is None else context_limit

    def context_lines(self, workspace_id: str) -> List[str]:
        db = self.session_factory()
        try:
            rows = (
                db.query(WorkspaceContext)
                .filter(
                    WorkspaceContext.workspace_id == workspace_id,
                    WorkspaceContext.context_type != AGENT_CONFIG_CONTEXT_TYPE,
                )
                .order_by(WorkspaceContext.id)
                .limit(self.context_limit)
                .all()
            )
            return [
                f"{row.context_type}: {row.title} - {(row.content or '')[:SNIPPET_CHARS]}"
                for row in rows
            ]
        finally:
            db.close()

    def build_system_prompt(self, base_prompt: str, action: ContextAction, context_lines: List[str]) -> str:
        return (
            f"{base_prompt}\n\n"
            f"Workspace Context:\n{chr(10).join(context_lines)}\n\n"
            f"Your task: {ACTION_PROMPTS[action]}\n\n"
            f"{GUIDELINES}"
        )

    def record_interaction(
        self,
        workspace_id: str,
        user_id: str,
        action: ContextAction,
        content: str,
        result: str,
        processed_at: datetime,
    ) -> None:
        db = self.session_factory()
        try:
            db.add(
                WorkspaceContext(
                    workspace_id=workspace_id,
                    user_id=user_id,
                    context_type=CONVERSATION_CONTEXT_TYPE,
                    title=f"{action.value} - {processed_at.isoformat()}",
                    content=f"Input: {content[:RECORD_CHARS]}...\n\nOutput: {result[:RECORD_CHARS]}...",
                    context_metadata={"action": action.value, "timestamp": processed_at.isoformat()},
                )
            )
            db.commit()
        finally:
            db.close()

    async def process(
        self,
        workspace_id: str,
        content: str,
        action: ContextAction,
        user_id: Optional[str] = None,
    ) -> ContextProcessResponse:
        agent_config = self.registry.resolve_agent_config(PROCESSOR_ROLE, workspace_id)
        system_prompt = self.build_system_prompt(
            agent_config.prompt, action, self.context_lines(workspace_id)
        )

        logger.info("Processing context", workspace_id=workspace_id, action=action.value)
        result = await self.dispatcher.dispatch(agent_config, system_prompt, content)
        processed_at = datetime.now(timezone.utc)

        if user_id:
            self.record_interaction(workspace_id, user_id, action, content, result.text, processed_at)

        return ContextProcessResponse(
            result=result.text,
            action=action,
            metadata={
                "workspaceId": workspace_id,
                "processedAt": processed_at.isoformat(),
                "wordCount": len(result.text.split()),
            },
        )
