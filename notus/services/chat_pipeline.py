"""
Knowledge-grounded chat pipeline (LangGraph)

resolve_agent -> fetch_knowledge -> load_history -> assemble_prompt
-> dispatch -> persist_turn

All steps run sequentially inside one request. Configuration and provider
errors abort the run; everything else degrades to a safe default.
"""

from typing import Any, Dict, List, Optional, TypedDict

import structlog
from langgraph.graph import StateGraph, END
from sqlalchemy.exc import SQLAlchemyError

from notus.core.config import settings
from notus.schemas.agent import AgentConfig
from notus.schemas.chat import ChatRequest, ChatResponse, ConversationTurn
from notus.schemas.knowledge import KnowledgeRecord
from notus.services.agent_registry import AgentRegistry
from notus.services.conversation_store import ConversationStore
from notus.services.dispatcher import ModelDispatcher
from notus.services.knowledge_retriever import KnowledgeRetriever
from notus.services.prompt_assembler import AssembledPrompt, assemble_prompt
from notus.services.providers import DispatchResult

logger = structlog.get_logger(__name__)


class ChatState(TypedDict):
    """State carried through one chat turn"""
    request: ChatRequest
    agent_config: Optional[AgentConfig]
    knowledge: List[KnowledgeRecord]
    history: List[ConversationTurn]
    prompt: Optional[AssembledPrompt]
    result: Optional[DispatchResult]
    step_info: Dict[str, Any]


class ChatPipeline:
    """One chat turn: agent + knowledge + history in, persisted reply out"""

    def __init__(
        self,
        registry: AgentRegistry,
        retriever: KnowledgeRetriever,
        conversations: ConversationStore,
        dispatcher: ModelDispatcher,
        history_limit: Optional[int] = None,
    ):
        self.registry = registry
        self.retriever = retriever
        self.conversations = conversations
        self.dispatcher = dispatcher
        self.history_limit = settings.HISTORY_LIMIT if history_limit is None else history_limit
        self.graph = self._build_graph()

    def _build_graph(self):
        workflow = StateGraph(ChatState)

        workflow.add_node("resolve_agent", self._resolve_agent)
        workflow.add_node("fetch_knowledge", self._fetch_knowledge)
        workflow.add_node("load_history", self._load_history)
        workflow.add_node("assemble_prompt", self._assemble_prompt)
        workflow.add_node("dispatch", self._dispatch)
        workflow.add_node("persist_turn", self._persist_turn)

        workflow.set_entry_point("resolve_agent")
        workflow.add_edge("resolve_agent", "fetch_knowledge")
        workflow.add_edge("fetch_knowledge", "load_history")
        workflow.add_edge("load_history", "assemble_prompt")
        workflow.add_edge("assemble_prompt", "dispatch")
        workflow.add_edge("dispatch", "persist_turn")
        workflow.add_edge("persist_turn", END)

        return workflow.compile()

    async def run(self, request: ChatRequest) -> ChatResponse:
        logger.info(
            "Chat turn started",
            agent_type=request.agent_type,
            workspace_id=request.workspace_id,
            user_id=request.user_id,
            conversation_id=request.conversation_id,
        )
        initial_state = ChatState(
            request=request,
            agent_config=None,
            knowledge=[],
            history=[],
            prompt=None,
            result=None,
            step_info={},
        )
        final_state = await self.graph.ainvoke(initial_state)

        logger.info("Chat turn completed", **final_state["step_info"])
        return ChatResponse(
            response=final_state["result"].text,
            agent_type=request.agent_type,
            knowledge_used=len(final_state["knowledge"]) > 0,
        )

    async def _resolve_agent(self, state: ChatState) -> Dict[str, Any]:
        request = state["request"]
        agent_config = self.registry.resolve_agent_config(request.agent_type, request.workspace_id)
        return {
            "agent_config": agent_config,
            "step_info": {
                **state["step_info"],
                "agent": agent_config.name,
                "provider": agent_config.provider.value,
            },
        }

    async def _fetch_knowledge(self, state: ChatState) -> Dict[str, Any]:
        knowledge = self.retriever.fetch_knowledge(state["request"].workspace_id)
        return {
            "knowledge": knowledge,
            "step_info": {**state["step_info"], "knowledge_records": len(knowledge)},
        }

    async def _load_history(self, state: ChatState) -> Dict[str, Any]:
        request = state["request"]
        history = self.conversations.load_history(
            request.conversation_id, request.workspace_id, limit=self.history_limit
        )
        return {
            "history": history,
            "step_info": {**state["step_info"], "history_turns": len(history)},
        }

    async def _assemble_prompt(self, state: ChatState) -> Dict[str, Any]:
        prompt = assemble_prompt(
            state["agent_config"],
            state["knowledge"],
            state["history"],
            state["request"].message,
        )
        return {
            "prompt": prompt,
            "step_info": {**state["step_info"], "system_prompt_chars": len(prompt.system_prompt)},
        }

    async def _dispatch(self, state: ChatState) -> Dict[str, Any]:
        prompt = state["prompt"]
        result = await self.dispatcher.complete(
            state["agent_config"], prompt.system_prompt, prompt.messages
        )
        return {
            "result": result,
            "step_info": {**state["step_info"], "model_used": result.model, "usage": result.usage},
        }

    async def _persist_turn(self, state: ChatState) -> Dict[str, Any]:
        request = state["request"]
        if not request.conversation_id:
            logger.info("No conversation id, turn not stored", workspace_id=request.workspace_id)
            return {"step_info": {**state["step_info"], "stored": False}}

        try:
            self.conversations.append_turn(
                conversation_id=request.conversation_id,
                workspace_id=request.workspace_id,
                user_id=request.user_id,
                agent_type=request.agent_type,
                user_message=request.message,
                assistant_message=state["result"].text,
            )
        except SQLAlchemyError as e:
            # The reply is still returned; only the log entry is lost
            logger.error(
                "Failed to store conversation turn",
                conversation_id=request.conversation_id,
                error=str(e),
                exc_info=True,
            )
            return {"step_info": {**state["step_info"], "stored": False}}
        return {"step_info": {**state["step_info"], "stored": True}}
