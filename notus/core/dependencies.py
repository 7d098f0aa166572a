"""
Service wiring for the API layer

Every service is handed out through a FastAPI dependency so tests (or a
different deployment) can swap it via ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from notus.core.config import settings
from notus.core.credentials import CredentialsProvider, EnvCredentialsProvider
from notus.db.database import SessionLocal
from notus.services.agent_registry import AgentRegistry
from notus.services.brand_profile_store import BrandProfileStore
from notus.services.chat_pipeline import ChatPipeline
from notus.services.config_store import ConfigStore
from notus.services.content_archetype import ContentArchetypeService
from notus.services.context_processor import ContextProcessor
from notus.services.conversation_store import ConversationStore
from notus.services.copywriter_service import CopywriterService
from notus.services.dispatcher import ModelDispatcher
from notus.services.knowledge_retriever import KnowledgeRetriever
from notus.services.providers import default_providers
from notus.services.tone_analyzer import ToneAnalyzer


def get_credentials() -> CredentialsProvider:
    return EnvCredentialsProvider()


@lru_cache()
def _providers():
    return default_providers(timeout=settings.PROVIDER_TIMEOUT_SECONDS)


def get_agent_registry() -> AgentRegistry:
    return AgentRegistry(ConfigStore(SessionLocal))


def get_conversation_store() -> ConversationStore:
    return ConversationStore(SessionLocal)


def get_knowledge_retriever() -> KnowledgeRetriever:
    return KnowledgeRetriever(SessionLocal)


def get_brand_profile_store() -> BrandProfileStore:
    return BrandProfileStore(SessionLocal)


def get_chat_dispatcher(
    credentials: CredentialsProvider = Depends(get_credentials),
) -> ModelDispatcher:
    """Dispatcher for chat turns, pinned according to CHAT_PINNED_PARAMS"""
    return ModelDispatcher(credentials, _providers(), pin_chat_params=settings.CHAT_PINNED_PARAMS)


def get_dispatcher(
    credentials: CredentialsProvider = Depends(get_credentials),
) -> ModelDispatcher:
    """Dispatcher for the single-shot pipelines (agent parameters as configured)"""
    return ModelDispatcher(credentials, _providers())


def get_chat_pipeline(
    registry: AgentRegistry = Depends(get_agent_registry),
    retriever: KnowledgeRetriever = Depends(get_knowledge_retriever),
    conversations: ConversationStore = Depends(get_conversation_store),
    dispatcher: ModelDispatcher = Depends(get_chat_dispatcher),
) -> ChatPipeline:
    return ChatPipeline(registry, retriever, conversations, dispatcher)


def get_copywriter(
    registry: AgentRegistry = Depends(get_agent_registry),
    dispatcher: ModelDispatcher = Depends(get_dispatcher),
) -> CopywriterService:
    return CopywriterService(registry, dispatcher)


def get_tone_analyzer(
    registry: AgentRegistry = Depends(get_agent_registry),
    dispatcher: ModelDispatcher = Depends(get_dispatcher),
) -> ToneAnalyzer:
    return ToneAnalyzer(registry, dispatcher)


def get_context_processor(
    registry: AgentRegistry = Depends(get_agent_registry),
    dispatcher: ModelDispatcher = Depends(get_dispatcher),
) -> ContextProcessor:
    return ContextProcessor(registry, dispatcher, SessionLocal)


def get_content_archetype_service(
    registry: AgentRegistry = Depends(get_agent_registry),
    dispatcher: ModelDispatcher = Depends(get_dispatcher),
) -> ContentArchetypeService:
    return ContentArchetypeService(registry, dispatcher)
