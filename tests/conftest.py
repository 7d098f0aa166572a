"""
Shared fixtures: in-memory database, credentials and recording providers
"""

from typing import List, Optional

import pytest

from notus.core.credentials import StaticCredentialsProvider
from notus.db.database import build_engine, build_session_factory
from notus.db.models import Base
from notus.schemas.agent import ProviderType
from notus.schemas.chat import ChatMessage
from notus.services.agent_registry import AgentRegistry
from notus.services.config_store import ConfigStore
from notus.services.dispatcher import ModelDispatcher
from notus.services.providers import CompletionParams, DispatchResult


class RecordingProvider:
    """Provider double that records every call and answers with a fixed text"""

    def __init__(self, provider: ProviderType, reply: str = "ok", error: Optional[Exception] = None):
        self.provider = provider
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []

    async def complete(
        self,
        *,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        params: CompletionParams,
    ) -> DispatchResult:
        self.calls.append(
            {
                "api_key": api_key,
                "system_prompt": system_prompt,
                "messages": messages,
                "params": params,
            }
        )
        if self.error is not None:
            raise self.error
        return DispatchResult(text=self.reply, provider=self.provider, model=params.model)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def credentials():
    return StaticCredentialsProvider(
        {"openai": "sk-openai-test", "anthropic": "sk-ant-test", "perplexity": None}
    )


@pytest.fixture
def providers():
    return {
        ProviderType.OPENAI: RecordingProvider(ProviderType.OPENAI, reply="openai reply"),
        ProviderType.ANTHROPIC: RecordingProvider(ProviderType.ANTHROPIC, reply="anthropic reply"),
        ProviderType.PERPLEXITY: RecordingProvider(ProviderType.PERPLEXITY, reply="research notes"),
    }


@pytest.fixture
def dispatcher(credentials, providers):
    return ModelDispatcher(credentials, providers)


@pytest.fixture
def config_store(session_factory):
    return ConfigStore(session_factory)


@pytest.fixture
def registry(config_store):
    return AgentRegistry(config_store)
