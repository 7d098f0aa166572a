"""
Model dispatcher

Selects the provider variant for an agent, resolves its API key and derives
the effective sampling parameters. Single attempt, no retry.
"""

from typing import Dict, List, Optional, Sequence

import structlog

from notus.core.config import settings
from notus.core.credentials import CredentialsProvider
from notus.core.exceptions import ConfigurationError
from notus.schemas.agent import AgentConfig, ProviderType
from notus.schemas.chat import ChatMessage, ConversationTurn
from notus.services.prompt_assembler import build_turn_messages
from notus.services.providers import (
    ChatProvider,
    CompletionParams,
    DispatchResult,
    default_providers,
)

logger = structlog.get_logger(__name__)


class ModelDispatcher:
    """Routes a prompt to the provider named by the agent configuration.

    With ``pin_chat_params`` set, chat turns keep the parameters the product
    has always used: OpenAI runs the configured model at a fixed temperature
    and token budget, Anthropic runs a fixed model with a fixed token budget
    and the provider's default temperature. Without it the agent's own
    model, temperature and token budget are used.
    """

    def __init__(
        self,
        credentials: CredentialsProvider,
        providers: Optional[Dict[ProviderType, ChatProvider]] = None,
        *,
        pin_chat_params: bool = False,
    ):
        self.credentials = credentials
        self.providers = providers if providers is not None else default_providers()
        self.pin_chat_params = pin_chat_params

    def completion_params(self, agent_config: AgentConfig) -> CompletionParams:
        if not self.pin_chat_params:
            return CompletionParams(
                model=agent_config.model,
                temperature=agent_config.temperature,
                max_tokens=agent_config.max_tokens,
                extra=dict(agent_config.extra_params),
            )

        if agent_config.provider == ProviderType.ANTHROPIC:
            return CompletionParams(
                model=settings.ANTHROPIC_CHAT_MODEL,
                max_tokens=settings.PINNED_MAX_TOKENS,
            )
        return CompletionParams(
            model=agent_config.model,
            temperature=settings.PINNED_TEMPERATURE,
            max_tokens=settings.PINNED_MAX_TOKENS,
        )

    def _resolve(self, agent_config: AgentConfig):
        provider_name = agent_config.provider.value
        provider = self.providers.get(agent_config.provider)
        if provider is None:
            raise ConfigurationError(f"Unsupported provider: {provider_name}")

        api_key = self.credentials.get_api_key(provider_name)
        if not api_key:
            raise ConfigurationError(f"API key not configured for provider: {provider_name}")
        return provider, api_key

    async def complete(
        self,
        agent_config: AgentConfig,
        system_prompt: str,
        messages: List[ChatMessage],
    ) -> DispatchResult:
        """Send already role-tagged messages"""
        provider, api_key = self._resolve(agent_config)
        params = self.completion_params(agent_config)

        logger.info(
            "Dispatching completion",
            agent=agent_config.name,
            provider=agent_config.provider.value,
            model=params.model,
            messages=len(messages),
            pinned=self.pin_chat_params,
        )
        result = await provider.complete(
            api_key=api_key,
            system_prompt=system_prompt,
            messages=messages,
            params=params,
        )
        logger.info(
            "Completion received",
            provider=result.provider.value,
            model=result.model,
            usage=result.usage,
        )
        return result

    async def dispatch(
        self,
        agent_config: AgentConfig,
        system_prompt: str,
        user_message: str,
        history: Optional[Sequence[ConversationTurn]] = None,
    ) -> DispatchResult:
        return await self.complete(
            agent_config, system_prompt, build_turn_messages(history, user_message)
        )
