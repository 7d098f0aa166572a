"""
Model provider variants

Each provider adapts the provider-owned request/response shape to one
capability, ``complete(api_key, system_prompt, messages, params)``, and
returns a normalized DispatchResult. Nothing outside this module knows
whether the system prompt travels as a message or as a separate field.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import structlog
from pydantic import BaseModel, Field

from notus.core.config import settings
from notus.core.exceptions import ProviderError
from notus.schemas.agent import ProviderType
from notus.schemas.chat import ChatMessage

logger = structlog.get_logger(__name__)

# Longest provider body echoed into an error
MAX_ERROR_BODY_CHARS = 2000


class CompletionParams(BaseModel):
    """Effective sampling parameters of a single call"""

    model: str
    max_tokens: int
    temperature: Optional[float] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


class DispatchResult(BaseModel):
    """Normalized provider reply"""

    text: str
    provider: ProviderType
    model: str
    usage: Dict[str, Any] = Field(default_factory=dict)
    request_id: str = ""


class ChatProvider:
    """Base class for HTTP completion providers"""

    provider: ProviderType

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS if timeout is None else timeout
        self.transport = transport

    async def complete(
        self,
        *,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        params: CompletionParams,
    ) -> DispatchResult:
        raise NotImplementedError

    async def _post(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """Single POST attempt; every failure becomes a ProviderError"""
        name = self.provider.value
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error("Provider request failed", provider=name, error=str(e))
            raise ProviderError(name, f"request failed: {e}") from e

        if not response.is_success:
            body = response.text[:MAX_ERROR_BODY_CHARS]
            logger.error(
                "Provider API error",
                provider=name,
                status=response.status_code,
                detail=body,
            )
            raise ProviderError(name, "request rejected", status_code=response.status_code, body=body)

        try:
            result = response.json()
        except ValueError as e:
            raise ProviderError(
                name,
                "response is not JSON",
                status_code=response.status_code,
                body=response.text[:MAX_ERROR_BODY_CHARS],
            ) from e
        if not isinstance(result, dict):
            raise ProviderError(name, "unexpected response shape", status_code=response.status_code)
        return result

    def _unexpected_shape(self, result: Dict[str, Any]) -> ProviderError:
        return ProviderError(
            self.provider.value,
            "unexpected response shape",
            body=json.dumps(result, ensure_ascii=False)[:MAX_ERROR_BODY_CHARS],
        )


class OpenAIChatProvider(ChatProvider):
    """OpenAI chat-completions API"""

    provider = ProviderType.OPENAI

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.OPENAI_BASE_URL, **kwargs)

    def build_payload(
        self, system_prompt: str, messages: List[ChatMessage], params: CompletionParams
    ) -> Dict[str, Any]:
        wire_messages = []
        if system_prompt:
            wire_messages.append({"role": "system", "content": system_prompt})
        wire_messages.extend({"role": m.role, "content": m.content} for m in messages)

        payload: Dict[str, Any] = {
            "model": params.model,
            "messages": wire_messages,
            "max_tokens": params.max_tokens,
        }
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        payload.update(params.extra)
        return payload

    async def complete(
        self,
        *,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        params: CompletionParams,
    ) -> DispatchResult:
        result = await self._post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            payload=self.build_payload(system_prompt, messages, params),
        )
        try:
            text = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise self._unexpected_shape(result)
        if not isinstance(text, str):
            raise self._unexpected_shape(result)

        return DispatchResult(
            text=text,
            provider=self.provider,
            model=result.get("model") or params.model,
            usage=result.get("usage") or {},
            request_id=result.get("id", ""),
        )


class PerplexityChatProvider(OpenAIChatProvider):
    """Perplexity online models (OpenAI-compatible chat-completions)"""

    provider = ProviderType.PERPLEXITY

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.PERPLEXITY_BASE_URL, **kwargs)


class AnthropicChatProvider(ChatProvider):
    """Anthropic messages API"""

    provider = ProviderType.ANTHROPIC

    def __init__(self, base_url: Optional[str] = None, api_version: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.ANTHROPIC_BASE_URL, **kwargs)
        self.api_version = api_version or settings.ANTHROPIC_VERSION

    def build_payload(
        self, system_prompt: str, messages: List[ChatMessage], params: CompletionParams
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": params.model,
            "max_tokens": params.max_tokens,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if system_prompt:
            payload["system"] = system_prompt
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        payload.update(params.extra)
        return payload

    async def complete(
        self,
        *,
        api_key: str,
        system_prompt: str,
        messages: List[ChatMessage],
        params: CompletionParams,
    ) -> DispatchResult:
        result = await self._post(
            f"{self.base_url}/messages",
            headers={
                "x-api-key": api_key,
                "anthropic-version": self.api_version,
                "Content-Type": "application/json",
            },
            payload=self.build_payload(system_prompt, messages, params),
        )
        try:
            text = result["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise self._unexpected_shape(result)
        if not isinstance(text, str):
            raise self._unexpected_shape(result)

        return DispatchResult(
            text=text,
            provider=self.provider,
            model=result.get("model") or params.model,
            usage=result.get("usage") or {},
            request_id=result.get("id", ""),
        )


def default_providers(
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[ProviderType, ChatProvider]:
    """One instance per supported provider"""
    return {
        ProviderType.OPENAI: OpenAIChatProvider(timeout=timeout, transport=transport),
        ProviderType.ANTHROPIC: AnthropicChatProvider(timeout=timeout, transport=transport),
        ProviderType.PERPLEXITY: PerplexityChatProvider(timeout=timeout, transport=transport),
    }
