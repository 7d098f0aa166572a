"""
Error taxonomy for the generation pipelines.

ConfigurationError and ProviderError abort an invocation and reach the HTTP
boundary. MalformedOverrideError and ResponseParseError are raised close to
where they happen and recovered by the caller with a safe default.
"""

from typing import Optional


class NotusError(Exception):
    """Base class for pipeline errors surfaced to callers."""


class ConfigurationError(NotusError):
    """A provider cannot be called with the current configuration (missing key, unknown provider)."""


class ProviderError(NotusError):
    """A model provider answered with a non-2xx status or an unusable body."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        detail = f"{provider} API error"
        if status_code is not None:
            detail += f" {status_code}"
        detail += f": {message}"
        if body:
            detail += f" - {body}"
        super().__init__(detail)


class MalformedOverrideError(NotusError):
    """A stored agent override is not valid AgentConfig JSON."""

    def __init__(self, role: str, workspace_id: str, reason: str):
        self.role = role
        self.workspace_id = workspace_id
        self.reason = reason
        super().__init__(
            f"Malformed agent override for role '{role}' in workspace '{workspace_id}': {reason}"
        )


class ResponseParseError(NotusError):
    """A model reply that should carry JSON could not be parsed."""
