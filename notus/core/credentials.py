"""
Provider API key resolution.

Keys are looked up at call time so a rotated environment variable is picked
up without a restart.
"""

import os
from typing import Dict, Mapping, Optional

from notus.core.config import settings

# provider name -> environment variable / settings field
API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
}


class CredentialsProvider:
    """Capability that hands out provider API keys."""

    def get_api_key(self, provider: str) -> Optional[str]:
        raise NotImplementedError


class EnvCredentialsProvider(CredentialsProvider):
    """Reads keys from the process environment, then from loaded settings (.env)."""

    def get_api_key(self, provider: str) -> Optional[str]:
        env_var = API_KEY_ENV_VARS.get(provider)
        if env_var is None:
            return None
        value = os.environ.get(env_var) or getattr(settings, env_var, None)
        return value or None


class StaticCredentialsProvider(CredentialsProvider):
    """Fixed key mapping, e.g. per-deployment secrets injected by a caller."""

    def __init__(self, keys: Mapping[str, Optional[str]]):
        self._keys = dict(keys)

    def get_api_key(self, provider: str) -> Optional[str]:
        return self._keys.get(provider) or None
