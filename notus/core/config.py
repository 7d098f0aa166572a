"""
Application settings (Pydantic v2)
 - environment variables and .env files (several candidate paths)
 - provider endpoints, pipeline caps and the chat parameter policy
"""

from typing import Optional, List
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")

    # Base
    PROJECT_NAME: str = "notus OS"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False

    # Comma separated CORS whitelist, e.g.
    # http://localhost:5173,https://app.notus.example
    ALLOWED_ORIGINS: Optional[str] = None

    # Database
    DATABASE_URL: str = "sqlite:///./notus.db"
    DATABASE_ECHO: bool = False

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    # Anthropic
    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_BASE_URL: str = "https://api.anthropic.com/v1"
    ANTHROPIC_VERSION: str = "2023-06-01"

    # Perplexity (web research for content archetypes)
    PERPLEXITY_API_KEY: Optional[str] = None
    PERPLEXITY_BASE_URL: str = "https://api.perplexity.ai"

    # Chat turn parameters. While pinned, OpenAI turns run at a fixed
    # temperature/max_tokens and Anthropic turns on a fixed model, whatever
    # the agent configuration says.
    CHAT_PINNED_PARAMS: bool = True
    PINNED_TEMPERATURE: float = 0.7
    PINNED_MAX_TOKENS: int = 2000
    ANTHROPIC_CHAT_MODEL: str = "claude-sonnet-4-20250514"

    # Outbound model calls (seconds)
    PROVIDER_TIMEOUT_SECONDS: float = 60.0

    # Knowledge retrieval caps, per source table
    CONTENT_SOURCE_LIMIT: int = 5
    CONTEXT_ENTRY_LIMIT: int = 5
    BRAND_PROFILE_LIMIT: int = 5

    # Conversation window replayed into each chat turn
    HISTORY_LIMIT: int = 10

    # Workspace context lines embedded by the context processor
    CONTEXT_PROCESSOR_LIMIT: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"
    # JSON lines for log shippers; false renders human readable console output
    LOG_JSON: bool = True

    def get_allowed_origins(self) -> List[str]:
        """Parse the CORS whitelist (comma separated or empty)"""
        if not self.ALLOWED_ORIGINS:
            return []
        parts = [p.strip() for p in self.ALLOWED_ORIGINS.split(",")]
        return [p for p in parts if p]


def _detect_env_files() -> List[Path]:
    """Candidate .env files, in priority order.

    1. <repo>/.env
    2. <repo>/.env.dev (fallback only)
    """
    here = Path(__file__).resolve()
    project_root = here.parents[2]

    candidates = [
        project_root / ".env",
        project_root / ".env.dev",
    ]
    return [p for p in candidates if p.exists()]


_env_files = _detect_env_files()
settings = Settings(_env_file=_env_files or None)
