# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=True)


@dataclass(frozen=True)
class Config:
    # OpenAI (chat + embeddings)
    openai_api_key: str
    openai_base_url: str = ""
    openai_chat_model: str = "gpt-4o-mini"
    openai_embed_model: str = "text-embedding-3-small"
    openai_embed_dimensions: int = 1536

    # Chroma Vector Database: local path OR cloud credentials
    chroma_path: str = ""
    chroma_api_key: str = ""
    chroma_tenant: str = ""
    chroma_database: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_embed_model": "OPENAI_EMBED_MODEL",
        "openai_embed_dimensions": "OPENAI_EMBED_DIMENSIONS",

        # Chroma
        "chroma_path": "CHROMA_PATH",
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",
    }

    CHROMA_CLOUD_FIELDS = ("chroma_api_key", "chroma_tenant", "chroma_database")

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables (blank values fall back to defaults)."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = (os.getenv(env_name) or "").strip()
            if value:
                kwargs[field_name] = value
        kwargs.setdefault("openai_api_key", "")

        if "openai_embed_dimensions" in kwargs:
            try:
                kwargs["openai_embed_dimensions"] = int(kwargs["openai_embed_dimensions"])
            except ValueError as e:
                raise ValueError(
                    f"{Config.ENV_VARS['openai_embed_dimensions']} must be an int, "
                    f"got {kwargs['openai_embed_dimensions']!r}"
                ) from e

        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if required config is missing.

        Chroma needs either a local persistence path or the full set of
        Chroma Cloud credentials.
        """
        missing_fields = []
        if not self.openai_api_key:
            missing_fields.append("openai_api_key")

        if not self.chroma_path:
            missing_fields.extend(f for f in self.CHROMA_CLOUD_FIELDS if not getattr(self, f))

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

        if self.openai_embed_dimensions <= 0:
            raise ValueError("openai_embed_dimensions must be > 0")

    @property
    def uses_chroma_cloud(self) -> bool:
        return not self.chroma_path

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url or "(default)",
            "openai_chat_model": self.openai_chat_model,
            "openai_embed_model": self.openai_embed_model,
            "openai_embed_dimensions": self.openai_embed_dimensions,
            "chroma_path": self.chroma_path or None,
            "chroma_tenant": self.chroma_tenant or None,
            "chroma_database": self.chroma_database or None,
        }
