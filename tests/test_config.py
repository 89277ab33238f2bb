# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: test_config.py
# -----------------------------------------------------------------------------
import pytest

from config.Config import Config
from config.RAGConfig import RAGConfig


@pytest.fixture
def clean_env(monkeypatch):
    for env_name in Config.ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    return monkeypatch


def test_from_env_local_chroma(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("CHROMA_PATH", "./chroma")
    clean_env.setenv("OPENAI_EMBED_DIMENSIONS", "512")

    cfg = Config.from_env()

    assert cfg.openai_embed_dimensions == 512
    assert cfg.openai_chat_model == "gpt-4o-mini"
    assert cfg.uses_chroma_cloud is False
    assert "sk-test" not in str(cfg.summary())


def test_from_env_requires_api_key(clean_env):
    clean_env.setenv("CHROMA_PATH", "./chroma")

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_cloud_credentials_must_be_complete(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("CHROMA_API_KEY", "ck-test")

    with pytest.raises(ValueError, match="CHROMA_TENANT"):
        Config.from_env()

    clean_env.setenv("CHROMA_TENANT", "tenant")
    clean_env.setenv("CHROMA_DATABASE", "db")
    assert Config.from_env().uses_chroma_cloud is True


def test_non_integer_dimensions_rejected(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("CHROMA_PATH", "./chroma")
    clean_env.setenv("OPENAI_EMBED_DIMENSIONS", "lots")

    with pytest.raises(ValueError):
        Config.from_env()


def test_rag_config_defaults_and_validation():
    rag_cfg = RAGConfig()
    assert (rag_cfg.chunk_size, rag_cfg.chunk_overlap) == (1000, 200)
    assert rag_cfg.top_k_default == 5
    assert rag_cfg.history_limit == 20

    with pytest.raises(ValueError):
        RAGConfig(default_language="fr")
    with pytest.raises(ValueError):
        RAGConfig(top_k_default=0)


def test_rag_config_from_settings():
    assert isinstance(RAGConfig.from_settings(), RAGConfig)
