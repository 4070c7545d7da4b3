#File: services/llm_factory.py
import os
import logging
from typing import Dict, Any, Optional
from openai import OpenAI

logger = logging.getLogger(__name__)


class LLMProvider:
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    LOCAL = "local"


GEMINI_OPENAI_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class LLMNotConfigured(Exception):
    """Raised when the selected provider has no credentials."""
    pass


class LLMFactory:
    """
    Creates and caches OpenAI-compatible clients per provider configuration.
    """

    _instances: Dict[Any, OpenAI] = {}

    @staticmethod
    def get_client(provider: str = LLMProvider.OPENAI, **kwargs) -> OpenAI:
        api_key: Optional[str] = kwargs.get("api_key")
        base_url: Optional[str] = kwargs.get("base_url")
        timeout = kwargs.get("timeout", 30.0)
        max_retries = kwargs.get("max_retries", 1)

        # 1. Resolve provider defaults
        if provider == LLMProvider.OPENROUTER:
            api_key = api_key or os.getenv("OPENROUTER_API_KEY")
            base_url = base_url or "https://openrouter.ai/api/v1"

        elif provider == LLMProvider.GEMINI:
            api_key = api_key or os.getenv("GOOGLE_AI_API_KEY")
            base_url = base_url or GEMINI_OPENAI_URL

        elif provider == LLMProvider.LOCAL:
            base_url = base_url or os.getenv("LOCAL_LLM_URL", "http://localhost:11434/v1")
            api_key = "ollama"  # Ollama ignores the key

        else:
            api_key = api_key or os.getenv("OPENAI_API_KEY")

        if not api_key:
            raise LLMNotConfigured(f"No API key configured for provider '{provider}'")

        # 2. Config-aware caching
        cache_key = (provider, api_key, base_url or "", float(timeout), int(max_retries))
        if cache_key in LLMFactory._instances:
            return LLMFactory._instances[cache_key]

        logger.info(f"Initializing LLM client for provider: {provider}")
        client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=max_retries)
        LLMFactory._instances[cache_key] = client
        return client

    @staticmethod
    def get_default_model(provider: str) -> str:
        if provider == LLMProvider.OPENROUTER:
            return os.getenv("OPENROUTER_MODEL", "google/gemini-2.0-flash-exp:free")
        elif provider == LLMProvider.GEMINI:
            return os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        elif provider == LLMProvider.LOCAL:
            return os.getenv("LOCAL_MODEL", "llama3")
        return os.getenv("OPENAI_MODEL", "gpt-4o-mini")
