import os
import logging
from typing import Optional

from services.llm_factory import LLMFactory, LLMNotConfigured

logger = logging.getLogger(__name__)


class LLMGenerationError(Exception):
    """Raised when the LLM fails to generate a response."""
    pass


def current_provider() -> str:
    return os.getenv("LLM_PROVIDER", "openai").strip().lower()


def generate_response(prompt: str, model: Optional[str] = None, temperature: float = 0.7, system_prompt: str = "") -> str:
    """
    Generates a text response from the configured provider.
    Raises:
        LLMNotConfigured: If the provider has no credentials.
        LLMGenerationError: If the API call fails or returns nothing.
    """
    provider = current_provider()
    client = LLMFactory.get_client(provider)
    model = model or LLMFactory.get_default_model(provider)

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
        )
    except Exception as e:
        logger.error(f"LLM Generation Failed: {e}", exc_info=True)
        raise LLMGenerationError(f"Failed to generate LLM response: {e}") from e

    if not response.choices or not response.choices[0].message.content:
        logger.error("LLM returned empty response or no content")
        raise LLMGenerationError("LLM returned empty response")
    return response.choices[0].message.content.strip()


__all__ = ["generate_response", "LLMGenerationError", "LLMNotConfigured"]
