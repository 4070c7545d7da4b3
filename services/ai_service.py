# services/ai_service.py
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from cachetools import TTLCache

from services.llm_service import generate_response, LLMGenerationError, LLMNotConfigured

logger = logging.getLogger(__name__)

SUMMARY_NOT_CONFIGURED = (
    "AI summary generation is not configured. "
    "Please add an LLM API key to your environment variables."
)
SUMMARY_UNAVAILABLE = "Unable to generate summary at this time. Please try again later."
BRIEF_EMPTY = "No content available for your daily briefing."
BRIEF_UNAVAILABLE = "Unable to generate daily briefing at this time."
TEXT_SUMMARY_PLACEHOLDER = (
    "This is an AI-generated summary of the content. It highlights the key points in a concise "
    "manner, using bullet points for readability. \n\n"
    " • Point 1: The main subject is introduced.\n"
    " • Point 2: Critical analysis provided.\n"
    " • Point 3: Future implications discussed."
)

MAX_TOPICS = 5

# prompt -> completion, so repeated views of one article cost one call
_responses: TTLCache = TTLCache(maxsize=512, ttl=60 * 60)
_responses_lock = threading.Lock()


def _complete(prompt: str, temperature: float = 0.5) -> str:
    """
    Cached LLM call. Raises LLMNotConfigured / LLMGenerationError, which every
    public helper below turns into its own fallback.
    """
    with _responses_lock:
        cached = _responses.get(prompt)
    if cached is not None:
        return cached

    text = generate_response(prompt, temperature=temperature)

    with _responses_lock:
        _responses[prompt] = text
    return text


def clear_cache() -> None:
    with _responses_lock:
        _responses.clear()


def _split_list(text: str) -> List[str]:
    return [t.strip() for t in text.split(",") if t.strip()]


def generate_summary(content: Mapping[str, Any]) -> str:
    prompt = (
        "Please provide a concise summary (3-4 sentences) of the following content:\n\n"
        f"Title: {content.get('title')}\n"
        f"Description: {content.get('description') or 'No description available'}\n\n"
        "Summary:"
    )
    try:
        return _complete(prompt)
    except LLMNotConfigured:
        return SUMMARY_NOT_CONFIGURED
    except LLMGenerationError as e:
        logger.error(f"Error generating summary: {e}")
        return SUMMARY_UNAVAILABLE


def extract_topics(title: str, description: Optional[str] = None) -> List[str]:
    prompt = (
        f"Extract {MAX_TOPICS} key topics or tags from the following content. "
        "Return only the topics as a comma-separated list:\n\n"
        f"Title: {title}\n"
        f"Description: {description or ''}\n\n"
        "Topics:"
    )
    try:
        return _split_list(_complete(prompt, temperature=0.2))[:MAX_TOPICS]
    except LLMNotConfigured:
        return []
    except LLMGenerationError as e:
        logger.error(f"Error extracting topics: {e}")
        return []


def generate_daily_brief(contents: Sequence[Mapping[str, Any]]) -> str:
    if not contents:
        return BRIEF_EMPTY

    content_list = "\n".join(
        f"{index}. {item.get('title')} - {item.get('source')}"
        for index, item in enumerate(contents[:5], start=1)
    )
    prompt = (
        "Create a brief, engaging daily briefing (2-3 sentences) summarizing these top stories:\n\n"
        f"{content_list}\n\nDaily Briefing:"
    )
    try:
        return _complete(prompt)
    except LLMNotConfigured:
        return BRIEF_EMPTY
    except LLMGenerationError as e:
        logger.error(f"Error generating daily brief: {e}")
        return BRIEF_UNAVAILABLE


def suggest_categories(preferences: Optional[Dict[str, Any]], saved_titles: Sequence[str]) -> Optional[List[str]]:
    categories = ", ".join((preferences or {}).get("categories") or []) or "general"
    recent = ", ".join(saved_titles[:5])
    prompt = (
        f"Based on a user who is interested in {categories} and has recently saved content about: "
        f"{recent}, suggest 3 content categories or topics they might be interested in. "
        "Provide only the category names, separated by commas."
    )
    try:
        return _split_list(_complete(prompt))
    except LLMNotConfigured:
        return None
    except LLMGenerationError as e:
        logger.error(f"Error generating recommendations: {e}")
        return None


def summarize_text(text: str) -> str:
    if not text or not text.strip():
        return TEXT_SUMMARY_PLACEHOLDER
    prompt = (
        "Summarize the following text in a few concise bullet points:\n\n"
        f"{text[:6000]}\n\nSummary:"
    )
    try:
        return _complete(prompt)
    except (LLMNotConfigured, LLMGenerationError) as e:
        logger.info(f"Text summary fallback: {e}")
        return TEXT_SUMMARY_PLACEHOLDER


def translate_text(text: str, target_lang: str) -> str:
    prompt = (
        f"Translate the following text to {target_lang}. Return only the translation:\n\n{text}"
    )
    try:
        return _complete(prompt, temperature=0.2)
    except (LLMNotConfigured, LLMGenerationError) as e:
        logger.info(f"Translation fallback: {e}")
        return f"[Translated to {target_lang}]: {text[:100]}..."
