# clients/currents_client.py
import logging
from typing import List, Optional

import requests
from requests.exceptions import RequestException

from services.errors import UpstreamUnavailable
from state.state_schema import ExternalArticle

logger = logging.getLogger(__name__)

CURRENTS_API_URL = "https://api.currentsapi.services/v1/latest-news"
PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1504711434969-e33886168f5c?auto=format&fit=crop&q=80&w=1000"


class CurrentsClient:
    """
    Upstream news provider (Currents API).
    Every failure mode is reported as UpstreamUnavailable so the cache can fall back.
    """

    def __init__(self, api_key: Optional[str], base_url: str = CURRENTS_API_URL, timeout: float = 8.0):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def latest_news(self, category: str, language: str = "en") -> List[ExternalArticle]:
        if not self.api_key:
            raise UpstreamUnavailable("Currents API key not configured")

        params = {
            "apiKey": self.api_key,
            "category": category,
            "language": language,
        }

        try:
            resp = requests.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except RequestException as e:
            logger.warning(f"Currents request failed for '{category}': {e}")
            raise UpstreamUnavailable(str(e)) from e
        except ValueError as e:
            logger.warning(f"Currents returned non-JSON payload for '{category}'")
            raise UpstreamUnavailable("Invalid JSON from Currents") from e

        if not isinstance(data, dict) or data.get("status") != "ok":
            raise UpstreamUnavailable("Currents API Error")

        return [self._to_external(item) for item in data.get("news") or [] if item]

    @staticmethod
    def _to_external(item: dict) -> ExternalArticle:
        image = item.get("image")
        categories = item.get("category") or []

        # Currents puts the outlet name in 'author'
        return ExternalArticle(
            id=item.get("id"),
            title=item.get("title") or "",
            description=item.get("description") or "",
            body=item.get("description") or "",
            image_url=image if image and image != "None" else PLACEHOLDER_IMAGE,
            published_at=item.get("published"),
            author="Staff",
            source_name=item.get("author") or "Currents",
            url=item.get("url"),
            category=categories[0] if categories else "General",
        )
