# clients/newsapi_client.py
import logging
from typing import List, Dict, Optional

import requests
from requests.exceptions import RequestException

from services.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/top-headlines"


def fetch_top_headlines(api_key: Optional[str], country: str = "us", page_size: int = 50, timeout: float = 10.0) -> List[Dict]:
    """
    Top headlines from NewsAPI.org, used by background ingestion.
    Returns raw article dicts; callers decide what to keep.
    """
    if not api_key:
        raise UpstreamUnavailable("NewsAPI key not configured")

    params = {
        "country": country,
        "pageSize": page_size,
        "apiKey": api_key,
    }

    try:
        resp = requests.get(NEWSAPI_URL, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except RequestException as e:
        logger.error(f"NewsAPI request failed: {e}")
        raise UpstreamUnavailable(str(e)) from e
    except ValueError as e:
        raise UpstreamUnavailable("Invalid JSON from NewsAPI") from e

    if data.get("status") != "ok":
        raise UpstreamUnavailable(data.get("message") or "NewsAPI error")

    return data.get("articles") or []
