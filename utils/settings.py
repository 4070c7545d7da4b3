# utils/settings.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEV_ENVIRONMENTS = ("local", "test")


@dataclass(frozen=True)
class Settings:
    app_env: str
    jwt_secret: str
    jwt_expire_days: int
    news_api_key: Optional[str]
    news_api_url: str
    news_api_timeout: float
    newsapi_org_key: Optional[str]
    news_cache_ttl_seconds: int
    news_random_seed: Optional[int]
    rate_limit_per_minute: int
    seed_on_startup: bool
    allowed_origins: List[str] = field(default_factory=list)

    @property
    def is_production(self) -> bool:
        return self.app_env not in DEV_ENVIRONMENTS

    @staticmethod
    def from_env() -> "Settings":
        def _b(name: str, default: str) -> bool:
            return os.getenv(name, default).strip() in ("1", "true", "True", "yes", "YES")

        def _i(name: str, default: str) -> int:
            return int(os.getenv(name, default).strip())

        def _opt(name: str) -> Optional[str]:
            value = (os.getenv(name) or "").strip()
            return value or None

        app_env = os.getenv("APP_ENV", "local").strip()

        jwt_secret = _opt("JWT_SECRET")
        if not jwt_secret:
            if app_env not in DEV_ENVIRONMENTS:
                raise ValueError("CRITICAL: JWT_SECRET is not set. Authentication cannot proceed.")
            jwt_secret = "readstream-dev-secret"

        seed = _opt("NEWS_RANDOM_SEED")

        origins_str = os.getenv("ALLOWED_ORIGINS", "")
        origins = [o.strip() for o in origins_str.split(",") if o.strip()]
        if not origins and app_env in DEV_ENVIRONMENTS:
            origins = ["http://localhost:3000", "http://localhost:5173"]

        return Settings(
            app_env=app_env,
            jwt_secret=jwt_secret,
            jwt_expire_days=_i("JWT_EXPIRE_DAYS", "30"),
            news_api_key=_opt("NEWS_API_KEY"),
            news_api_url=os.getenv("NEWS_API_URL", "https://api.currentsapi.services/v1/latest-news").strip(),
            news_api_timeout=float(os.getenv("NEWS_API_TIMEOUT", "8").strip()),
            newsapi_org_key=_opt("NEWSAPI_ORG_KEY"),
            news_cache_ttl_seconds=_i("NEWS_CACHE_TTL_SECONDS", "900"),
            news_random_seed=int(seed) if seed else None,
            rate_limit_per_minute=_i("RATE_LIMIT_PER_MINUTE", "120"),
            seed_on_startup=_b("SEED_ON_STARTUP", "1"),
            allowed_origins=origins,
        )
