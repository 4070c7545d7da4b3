import time
import asyncio
from typing import Optional
from fastapi import Request
from fastapi.responses import JSONResponse
import logging
from cachetools import TTLCache

logger = logging.getLogger("rate_limiter")

API_PREFIX = "/api/"


class RateLimitMiddleware:
    """
    In-memory sliding-window limiter for the /api surface, keyed by client IP.
    Memory-bounded through TTLCache: idle clients fall out after one window.
    """
    def __init__(self, requests_per_minute: int = 120, window_size: int = 60, clock=time.time):
        self.rate_limit = requests_per_minute
        self.window_size = window_size
        self.clock = clock
        self.clients = TTLCache(maxsize=10000, ttl=self.window_size)  # IP -> list of timestamps
        self.lock = asyncio.Lock()

    @staticmethod
    def client_ip(request: Request) -> Optional[str]:
        x_forwarded = request.headers.get("x-forwarded-for")
        if x_forwarded:
            return x_forwarded.split(",")[0].strip()
        if request.headers.get("x-real-ip"):
            return request.headers.get("x-real-ip").strip()
        if request.client and request.client.host:
            return request.client.host
        return None

    async def __call__(self, request: Request, call_next):
        if not request.url.path.startswith(API_PREFIX) or request.method == "OPTIONS":
            return await call_next(request)

        client_ip = self.client_ip(request)
        if not client_ip:
            logger.warning("Rate limit skipped due to missing client IP (blocking request)")
            return JSONResponse(
                status_code=400,
                content={"detail": "Client IP required for rate limiting."}
            )

        async with self.lock:
            now = self.clock()
            history = [t for t in self.clients.get(client_ip, []) if t > now - self.window_size]

            if len(history) >= self.rate_limit:
                self.clients[client_ip] = history
                logger.warning(f"Rate limit exceeded for IP: {client_ip}")
                return JSONResponse(
                    status_code=429,
                    content={"detail": "Too many requests, please try again later."}
                )

            history.append(now)
            self.clients[client_ip] = history  # resets the entry's TTL

        return await call_next(request)
