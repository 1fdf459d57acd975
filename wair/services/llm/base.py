from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from wair.core.config import resolve_api_key, settings
from wair.core.errors import ApiError

logger = logging.getLogger("wair.llm")

Sleep = Callable[[float], Awaitable[None]]


def error_message(resp: httpx.Response, default: str) -> str:
    try:
        data = resp.json()
    except ValueError:
        return default
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message") or default
    return default


def first_candidate_parts(data: Any) -> list:
    if not isinstance(data, dict):
        return []
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return []
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    return parts if isinstance(parts, list) else []


class GeminiClient:
    """Shared plumbing for calls to a Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        model: str,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = client
        self.model = model
        self.sleep = sleep

    def require_api_key(self) -> str:
        key = resolve_api_key()
        if not key:
            raise ApiError(
                "API key not configured. Set GEMINI_API_KEY or inject a host key.",
                "NO_API_KEY",
                False,
            )
        return key

    @property
    def url(self) -> str:
        return f"{settings.GEMINI_API_BASE}/models/{self.model}:generateContent"

    async def post(self, api_key: str, payload: Dict[str, Any]) -> httpx.Response:
        logger.info("llm:gemini request model=%s", self.model)
        kwargs = {"params": {"key": api_key}, "json": payload, "timeout": settings.LLM_TIMEOUT_S}
        if self.client is not None:
            return await self.client.post(self.url, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.post(self.url, **kwargs)
