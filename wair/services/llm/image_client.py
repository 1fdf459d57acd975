from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from wair.core.config import settings
from wair.core.errors import ApiError
from wair.core.retry import RetryPolicy, run_with_retry
from wair.services.images import make_inline, split_inline
from wair.services.llm.base import GeminiClient, Sleep, error_message, first_candidate_parts

logger = logging.getLogger("wair.llm")


def build_image_payload(prompt: str, reference_images: List[Optional[str]], limit: int) -> Dict[str, Any]:
    parts: list = [{"text": prompt}]
    for ref in [r for r in reference_images if r][:limit]:
        _, data = split_inline(ref)
        parts.append({"inlineData": {"mimeType": "image/jpeg", "data": data}})
    return {
        "contents": [{"parts": parts}],
        "generationConfig": {"responseModalities": ["IMAGE", "TEXT"]},
    }


class GenerativeImageClient(GeminiClient):
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        model: Optional[str] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        super().__init__(client, model=model or settings.GEMINI_IMAGE_MODEL, sleep=sleep)

    async def generate_image(
        self,
        prompt: str,
        reference_images: List[Optional[str]],
        *,
        retries: Optional[int] = None,
    ) -> str:
        """Generate one image from a prompt plus reference photos.

        The subject photo goes first, garment images after it. Returns an
        inline ``data:`` string.
        """
        api_key = self.require_api_key()
        payload = build_image_payload(prompt, reference_images, 1 + settings.TRYON_MAX_GARMENTS)
        retries = settings.LLM_IMAGE_RETRIES if retries is None else retries
        policy = RetryPolicy.linear(retries, settings.LLM_BACKOFF_MS)
        return await run_with_retry(lambda: self._attempt(api_key, payload), policy, sleep=self.sleep)

    async def _attempt(self, api_key: str, payload: Dict[str, Any]) -> str:
        try:
            resp = await self.post(api_key, payload)
        except httpx.HTTPError as e:
            raise ApiError(f"Image generation failed: {e}", "IMAGE_GEN_ERROR", True) from e
        if not resp.is_success:
            msg = error_message(resp, "Image generation failed")
            raise ApiError(msg, "IMAGE_GEN_ERROR", True, resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            data = None
        for part in first_candidate_parts(data):
            inline = part.get("inlineData") if isinstance(part, dict) else None
            if inline and inline.get("data"):
                return make_inline(inline.get("mimeType") or "image/png", inline["data"])
        raise ApiError("No image generated", "NO_IMAGE", True)
