from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from typing import Any, Dict, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from wair.core.config import settings
from wair.core.errors import ApiError
from wair.core.retry import RetryPolicy, run_with_retry
from wair.services.images import split_inline
from wair.services.llm.base import GeminiClient, Sleep, error_message, first_candidate_parts

logger = logging.getLogger("wair.llm")

M = TypeVar("M", bound=BaseModel)

_FENCE_RE = re.compile(r"```json|```")


def strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def build_text_payload(prompt: str, system_instruction: str = "", image: Optional[str] = None) -> Dict[str, Any]:
    # No separate system turn in this integration; instruction leads the text.
    full_prompt = f"{system_instruction}\n\n{prompt}" if system_instruction else prompt
    parts: list = [{"text": full_prompt}]
    if image:
        _, data = split_inline(image)
        parts.append({"inlineData": {"mimeType": "image/jpeg", "data": data}})
    return {
        "contents": [{"parts": parts}],
        "generationConfig": {
            "temperature": settings.LLM_TEMPERATURE,
            "maxOutputTokens": settings.LLM_MAX_OUTPUT_TOKENS,
        },
    }


class GenerativeTextClient(GeminiClient):
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        model: Optional[str] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        super().__init__(client, model=model or settings.GEMINI_TEXT_MODEL, sleep=sleep)

    async def generate(
        self,
        prompt: str,
        system_instruction: str = "",
        image: Optional[str] = None,
        *,
        retries: Optional[int] = None,
        response_model: Optional[Type[M]] = None,
    ) -> Union[Dict[str, Any], M]:
        """Send one prompt and return the parsed JSON object.

        With ``response_model`` the object is validated into that model; a
        validation failure counts as a parse failure and is retried.
        """
        api_key = self.require_api_key()
        payload = build_text_payload(prompt, system_instruction, image)
        retries = settings.LLM_TEXT_RETRIES if retries is None else retries
        policy = RetryPolicy.linear(retries, settings.LLM_BACKOFF_MS)
        return await run_with_retry(
            lambda: self._attempt(api_key, payload, response_model),
            policy,
            sleep=self.sleep,
        )

    async def _attempt(
        self,
        api_key: str,
        payload: Dict[str, Any],
        response_model: Optional[Type[M]],
    ) -> Union[Dict[str, Any], M]:
        start = time.perf_counter()
        try:
            resp = await self.post(api_key, payload)
        except httpx.HTTPError as e:
            raise ApiError(f"Network error: {e}", "RATE_LIMIT", True) from e
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info("llm:gemini response model=%s status=%s latency_ms=%s", self.model, resp.status_code, latency_ms)

        if not resp.is_success:
            msg = error_message(resp, f"HTTP {resp.status_code}")
            if resp.status_code == 429 or resp.status_code >= 500:
                raise ApiError(msg, "RATE_LIMIT", True, resp.status_code)
            raise ApiError(msg, "API_ERROR", False, resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            data = None
        parts = first_candidate_parts(data)
        text = parts[0].get("text") if parts and isinstance(parts[0], dict) else None
        if not text:
            raise ApiError("Empty response from AI", "EMPTY_RESPONSE", True)

        try:
            parsed = json.loads(strip_fences(text))
        except ValueError as e:
            logger.warning("llm:gemini parse failed raw=%r", text[:500])
            raise ApiError("Failed to parse AI response", "PARSE_ERROR", True) from e
        if response_model is None:
            return parsed
        try:
            return response_model.model_validate(parsed)
        except ValidationError as e:
            logger.warning("llm:gemini invalid shape model=%s errors=%s", response_model.__name__, e.error_count())
            raise ApiError("AI response did not match the expected shape", "PARSE_ERROR", True) from e
