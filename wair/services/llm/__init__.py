from __future__ import annotations

from typing import Optional

import httpx

from wair.services.llm.image_client import GenerativeImageClient
from wair.services.llm.text_client import GenerativeTextClient

_http: Optional[httpx.AsyncClient] = None
_text_client: Optional[GenerativeTextClient] = None
_image_client: Optional[GenerativeImageClient] = None


def _get_http() -> httpx.AsyncClient:
    global _http
    if _http is None:
        _http = httpx.AsyncClient()
    return _http


def get_text_client() -> GenerativeTextClient:
    global _text_client
    if _text_client is None:
        _text_client = GenerativeTextClient(_get_http())
    return _text_client


def get_image_client() -> GenerativeImageClient:
    global _image_client
    if _image_client is None:
        _image_client = GenerativeImageClient(_get_http())
    return _image_client


async def close_clients() -> None:
    global _http, _text_client, _image_client
    if _http is not None:
        await _http.aclose()
    _http = None
    _text_client = None
    _image_client = None


__all__ = [
    "GenerativeImageClient",
    "GenerativeTextClient",
    "get_image_client",
    "get_text_client",
    "close_clients",
]
