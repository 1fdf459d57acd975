import asyncio
import base64
import io
import logging
import urllib.request
from pathlib import Path
from typing import Optional, Tuple

import httpx
from PIL import Image

from wair.core.config import settings
from wair.core.errors import ImageLoadError

logger = logging.getLogger("wair.images")

DEFAULT_MIME = "image/jpeg"


def is_inline(ref: str) -> bool:
    return ref.startswith("data:")


def split_inline(data: str) -> Tuple[str, str]:
    """Return ``(mime, base64_payload)``; bare base64 is assumed to be JPEG."""
    if is_inline(data) and "," in data:
        header, payload = data.split(",", 1)
        mime = header[5:].split(";")[0] or DEFAULT_MIME
        return mime, payload
    return DEFAULT_MIME, data


def make_inline(mime: Optional[str], payload: str) -> str:
    return f"data:{mime or DEFAULT_MIME};base64,{payload}"


def _encode_jpeg(img: Image.Image, quality: int) -> str:
    if img.mode != "RGB":
        img = img.convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return make_inline("image/jpeg", base64.b64encode(buf.getvalue()).decode("ascii"))


def resize(image: str, max_width: Optional[int] = None, quality: Optional[int] = None) -> str:
    """Downscale an inline image to ``max_width`` and re-encode as JPEG.

    Never raises: an image that cannot be decoded is returned as given.
    """
    max_width = max_width or settings.IMAGE_MAX_WIDTH
    try:
        _, payload = split_inline(image)
        img = Image.open(io.BytesIO(base64.b64decode(payload)))
        img.load()
        width, height = img.size
        if width > max_width:
            height = max(1, round(height * max_width / width))
            width = max_width
            img = img.resize((width, height), Image.LANCZOS)
        return _encode_jpeg(img, quality or settings.IMAGE_JPEG_QUALITY)
    except (ValueError, OSError, Image.DecompressionBombError) as e:
        logger.info("images:resize skipped err=%s", e)
        return image


class ImageCodec:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, static_root: Optional[str] = None):
        self.client = client
        self.static_root = Path(static_root or settings.STATIC_ROOT)

    async def resize(self, image: str, max_width: Optional[int] = None) -> str:
        return await asyncio.to_thread(resize, image, max_width)

    async def to_inline(self, source: str) -> str:
        """Turn any image reference into an inline ``data:`` string.

        Tries a plain HTTP fetch first, then opens and re-encodes the
        reference directly; raises ``ImageLoadError`` when both fail.
        """
        if is_inline(source):
            return source
        try:
            return await self._fetch(source)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.info("images:fetch failed ref=%s err=%s, falling back to decode", source[:80], e)
        try:
            return await asyncio.to_thread(self._decode_reference, source)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning("images:load failed ref=%s err=%s", source[:80], e)
            raise ImageLoadError(f"Failed to load image: {source[:80]}") from e

    async def _fetch(self, url: str) -> str:
        if self.client is not None:
            resp = await self.client.get(url, timeout=settings.IMAGE_FETCH_TIMEOUT_S)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                resp = await client.get(url, timeout=settings.IMAGE_FETCH_TIMEOUT_S)
        resp.raise_for_status()
        mime = resp.headers.get("content-type", DEFAULT_MIME).split(";")[0].strip()
        if not mime.startswith("image/"):
            raise ValueError(f"not an image: {mime}")
        return make_inline(mime, base64.b64encode(resp.content).decode("ascii"))

    def _decode_reference(self, ref: str) -> str:
        if ref.startswith(("http://", "https://")):
            with urllib.request.urlopen(ref, timeout=settings.IMAGE_FETCH_TIMEOUT_S) as resp:
                data = resp.read()
        else:
            root = self.static_root.resolve()
            path = (root / ref.lstrip("/")).resolve()
            if not path.is_relative_to(root):
                raise ValueError(f"outside static root: {ref[:80]}")
            data = path.read_bytes()
        img = Image.open(io.BytesIO(data))
        img.load()
        return _encode_jpeg(img, settings.IMAGE_FALLBACK_QUALITY)
