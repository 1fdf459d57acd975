from __future__ import annotations

from typing import Literal, Optional

ApiErrorKind = Literal[
    "NO_API_KEY",
    "RATE_LIMIT",
    "API_ERROR",
    "EMPTY_RESPONSE",
    "PARSE_ERROR",
    "IMAGE_GEN_ERROR",
    "NO_IMAGE",
]


class ApiError(Exception):
    """Failure talking to a generative backend.

    ``retryable`` decides whether the retry policy may re-issue the call;
    ``kind`` is for callers and diagnostics.
    """

    def __init__(
        self,
        message: str,
        kind: ApiErrorKind = "API_ERROR",
        retryable: bool = False,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.retryable = retryable
        self.status = status

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind!r}, retryable={self.retryable}, message={self.message!r})"


class ImageLoadError(Exception):
    """Raised when an image reference cannot be turned into inline data."""


class OfflineError(RuntimeError):
    """Raised before dispatch when the client reports no connectivity."""
