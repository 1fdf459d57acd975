from .gemini import (
    RecordingSleep,
    ScriptedBackend,
    error_response,
    image_response,
    image_size,
    make_image,
    text_response,
)
from .wardrobe import black_tee_wardrobe, date_night_wardrobe, item, mixed_wardrobe

__all__ = [
    "RecordingSleep",
    "ScriptedBackend",
    "error_response",
    "image_response",
    "image_size",
    "make_image",
    "text_response",
    "black_tee_wardrobe",
    "date_night_wardrobe",
    "item",
    "mixed_wardrobe",
]
