from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    APP_NAME: str = "WAIR Stylist API"
    APP_ENV: str = "dev"
    API_PREFIX: str = "/v1"
    CORS_ORIGINS: str = "*"
    # Gemini backend
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TEXT_MODEL: str = "gemini-2.0-flash"
    GEMINI_IMAGE_MODEL: str = "gemini-2.0-flash-exp-image-generation"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_OUTPUT_TOKENS: int = 8192
    LLM_TEXT_RETRIES: int = 2
    LLM_IMAGE_RETRIES: int = 1
    LLM_BACKOFF_MS: int = 1000
    LLM_TIMEOUT_S: float = 60.0
    # Image processing
    IMAGE_MAX_WIDTH: int = 800
    IMAGE_JPEG_QUALITY: int = 85
    IMAGE_FALLBACK_QUALITY: int = 90
    IMAGE_FETCH_TIMEOUT_S: float = 10.0
    STATIC_ROOT: str = "static"
    # Stylist
    TRYON_MAX_GARMENTS: int = 3
    CHAT_HISTORY_TURNS: int = 10
    PROFILE_GALLERY_MAX: int = 10

    @property
    def cors_origin_list(self) -> List[str]:
        val = self.CORS_ORIGINS
        if not val: return []
        if val == "*": return ["*"]
        return [v.strip() for v in val.split(",")]


settings = Settings()

# Key supplied by an embedding host at runtime; only used when the
# environment does not provide one.
_host_api_key: Optional[str] = None


def inject_host_api_key(key: Optional[str]) -> None:
    global _host_api_key
    _host_api_key = key or None


def resolve_api_key() -> Optional[str]:
    return settings.GEMINI_API_KEY or _host_api_key
