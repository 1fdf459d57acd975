from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from wair.core.errors import ApiError, ImageLoadError
from wair.schemas.api import ApiErrorOut
from wair.services import llm as llm_service
from wair.services.images import ImageCodec
from wair.services.stylist import StylingOrchestrator
from wair.stores import (
    ChatStore,
    InMemoryChatStore,
    InMemoryInventoryStore,
    InMemoryProfileStore,
    InventoryStore,
    ProfileStore,
)

_inventory: Optional[InventoryStore] = None
_chats: Optional[ChatStore] = None
_profiles: Optional[ProfileStore] = None


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    # Identity comes from the fronting auth layer; this service trusts it.
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
    return x_user_id


def get_inventory_store() -> InventoryStore:
    global _inventory
    if _inventory is None:
        _inventory = InMemoryInventoryStore()
    return _inventory


def get_chat_store() -> ChatStore:
    global _chats
    if _chats is None:
        _chats = InMemoryChatStore()
    return _chats


def get_profile_store() -> ProfileStore:
    global _profiles
    if _profiles is None:
        _profiles = InMemoryProfileStore()
    return _profiles


def get_codec() -> ImageCodec:
    return ImageCodec()


def get_orchestrator(codec: ImageCodec = Depends(get_codec)) -> StylingOrchestrator:
    return StylingOrchestrator(llm_service.get_text_client(), llm_service.get_image_client(), codec)


def api_error_out(e: ApiError) -> ApiErrorOut:
    return ApiErrorOut(kind=e.kind, message=e.message)


def raise_api_error(e: ApiError) -> None:
    code = status.HTTP_503_SERVICE_UNAVAILABLE if e.kind == "NO_API_KEY" else status.HTTP_502_BAD_GATEWAY
    raise HTTPException(status_code=code, detail=api_error_out(e).model_dump()) from e


def raise_image_error(e: ImageLoadError) -> None:
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="image_unreadable") from e
