from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from wair.schemas.api import ChatCreateIn, ChatTurnOut, MessageIn
from wair.schemas.chat import ChatMessage, ChatSession
from wair.routers.deps import (
    api_error_out,
    get_chat_store,
    get_codec,
    get_current_user_id,
    get_inventory_store,
    get_orchestrator,
    get_profile_store,
)
from wair.services.images import ImageCodec
from wair.services.state import StylistState
from wair.services.stylist import StylingOrchestrator, StylistTurn
from wair.stores import ChatStore, InventoryStore, ProfileStore

router = APIRouter(prefix="/chats", tags=["chats"])

TITLE_MAX = 30
PREVIEW_MAX = 50


async def _require_chat(store: ChatStore, user_id: str, chat_id: str) -> ChatSession:
    chat = await store.get_chat(user_id, chat_id)
    if chat is None:
        raise HTTPException(status_code=404, detail="chat_not_found")
    return chat


async def _load_state(
    user_id: str,
    chat_id: str,
    chats: ChatStore,
    inventory: InventoryStore,
    profiles: ProfileStore,
) -> StylistState:
    return StylistState(
        wardrobe=await inventory.list(user_id),
        profile=await profiles.get(user_id),
        history=await chats.list_messages(user_id, chat_id),
    )


async def _append(chats: ChatStore, user_id: str, chat_id: str, message: ChatMessage) -> ChatMessage:
    try:
        return await chats.append_message(user_id, chat_id, message)
    except KeyError as e:
        # deleted while the turn was in flight
        raise HTTPException(status_code=404, detail="chat_not_found") from e


async def _record_user_message(
    chats: ChatStore,
    user_id: str,
    chat_id: str,
    state: StylistState,
    text: str,
    image: Optional[str],
) -> ChatMessage:
    user_msg = await _append(chats, user_id, chat_id, ChatMessage(role="user", text=text, image=image))
    updates = {"last_message": "Sent a photo" if image else text}
    if not state.history and text:
        updates["title"] = text[:TITLE_MAX]
    await chats.update_chat(user_id, chat_id, **updates)
    return user_msg


async def _record_reply(
    chats: ChatStore,
    user_id: str,
    chat_id: str,
    user_msg: ChatMessage,
    turn: StylistTurn,
) -> ChatTurnOut:
    reply = await _append(
        chats,
        user_id,
        chat_id,
        ChatMessage(role="assistant", text=turn.text, outfits=turn.outfits, is_error=turn.is_error),
    )
    if not turn.is_error:
        preview = turn.text[:PREVIEW_MAX] + "..." if turn.text else None
        await chats.update_chat(user_id, chat_id, last_message=preview)
    return ChatTurnOut(
        user_message=user_msg,
        reply=reply,
        error=api_error_out(turn.error) if turn.error else None,
    )


@router.post("", response_model=ChatSession)
async def create_chat(
    payload: ChatCreateIn,
    chats: ChatStore = Depends(get_chat_store),
    user_id: str = Depends(get_current_user_id),
):
    return await chats.create_chat(user_id, payload.title or "New Chat")


@router.get("", response_model=List[ChatSession])
async def list_chats(
    chats: ChatStore = Depends(get_chat_store),
    user_id: str = Depends(get_current_user_id),
):
    return await chats.list_chats(user_id)


@router.delete("/{chat_id}")
async def delete_chat(
    chat_id: str,
    chats: ChatStore = Depends(get_chat_store),
    user_id: str = Depends(get_current_user_id),
):
    if not await chats.delete_chat(user_id, chat_id):
        raise HTTPException(status_code=404, detail="chat_not_found")
    return {"deleted": chat_id}


@router.get("/{chat_id}/messages", response_model=List[ChatMessage])
async def list_messages(
    chat_id: str,
    chats: ChatStore = Depends(get_chat_store),
    user_id: str = Depends(get_current_user_id),
):
    await _require_chat(chats, user_id, chat_id)
    return await chats.list_messages(user_id, chat_id)


@router.post("/{chat_id}/messages", response_model=ChatTurnOut)
async def send_message(
    chat_id: str,
    payload: MessageIn,
    chats: ChatStore = Depends(get_chat_store),
    inventory: InventoryStore = Depends(get_inventory_store),
    profiles: ProfileStore = Depends(get_profile_store),
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    codec: ImageCodec = Depends(get_codec),
    user_id: str = Depends(get_current_user_id),
):
    await _require_chat(chats, user_id, chat_id)
    if not payload.text.strip() and not payload.image:
        raise HTTPException(status_code=400, detail="empty_message")
    image = await codec.resize(payload.image) if payload.image else None
    state = await _load_state(user_id, chat_id, chats, inventory, profiles)
    user_msg = await _record_user_message(chats, user_id, chat_id, state, payload.text, image)
    try:
        turn = await stylist.send_message(state, payload.text, image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return await _record_reply(chats, user_id, chat_id, user_msg, turn)


@router.post("/{chat_id}/surprise", response_model=ChatTurnOut)
async def surprise_me(
    chat_id: str,
    chats: ChatStore = Depends(get_chat_store),
    inventory: InventoryStore = Depends(get_inventory_store),
    profiles: ProfileStore = Depends(get_profile_store),
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    user_id: str = Depends(get_current_user_id),
):
    await _require_chat(chats, user_id, chat_id)
    state = await _load_state(user_id, chat_id, chats, inventory, profiles)
    try:
        request, turn = await stylist.surprise_me(state)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    user_msg = await _record_user_message(chats, user_id, chat_id, state, request, None)
    return await _record_reply(chats, user_id, chat_id, user_msg, turn)
