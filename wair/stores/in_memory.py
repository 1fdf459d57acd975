from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from wair.schemas.chat import ChatMessage, ChatSession
from wair.schemas.profile import Profile
from wair.schemas.wardrobe import WardrobeItem
from wair.stores.base import Unsubscribe

logger = logging.getLogger("wair.stores")


class _Listeners:
    def __init__(self) -> None:
        self._callbacks: Dict[object, List[Callable]] = defaultdict(list)

    def add(self, key: object, callback: Callable) -> Unsubscribe:
        self._callbacks[key].append(callback)

        def _remove() -> None:
            if callback in self._callbacks.get(key, []):
                self._callbacks[key].remove(callback)

        return _remove

    def notify(self, key: object, snapshot: list) -> None:
        for callback in list(self._callbacks.get(key, [])):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("store listener failed key=%s", key)


class InMemoryInventoryStore:
    def __init__(self) -> None:
        self._items: Dict[str, Dict[str, WardrobeItem]] = defaultdict(dict)
        self._lock = asyncio.Lock()
        self._listeners = _Listeners()

    def _snapshot(self, user_id: str) -> List[WardrobeItem]:
        return sorted(self._items[user_id].values(), key=lambda i: i.created_at, reverse=True)

    async def add(self, user_id: str, item: WardrobeItem) -> WardrobeItem:
        async with self._lock:
            self._items[user_id][item.id] = item
            snapshot = self._snapshot(user_id)
        self._listeners.notify(user_id, snapshot)
        return item

    async def list(self, user_id: str) -> List[WardrobeItem]:
        async with self._lock:
            return self._snapshot(user_id)

    async def get(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        async with self._lock:
            return self._items[user_id].get(item_id)

    async def delete(self, user_id: str, item_id: str) -> bool:
        async with self._lock:
            removed = self._items[user_id].pop(item_id, None)
            snapshot = self._snapshot(user_id)
        if removed is None:
            return False
        self._listeners.notify(user_id, snapshot)
        return True

    async def clear(self, user_id: str) -> int:
        async with self._lock:
            count = len(self._items[user_id])
            self._items[user_id] = {}
        self._listeners.notify(user_id, [])
        return count

    def subscribe(self, user_id: str, callback: Callable[[List[WardrobeItem]], None]) -> Unsubscribe:
        return self._listeners.add(user_id, callback)


class InMemoryChatStore:
    def __init__(self) -> None:
        self._chats: Dict[str, Dict[str, ChatSession]] = defaultdict(dict)
        self._messages: Dict[Tuple[str, str], List[ChatMessage]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self._listeners = _Listeners()

    async def create_chat(self, user_id: str, title: str = "New Chat") -> ChatSession:
        chat = ChatSession(title=title)
        async with self._lock:
            self._chats[user_id][chat.id] = chat
        return chat

    async def list_chats(self, user_id: str) -> List[ChatSession]:
        async with self._lock:
            return sorted(self._chats[user_id].values(), key=lambda c: c.updated_at, reverse=True)

    async def get_chat(self, user_id: str, chat_id: str) -> Optional[ChatSession]:
        async with self._lock:
            return self._chats[user_id].get(chat_id)

    async def update_chat(self, user_id: str, chat_id: str, **fields) -> Optional[ChatSession]:
        async with self._lock:
            chat = self._chats[user_id].get(chat_id)
            if chat is None:
                return None
            fields.setdefault("updated_at", datetime.now(timezone.utc))
            chat = chat.model_copy(update=fields)
            self._chats[user_id][chat_id] = chat
            return chat

    async def delete_chat(self, user_id: str, chat_id: str) -> bool:
        async with self._lock:
            removed = self._chats[user_id].pop(chat_id, None)
            self._messages.pop((user_id, chat_id), None)
        return removed is not None

    async def append_message(self, user_id: str, chat_id: str, message: ChatMessage) -> ChatMessage:
        key = (user_id, chat_id)
        async with self._lock:
            if chat_id not in self._chats[user_id]:
                raise KeyError(chat_id)
            messages = self._messages[key]
            # Keep creation order even if two messages share a timestamp.
            if messages and message.created_at < messages[-1].created_at:
                message = message.model_copy(update={"created_at": messages[-1].created_at})
            messages.append(message)
            snapshot = list(messages)
        self._listeners.notify(key, snapshot)
        return message

    async def list_messages(self, user_id: str, chat_id: str) -> List[ChatMessage]:
        async with self._lock:
            return list(self._messages.get((user_id, chat_id), []))

    def subscribe(self, user_id: str, chat_id: str, callback: Callable[[List[ChatMessage]], None]) -> Unsubscribe:
        return self._listeners.add((user_id, chat_id), callback)


class InMemoryProfileStore:
    def __init__(self) -> None:
        self._profiles: Dict[str, Profile] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: str) -> Profile:
        async with self._lock:
            return self._profiles.get(user_id) or Profile()

    async def set(self, user_id: str, profile: Profile) -> Profile:
        async with self._lock:
            self._profiles[user_id] = profile
            return profile
