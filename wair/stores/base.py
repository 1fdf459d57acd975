from typing import Callable, List, Optional, Protocol

from wair.schemas.chat import ChatMessage, ChatSession
from wair.schemas.profile import Profile
from wair.schemas.wardrobe import WardrobeItem

Unsubscribe = Callable[[], None]


class InventoryStore(Protocol):
    async def add(self, user_id: str, item: WardrobeItem) -> WardrobeItem:
        ...

    async def list(self, user_id: str) -> List[WardrobeItem]:
        ...

    async def get(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        ...

    async def delete(self, user_id: str, item_id: str) -> bool:
        ...

    async def clear(self, user_id: str) -> int:
        ...

    def subscribe(self, user_id: str, callback: Callable[[List[WardrobeItem]], None]) -> Unsubscribe:
        ...


class ChatStore(Protocol):
    async def create_chat(self, user_id: str, title: str = "New Chat") -> ChatSession:
        ...

    async def list_chats(self, user_id: str) -> List[ChatSession]:
        ...

    async def get_chat(self, user_id: str, chat_id: str) -> Optional[ChatSession]:
        ...

    async def update_chat(self, user_id: str, chat_id: str, **fields) -> Optional[ChatSession]:
        ...

    async def delete_chat(self, user_id: str, chat_id: str) -> bool:
        ...

    async def append_message(self, user_id: str, chat_id: str, message: ChatMessage) -> ChatMessage:
        ...

    async def list_messages(self, user_id: str, chat_id: str) -> List[ChatMessage]:
        ...

    def subscribe(self, user_id: str, chat_id: str, callback: Callable[[List[ChatMessage]], None]) -> Unsubscribe:
        ...


class ProfileStore(Protocol):
    async def get(self, user_id: str) -> Profile:
        ...

    async def set(self, user_id: str, profile: Profile) -> Profile:
        ...
