from wair.stores.base import ChatStore, InventoryStore, ProfileStore
from wair.stores.in_memory import InMemoryChatStore, InMemoryInventoryStore, InMemoryProfileStore

__all__ = [
    "ChatStore",
    "InventoryStore",
    "ProfileStore",
    "InMemoryChatStore",
    "InMemoryInventoryStore",
    "InMemoryProfileStore",
]
