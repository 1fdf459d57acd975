from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from wair.schemas.chat import ChatMessage
from wair.schemas.profile import Profile
from wair.schemas.wardrobe import WardrobeItem


@dataclass
class StylistState:
    """Everything one stylist request reads: who the user is, what they own
    and what was said so far. Loaded per request and passed explicitly."""

    wardrobe: List[WardrobeItem] = field(default_factory=list)
    profile: Profile = field(default_factory=Profile)
    history: List[ChatMessage] = field(default_factory=list)
    online: bool = True
