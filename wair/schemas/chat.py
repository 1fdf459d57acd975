from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wair.schemas.wardrobe import WardrobeItem

Role = Literal["user", "assistant"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Outfit(BaseModel):
    """An outfit as proposed by the model, items still free text."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    occasion: str = ""
    items: List[str] = Field(default_factory=list)
    reasoning: str = ""
    styling_tip: str = Field("", alias="stylingTip")

    @field_validator("name", "occasion", "reasoning", "styling_tip", mode="before")
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, v):
        if v is None:
            return []
        return [i for i in v if i is not None] if isinstance(v, list) else v


class ResolvedOutfit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    occasion: str = ""
    items: List[WardrobeItem] = Field(default_factory=list)
    reasoning: str = ""
    styling_tip: str = Field("", alias="stylingTip")


class StylistReply(BaseModel):
    """Structured result requested from the stylist prompts."""

    model_config = ConfigDict(populate_by_name=True)

    response_text: str = Field("", alias="responseText")
    outfits: List[Outfit] = Field(default_factory=list)

    @field_validator("response_text", mode="before")
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v

    @field_validator("outfits", mode="before")
    @classmethod
    def _null_outfits(cls, v):
        if v is None:
            return []
        return [o for o in v if o is not None] if isinstance(v, list) else v


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role
    text: Optional[str] = None
    image: Optional[str] = None
    outfits: List[ResolvedOutfit] = Field(default_factory=list)
    is_error: bool = False
    created_at: datetime = Field(default_factory=_now)


class ChatSession(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str = "New Chat"
    last_message: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
