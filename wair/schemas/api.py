from typing import List, Optional

from pydantic import BaseModel, Field

from wair.schemas.chat import ChatMessage, ResolvedOutfit
from wair.schemas.profile import Profile
from wair.schemas.wardrobe import GarmentAnalysis, WardrobeItem


class ApiErrorOut(BaseModel):
    kind: str
    message: str


class ImageIn(BaseModel):
    image: str


class GarmentAnalysisOut(BaseModel):
    image: str
    analysis: GarmentAnalysis


class ResetOut(BaseModel):
    removed: int
    items: List[WardrobeItem]


class ChatCreateIn(BaseModel):
    title: Optional[str] = None


class MessageIn(BaseModel):
    text: str = ""
    image: Optional[str] = None


class ChatTurnOut(BaseModel):
    user_message: ChatMessage
    reply: ChatMessage
    error: Optional[ApiErrorOut] = None


class PhotoIn(BaseModel):
    photo: str


class ProfileUpdateOut(BaseModel):
    profile: Profile
    warning: Optional[str] = None
    error: Optional[ApiErrorOut] = None


class TryOnIn(BaseModel):
    item_ids: List[str] = Field(default_factory=list)
    outfit: Optional[ResolvedOutfit] = None
    photo: Optional[str] = None
    photo_index: int = 0


class TryOnOut(BaseModel):
    image: str
