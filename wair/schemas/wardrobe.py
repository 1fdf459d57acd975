from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, computed_field, field_validator

Category = Literal["Top", "Bottom", "Shoes", "Outerwear", "Dress", "Accessory"]
CATEGORIES: List[str] = ["Top", "Bottom", "Shoes", "Outerwear", "Dress", "Accessory"]

# Stripped, never blank.
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_search_key(color: str, subcategory: str, category: str) -> str:
    return f"{color} {subcategory} {category}".lower()


class WardrobeItemIn(BaseModel):
    category: Category
    subcategory: Name
    color: Name
    material: Optional[str] = None
    formality: int = Field(5, ge=1, le=10)
    image: Optional[str] = None
    description: Optional[str] = None


class WardrobeItem(BaseModel):
    # Frozen: edits are delete + recreate.
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    category: Category
    subcategory: Name
    color: Name
    material: Optional[str] = None
    formality: int = Field(5, ge=1, le=10)
    image: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)

    @computed_field  # type: ignore[misc]
    @property
    def search_key(self) -> str:
        return make_search_key(self.color, self.subcategory, self.category)

    @property
    def label(self) -> str:
        return f"{self.color} {self.subcategory}"

    @classmethod
    def from_input(cls, data: WardrobeItemIn) -> "WardrobeItem":
        return cls(**data.model_dump())


class GarmentAnalysis(BaseModel):
    category: Category
    subcategory: Name
    color: Name
    material: Optional[str] = None


class WardrobeInsights(BaseModel):
    style: str = ""
    palette: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)

    @field_validator("style", "palette", "missing", mode="before")
    @classmethod
    def _null_as_empty(cls, v, info):
        if v is None:
            return "" if info.field_name == "style" else []
        return v
