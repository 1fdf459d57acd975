from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gender: Optional[str] = None
    hair: Optional[str] = None
    skin_tone: Optional[str] = Field(None, alias="skinTone")
    body_type: Optional[str] = Field(None, alias="bodyType")
    summary: Optional[str] = None

    def prompt_context(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Profile(BaseModel):
    gallery: List[str] = Field(default_factory=list)
    attributes: Optional[ProfileAttributes] = None
