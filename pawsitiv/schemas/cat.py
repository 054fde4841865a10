# ==============================================================================
# CAT SCHEMAS - Cat Profiles and Images
# ==============================================================================

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field, field_validator

from pawsitiv.schemas.base import BaseSchema, TimestampSchema

HairLength = Literal["kurz", "mittel", "lang"]
Chonkiness = Literal["schlank", "normal", "mollig", "übergewichtig"]


class CatAppearance(BaseSchema):
    """How the cat looks. Every field is optional."""

    fur_color: Optional[str] = Field(None, max_length=50)
    fur_pattern: Optional[str] = Field(None, max_length=50)
    breed: Optional[str] = Field(None, max_length=100)
    hair_length: Optional[HairLength] = None
    chonkiness: Optional[Chonkiness] = None


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    seen: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class CatCreate(BaseSchema):
    """Schema for creating a cat profile."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Yuna"])
    location: str = Field(..., min_length=1, max_length=200, examples=["Besaid Island"])
    images: List[str] = Field(default_factory=list)
    personality_tags: List[str] = Field(default_factory=list)
    appearance: CatAppearance = Field(default_factory=CatAppearance)

    @field_validator("personality_tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)


class CatUpdate(BaseSchema):
    """Partial cat update. ``appearance`` replaces the stored value."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    images: Optional[List[str]] = None
    personality_tags: Optional[List[str]] = None
    appearance: Optional[CatAppearance] = None

    @field_validator("personality_tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class CatResponse(TimestampSchema):
    id: str
    name: str
    location: str
    images: List[str] = Field(default_factory=list)
    personality_tags: List[str] = Field(default_factory=list)
    appearance: CatAppearance = Field(default_factory=CatAppearance)


class CatImageResponse(TimestampSchema):
    """Metadata of a stored upload; the bytes are served separately."""

    id: str
    cat_id: str
    content_type: str
    size: int
    url: str
