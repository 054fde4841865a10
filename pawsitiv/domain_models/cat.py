# ==============================================================================
# CAT MODELS - Street-Cat Profiles and Their Images
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import JSON, ForeignKey, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from pawsitiv.domain_models.base import SQLBase, TimestampMixin


class Cat(SQLBase, TimestampMixin):
    """
    Street-cat profile.

    Attributes:
        name: Cat name
        location: Where the cat is usually found
        images: Image URLs, including uploads served from ``/api/cats``
        personality_tags: Free-form tags ("verspielt", "neugierig", ...)
        appearance: fur_color, fur_pattern, breed, hair_length, chonkiness
    """

    __tablename__ = "cats"

    name: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    location: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    images: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    personality_tags: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    appearance: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        default=dict,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Cat(id={self.id}, name={self.name})>"


class CatImage(SQLBase, TimestampMixin):
    """Compressed uploaded image stored in the database."""

    __tablename__ = "cat_images"

    cat_id: Mapped[str] = mapped_column(
        ForeignKey("cats.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
