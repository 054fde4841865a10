# ==============================================================================
# POLL MODELS - Community Polls and Answers
# ==============================================================================

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from pawsitiv.domain_models.base import SQLBase, TimestampMixin


class Poll(SQLBase, TimestampMixin):
    __tablename__ = "polls"

    question: Mapped[str] = mapped_column(String(500), nullable=False)


class Answer(SQLBase, TimestampMixin):
    __tablename__ = "answers"

    poll_id: Mapped[str] = mapped_column(
        ForeignKey("polls.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    text: Mapped[str] = mapped_column(String(1000), nullable=False)
