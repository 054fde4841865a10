# ==============================================================================
# POLL SCHEMAS
# ==============================================================================

from __future__ import annotations

from pydantic import Field

from pawsitiv.schemas.base import BaseSchema, TimestampSchema


class PollCreate(BaseSchema):
    question: str = Field(..., min_length=1, max_length=500)


class PollResponse(TimestampSchema):
    id: str
    question: str


class AnswerCreate(BaseSchema):
    text: str = Field(..., min_length=1, max_length=1000)


class AnswerResponse(TimestampSchema):
    id: str
    poll_id: str
    text: str
