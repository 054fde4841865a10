# ==============================================================================
# POLLS ENDPOINTS
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from pawsitiv.api.dependencies import CurrentUserID, PollServiceDep
from pawsitiv.core.constants import APIConstants, SuccessMessages
from pawsitiv.schemas.base import APIResponse
from pawsitiv.schemas.poll import AnswerCreate, AnswerResponse, PollCreate, PollResponse

router = APIRouter(prefix="/polls", tags=["Polls"])


@router.get("", response_model=APIResponse[List[PollResponse]], summary="List polls")
async def list_polls(
    service: PollServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.MAX_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> APIResponse[List[PollResponse]]:
    return APIResponse.ok(data=await service.list_polls(skip=skip, limit=limit))


@router.post(
    "",
    response_model=APIResponse[PollResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create poll",
)
async def create_poll(
    schema: PollCreate,
    user_id: CurrentUserID,
    service: PollServiceDep,
) -> APIResponse[PollResponse]:
    poll = await service.create(schema)
    return APIResponse.ok(data=poll, message=SuccessMessages.CREATED)


@router.get(
    "/{poll_id}/answers",
    response_model=APIResponse[List[AnswerResponse]],
    summary="List answers of a poll",
)
async def list_answers(
    poll_id: str,
    service: PollServiceDep,
) -> APIResponse[List[AnswerResponse]]:
    return APIResponse.ok(data=await service.get_answers(poll_id))


@router.post(
    "/{poll_id}/answers",
    response_model=APIResponse[AnswerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Answer a poll",
)
async def create_answer(
    poll_id: str,
    schema: AnswerCreate,
    user_id: CurrentUserID,
    service: PollServiceDep,
) -> APIResponse[AnswerResponse]:
    answer = await service.add_answer(poll_id, schema)
    return APIResponse.ok(data=answer, message=SuccessMessages.CREATED)
