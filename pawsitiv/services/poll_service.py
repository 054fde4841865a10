# ==============================================================================
# POLL SERVICE - Community Polls and Answers
# ==============================================================================

from __future__ import annotations

from typing import Any, List

from pawsitiv.core.constants import DatabaseConstants, ErrorMessages
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.schemas.poll import AnswerCreate, AnswerResponse, PollCreate, PollResponse
from pawsitiv.services.base_service import BaseService, fetch_all


class PollService(BaseService[PollCreate, PollCreate, PollResponse]):
    """Polls own their answers; answers are addressed through the poll."""

    _not_found_message = ErrorMessages.POLL_NOT_FOUND

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.POLLS_COLLECTION)

    def _to_response(self, entity: Any) -> PollResponse:
        return PollResponse.model_validate(entity)

    async def list_polls(self, skip: int = 0, limit: int = 100) -> List[PollResponse]:
        return await self.get_all(skip=skip, limit=limit, sort_by="created_at")

    async def get_answers(self, poll_id: Any) -> List[AnswerResponse]:
        """
        Answers of a poll in submission order.

        Raises:
            NotFoundError: If poll not found
        """
        await self._get_entity(poll_id)
        answers = await fetch_all(
            self._adapter,
            DatabaseConstants.ANSWERS_COLLECTION,
            filters={"poll_id": str(poll_id)},
            sort_by="created_at",
        )
        return [AnswerResponse.model_validate(a) for a in answers]

    async def add_answer(self, poll_id: Any, schema: AnswerCreate) -> AnswerResponse:
        await self._get_entity(poll_id)
        answer = await self._adapter.create(
            DatabaseConstants.ANSWERS_COLLECTION,
            {"poll_id": str(poll_id), "text": schema.text},
        )
        return AnswerResponse.model_validate(answer)

    async def delete(self, id: Any) -> bool:
        await self._get_entity(id)
        await self._adapter.bulk_delete(
            DatabaseConstants.ANSWERS_COLLECTION,
            {"poll_id": str(id)},
        )
        return await super().delete(id)
