"""List endorsement requests use case."""

from typing import Literal

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase
from prp.application.usecase.endorsement.item import EndorsementRequestItem
from prp.domain.service import EndorsementService
from prp.domain.value import AccountId, EndorsementStatus


class ListEndorsementsRequest(BaseModel):
    """List endorsement requests request."""

    user_id: str
    direction: Literal["incoming", "outgoing"] = "incoming"
    # Incoming requests filter on this; None lists every status
    status: EndorsementStatus | None = EndorsementStatus.PENDING
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListEndorsementsResponse(BaseModel):
    """List endorsement requests response."""

    requests: list[EndorsementRequestItem]


class ListEndorsementsUseCase(BaseUseCase):
    """Use case for listing a member's incoming or outgoing requests."""

    def __init__(self, endorsement_service: EndorsementService) -> None:
        self.endorsement_service = endorsement_service

    async def execute(self, request: ListEndorsementsRequest) -> ListEndorsementsResponse:
        user_id = AccountId(request.user_id)
        if request.direction == "incoming":
            requests = await self.endorsement_service.list_incoming(
                user_id, request.status, request.limit, request.offset
            )
        else:
            requests = await self.endorsement_service.list_outgoing(
                user_id, request.limit, request.offset
            )

        return ListEndorsementsResponse(
            requests=[EndorsementRequestItem.from_domain(r) for r in requests]
        )
