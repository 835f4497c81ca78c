"""Resolve endorsement use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, parse_id
from prp.application.usecase.endorsement.item import EndorsementRequestItem
from prp.domain.service import EndorsementService
from prp.domain.value import AccountId, EndorsementDecision, EndorsementRequestId


class ResolveEndorsementRequest(BaseModel):
    """Resolve endorsement request."""

    user_id: str
    request_id: str
    decision: EndorsementDecision


class ResolveEndorsementUseCase(BaseUseCase):
    """Use case for an endorser accepting or declining a request."""

    def __init__(self, endorsement_service: EndorsementService) -> None:
        self.endorsement_service = endorsement_service

    async def execute(self, request: ResolveEndorsementRequest) -> EndorsementRequestItem:
        """Execute resolve endorsement.

        Accepting elevates the requester to APPROVED.

        Raises:
            NotFoundError: If the request does not exist
            NotAuthorizedError: If the caller is not the request's target
            AlreadyResolvedError: If the request was already resolved
            EndorsementQuotaExceededError: If the caller's quota is used up
        """
        resolved = await self.endorsement_service.resolve(
            EndorsementRequestId(parse_id(request.request_id, "Endorsement request")),
            AccountId(request.user_id),
            request.decision,
        )
        return EndorsementRequestItem.from_domain(resolved)
