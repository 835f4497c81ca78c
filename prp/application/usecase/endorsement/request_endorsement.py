"""Request endorsement use case."""

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase
from prp.application.usecase.endorsement.item import EndorsementRequestItem
from prp.domain.service import EndorsementService
from prp.domain.value import AccountId


class RequestEndorsementRequest(BaseModel):
    """Request endorsement request."""

    user_id: str
    target: str  # Endorser's email address or account ID
    message: str | None = Field(default=None, max_length=2000)


class RequestEndorsementUseCase(BaseUseCase):
    """Use case for asking an approved member to vouch for the caller."""

    def __init__(self, endorsement_service: EndorsementService) -> None:
        self.endorsement_service = endorsement_service

    async def execute(self, request: RequestEndorsementRequest) -> EndorsementRequestItem:
        """Execute request endorsement.

        Raises:
            ValidationError: If the target is blank or malformed
            SelfEndorsementError: If the caller targets themselves
            NotAuthorizedError: If the caller is already approved
            TargetNotApprovedError: If no approved member matches the target
            DuplicatePendingRequestError: If a pending request already exists
        """
        created = await self.endorsement_service.create(
            AccountId(request.user_id), request.target, request.message
        )
        return EndorsementRequestItem.from_domain(created)
