"""Reapply use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase
from prp.domain.service import AccountService
from prp.domain.value import AccountId, AccountStatus


class ReapplyRequest(BaseModel):
    """Reapply request."""

    user_id: str


class ReapplyResponse(BaseModel):
    """Reapply response."""

    account_id: str
    status: AccountStatus


class ReapplyUseCase(BaseUseCase):
    """Use case for a rejected member asking to be reviewed again."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ReapplyRequest) -> ReapplyResponse:
        """Execute reapply.

        Raises:
            NotFoundError: If the caller has no account
            NotAuthorizedError: If the caller is already approved
        """
        account = await self.account_service.reapply(AccountId(request.user_id))
        return ReapplyResponse(
            account_id=account.id,
            status=AccountStatus.from_trust_state(account.trust_state),
        )
