"""Moderate account use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, require_moderator
from prp.config import Settings
from prp.domain.service import AccountService
from prp.domain.value import AccountId, AccountStatus, ModerationDecision


class ModerateAccountRequest(BaseModel):
    """Moderate account request."""

    user_id: str  # Moderator
    account_id: str
    decision: ModerationDecision


class ModerateAccountResponse(BaseModel):
    """Moderate account response."""

    account_id: str
    status: AccountStatus


class ModerateAccountUseCase(BaseUseCase):
    """Use case for a moderator approving or rejecting a member.

    Moderator decisions overwrite each other, last write wins.
    """

    def __init__(self, account_service: AccountService, settings: Settings) -> None:
        self.account_service = account_service
        self.settings = settings

    async def execute(self, request: ModerateAccountRequest) -> ModerateAccountResponse:
        """Execute moderate account.

        Raises:
            NotAuthorizedError: If the caller is not a moderator
            NotFoundError: If the account does not exist
        """
        require_moderator(self.settings, request.user_id, "account", request.account_id)

        account_id = AccountId(request.account_id)
        if request.decision == ModerationDecision.APPROVE:
            account = await self.account_service.moderator_approve(account_id)
        else:
            account = await self.account_service.moderator_reject(account_id)

        return ModerateAccountResponse(
            account_id=account.id,
            status=AccountStatus.from_trust_state(account.trust_state),
        )
