"""Get account status use case."""

from datetime import datetime

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase
from prp.config import Settings
from prp.domain.service import AccountService, AuthService
from prp.domain.value import AccountStatus


class GetStatusRequest(BaseModel):
    """Get status request."""

    token: str | None  # Session JWT, if any


class GetStatusResponse(BaseModel):
    """Current caller's status."""

    status: AccountStatus
    account_id: str | None = None
    email: str | None = None
    is_moderator: bool = False
    reputation_score: int | None = None
    created_at: datetime | None = None


class GetStatusUseCase(BaseUseCase):
    """Use case resolving who the caller is and what they may do.

    Replaces client-side auth listeners: every page asks for the status
    once per request instead of subscribing to auth changes.
    """

    def __init__(
        self,
        auth_service: AuthService,
        account_service: AccountService,
        settings: Settings,
    ) -> None:
        self.auth_service = auth_service
        self.account_service = account_service
        self.settings = settings

    async def execute(self, request: GetStatusRequest) -> GetStatusResponse:
        principal = self.auth_service.current_principal(request.token)
        if principal is None:
            return GetStatusResponse(status=AccountStatus.UNAUTHENTICATED)

        status = await self.account_service.status_of(principal.id)
        account = await self.account_service.find_by_id(principal.id)

        return GetStatusResponse(
            status=status,
            account_id=principal.id,
            email=principal.email.root,
            is_moderator=self.settings.is_moderator(principal.id),
            reputation_score=account.reputation_score if account else None,
            created_at=account.created_at if account else None,
        )
