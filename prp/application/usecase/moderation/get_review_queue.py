"""Get review queue use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase, require_moderator
from prp.application.usecase.press_release.item import PressReleaseItem
from prp.config import Settings
from prp.domain.service import AccountService, PressReleaseService
from prp.domain.value import TrustState


class GetReviewQueueRequest(BaseModel):
    """Get review queue request."""

    user_id: str  # Moderator
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class PendingAccountItem(BaseModel):
    """Account awaiting review."""

    account_id: str
    email: str
    company_domain: str | None
    created_at: datetime


class GetReviewQueueResponse(BaseModel):
    """Accounts and press releases awaiting a moderator."""

    accounts: list[PendingAccountItem]
    press_releases: list[PressReleaseItem]


class GetReviewQueueUseCase(BaseUseCase):
    """Use case for the moderator dashboard."""

    def __init__(
        self,
        account_service: AccountService,
        press_release_service: PressReleaseService,
        settings: Settings,
    ) -> None:
        self.account_service = account_service
        self.press_release_service = press_release_service
        self.settings = settings

    async def execute(self, request: GetReviewQueueRequest) -> GetReviewQueueResponse:
        """Execute get review queue.

        Raises:
            NotAuthorizedError: If the caller is not a moderator
        """
        require_moderator(self.settings, request.user_id, "review queue", "all")

        accounts = await self.account_service.list_by_trust_state(
            TrustState.PENDING_REVIEW, request.limit, request.offset
        )
        press_releases = await self.press_release_service.list_pending_moderation(
            request.limit, request.offset
        )

        return GetReviewQueueResponse(
            accounts=[
                PendingAccountItem(
                    account_id=a.id,
                    email=a.email.root,
                    company_domain=a.company_domain,
                    created_at=a.created_at,
                )
                for a in accounts
            ],
            press_releases=[PressReleaseItem.from_domain(pr) for pr in press_releases],
        )
