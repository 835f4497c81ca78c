"""List invite codes use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase
from prp.domain.service import InviteCodeService
from prp.domain.value import AccountId


class ListInviteCodesRequest(BaseModel):
    """List invite codes request."""

    user_id: str
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class InviteCodeItem(BaseModel):
    """Invite code as shown to its issuer."""

    code: str
    max_uses: int
    current_uses: int
    remaining_uses: int
    active: bool
    invitee_domain: str | None
    expires_at: datetime | None
    created_at: datetime


class ListInviteCodesResponse(BaseModel):
    """List invite codes response."""

    codes: list[InviteCodeItem]


class ListInviteCodesUseCase(BaseUseCase):
    """Use case for listing the codes a member has issued."""

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(self, request: ListInviteCodesRequest) -> ListInviteCodesResponse:
        codes = await self.invite_code_service.list_issued(
            AccountId(request.user_id), request.limit, request.offset
        )
        return ListInviteCodesResponse(
            codes=[
                InviteCodeItem(
                    code=c.code.root,
                    max_uses=c.max_uses,
                    current_uses=c.current_uses,
                    remaining_uses=c.remaining_uses,
                    active=c.active,
                    invitee_domain=c.invitee_domain,
                    expires_at=c.expires_at,
                    created_at=c.created_at,
                )
                for c in codes
            ]
        )
