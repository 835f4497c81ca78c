"""Issue invite code use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase
from prp.config import Settings
from prp.domain.error import NotAuthorizedError, ValidationError
from prp.domain.service import AccountService, InviteCodeService
from prp.domain.value import AccountId


class IssueInviteCodeRequest(BaseModel):
    """Issue invite code request."""

    user_id: str
    max_uses: int = 1
    invitee_domain: str | None = None
    expires_at: datetime | None = None


class IssueInviteCodeResponse(BaseModel):
    """Issue invite code response."""

    code: str
    max_uses: int
    invitee_domain: str | None
    expires_at: datetime | None
    created_at: datetime


class IssueInviteCodeUseCase(BaseUseCase):
    """Use case for minting invite codes.

    Moderators issue MOD-prefixed codes with any use count. Approved members
    may issue PRP-prefixed codes up to the configured member cap.
    """

    def __init__(
        self,
        invite_code_service: InviteCodeService,
        account_service: AccountService,
        settings: Settings,
    ) -> None:
        self.invite_code_service = invite_code_service
        self.account_service = account_service
        self.settings = settings

    async def execute(self, request: IssueInviteCodeRequest) -> IssueInviteCodeResponse:
        """Execute issue invite code.

        Raises:
            NotAuthorizedError: If the caller may not issue codes
            ValidationError: If a member asks for more uses than allowed
            CodeCollisionError: If no unique code could be generated
        """
        user_id = AccountId(request.user_id)
        invitations = self.settings.invitations

        if self.settings.is_moderator(user_id):
            prefix = invitations.moderator_code_prefix
        else:
            account = await self.account_service.find_by_id(user_id)
            if (
                not invitations.member_codes_enabled
                or not account
                or not account.is_approved
            ):
                logfire.warn("Invite code issue denied", user_id=user_id)
                raise NotAuthorizedError(
                    "invite code",
                    "new",
                    user_id,
                    reason="only moderators and approved members can issue codes",
                )
            if request.max_uses > invitations.member_max_uses:
                raise ValidationError(
                    f"Members can issue codes with at most "
                    f"{invitations.member_max_uses} uses"
                )
            prefix = invitations.code_prefix

        invite_code = await self.invite_code_service.issue(
            issued_by=user_id,
            max_uses=request.max_uses,
            invitee_domain=request.invitee_domain,
            expires_at=request.expires_at,
            prefix=prefix,
        )

        return IssueInviteCodeResponse(
            code=invite_code.code.root,
            max_uses=invite_code.max_uses,
            invitee_domain=invite_code.invitee_domain,
            expires_at=invite_code.expires_at,
            created_at=invite_code.created_at,
        )
