"""Redeem invite code use case."""

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from prp.application.usecase.base import BaseUseCase
from prp.domain.error import CodeNotFoundError
from prp.domain.service import InviteCodeService
from prp.domain.value import AccountId, AccountStatus, InviteToken


class RedeemInviteCodeRequest(BaseModel):
    """Redeem invite code request."""

    user_id: str
    code: str


class RedeemInviteCodeResponse(BaseModel):
    """Redeem invite code response."""

    code: str
    status: AccountStatus
    elevated: bool
    remaining_uses: int


class RedeemInviteCodeUseCase(BaseUseCase):
    """Use case for elevating an account with an invite code."""

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(self, request: RedeemInviteCodeRequest) -> RedeemInviteCodeResponse:
        """Execute redeem invite code.

        Codes are matched case-insensitively; a code that cannot be
        well-formed is reported as unknown.

        Raises:
            CodeNotFoundError: If the code does not exist
            CodeExpiredError: If the code has expired
            CodeExhaustedError: If the code has no uses left
            DomainMismatchError: If the caller's email domain is not allowed
        """
        try:
            code = InviteToken(request.code)
        except PydanticValidationError as e:
            raise CodeNotFoundError(request.code) from e

        result = await self.invite_code_service.redeem(code, AccountId(request.user_id))

        return RedeemInviteCodeResponse(
            code=result.code.root,
            status=AccountStatus.from_trust_state(result.trust_state),
            elevated=result.elevated,
            remaining_uses=result.remaining_uses,
        )
