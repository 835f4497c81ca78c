"""Invite code routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from prp.application.usecase.invite import (
    IssueInviteCodeRequest,
    IssueInviteCodeResponse,
    IssueInviteCodeUseCase,
    ListInviteCodesRequest,
    ListInviteCodesResponse,
    ListInviteCodesUseCase,
    RedeemInviteCodeRequest,
    RedeemInviteCodeResponse,
    RedeemInviteCodeUseCase,
)
from prp.domain.service import AuthService
from prp.interface.api.session import require_principal

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class IssueInviteCodeAPIRequest(BaseModel):
    """API request for issuing an invite code."""

    max_uses: int = Field(default=1, ge=1)
    invitee_domain: str | None = None
    expires_at: datetime | None = None


class RedeemInviteCodeAPIRequest(BaseModel):
    """API request for redeeming an invite code."""

    code: str = Field(min_length=1, max_length=64)


@router.post(
    "", response_model=IssueInviteCodeResponse, status_code=status.HTTP_201_CREATED
)
async def issue_invite_code(
    request: IssueInviteCodeAPIRequest,
    issue_use_case: FromDishka[IssueInviteCodeUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> IssueInviteCodeResponse:
    """Issue an invite code. Moderators and approved members only."""
    principal = require_principal(auth_service, auth_token)
    return await issue_use_case.execute(
        IssueInviteCodeRequest(
            user_id=principal.id,
            max_uses=request.max_uses,
            invitee_domain=request.invitee_domain,
            expires_at=request.expires_at,
        )
    )


@router.get("", response_model=ListInviteCodesResponse)
async def list_invite_codes(
    list_use_case: FromDishka[ListInviteCodesUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListInviteCodesResponse:
    """List the codes the caller has issued, newest first."""
    principal = require_principal(auth_service, auth_token)
    return await list_use_case.execute(
        ListInviteCodesRequest(user_id=principal.id, limit=limit, offset=offset)
    )


@router.post("/redeem", response_model=RedeemInviteCodeResponse)
async def redeem_invite_code(
    request: RedeemInviteCodeAPIRequest,
    redeem_use_case: FromDishka[RedeemInviteCodeUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> RedeemInviteCodeResponse:
    """Redeem an invite code, approving the caller's account."""
    principal = require_principal(auth_service, auth_token)
    return await redeem_use_case.execute(
        RedeemInviteCodeRequest(user_id=principal.id, code=request.code)
    )
