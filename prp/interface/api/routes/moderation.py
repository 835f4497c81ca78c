"""Moderation routes. Moderators only."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from prp.application.usecase.moderation import (
    GetReviewQueueRequest,
    GetReviewQueueResponse,
    GetReviewQueueUseCase,
    ModerateAccountRequest,
    ModerateAccountResponse,
    ModerateAccountUseCase,
    ModeratePressReleaseRequest,
    ModeratePressReleaseUseCase,
)
from prp.application.usecase.press_release import PressReleaseItem
from prp.domain.service import AuthService
from prp.domain.value import ModerationDecision
from prp.interface.api.session import require_principal

router = APIRouter(prefix="/moderation", tags=["moderation"], route_class=DishkaRoute)


class ModerationAPIRequest(BaseModel):
    """API request carrying a moderator decision."""

    decision: ModerationDecision


@router.get("/queue", response_model=GetReviewQueueResponse)
async def get_review_queue(
    queue_use_case: FromDishka[GetReviewQueueUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> GetReviewQueueResponse:
    """Accounts awaiting review and press releases awaiting moderation."""
    principal = require_principal(auth_service, auth_token)
    return await queue_use_case.execute(
        GetReviewQueueRequest(user_id=principal.id, limit=limit, offset=offset)
    )


@router.post("/accounts/{account_id}", response_model=ModerateAccountResponse)
async def moderate_account(
    account_id: str,
    request: ModerationAPIRequest,
    moderate_use_case: FromDishka[ModerateAccountUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> ModerateAccountResponse:
    """Approve or reject a member."""
    principal = require_principal(auth_service, auth_token)
    return await moderate_use_case.execute(
        ModerateAccountRequest(
            user_id=principal.id, account_id=account_id, decision=request.decision
        )
    )


@router.post("/press-releases/{press_release_id}", response_model=PressReleaseItem)
async def moderate_press_release(
    press_release_id: str,
    request: ModerationAPIRequest,
    moderate_use_case: FromDishka[ModeratePressReleaseUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> PressReleaseItem:
    """Publish or reject a press release."""
    principal = require_principal(auth_service, auth_token)
    return await moderate_use_case.execute(
        ModeratePressReleaseRequest(
            user_id=principal.id,
            press_release_id=press_release_id,
            decision=request.decision,
        )
    )
