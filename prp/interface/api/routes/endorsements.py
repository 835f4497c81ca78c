"""Endorsement request routes."""

from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from prp.application.usecase.endorsement import (
    EndorsementRequestItem,
    ListEndorsementsRequest,
    ListEndorsementsResponse,
    ListEndorsementsUseCase,
    RequestEndorsementRequest,
    RequestEndorsementUseCase,
    ResolveEndorsementRequest,
    ResolveEndorsementUseCase,
)
from prp.domain.service import AuthService
from prp.domain.value import EndorsementDecision, EndorsementStatus
from prp.interface.api.session import require_principal

router = APIRouter(
    prefix="/endorsements", tags=["endorsements"], route_class=DishkaRoute
)


class RequestEndorsementAPIRequest(BaseModel):
    """API request for asking a member to endorse the caller."""

    target: str = Field(min_length=1)  # Email address or account ID
    message: str | None = Field(default=None, max_length=2000)


class ResolveEndorsementAPIRequest(BaseModel):
    """API request for answering an endorsement request."""

    decision: EndorsementDecision


@router.post(
    "", response_model=EndorsementRequestItem, status_code=status.HTTP_201_CREATED
)
async def request_endorsement(
    request: RequestEndorsementAPIRequest,
    request_use_case: FromDishka[RequestEndorsementUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> EndorsementRequestItem:
    """Ask an approved member to vouch for the caller."""
    principal = require_principal(auth_service, auth_token)
    return await request_use_case.execute(
        RequestEndorsementRequest(
            user_id=principal.id, target=request.target, message=request.message
        )
    )


@router.get("", response_model=ListEndorsementsResponse)
async def list_endorsements(
    list_use_case: FromDishka[ListEndorsementsUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    direction: Literal["incoming", "outgoing"] = Query(default="incoming"),
    status_filter: EndorsementStatus | None = Query(
        default=EndorsementStatus.PENDING, alias="status"
    ),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListEndorsementsResponse:
    """List requests addressed to the caller, or made by them."""
    principal = require_principal(auth_service, auth_token)
    return await list_use_case.execute(
        ListEndorsementsRequest(
            user_id=principal.id,
            direction=direction,
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )


@router.post("/{request_id}/resolve", response_model=EndorsementRequestItem)
async def resolve_endorsement(
    request_id: str,
    request: ResolveEndorsementAPIRequest,
    resolve_use_case: FromDishka[ResolveEndorsementUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> EndorsementRequestItem:
    """Accept or decline a request addressed to the caller."""
    principal = require_principal(auth_service, auth_token)
    return await resolve_use_case.execute(
        ResolveEndorsementRequest(
            user_id=principal.id, request_id=request_id, decision=request.decision
        )
    )
