"""Press release routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status

from prp.application.usecase.press_release import (
    DeletePressReleaseRequest,
    DeletePressReleaseResponse,
    DeletePressReleaseUseCase,
    EditPressReleaseRequest,
    EditPressReleaseUseCase,
    GetPressReleaseRequest,
    GetPressReleaseUseCase,
    ListMyPressReleasesRequest,
    ListMyPressReleasesUseCase,
    ListPressReleasesRequest,
    ListPressReleasesUseCase,
    PressReleaseFields,
    PressReleaseItem,
    PressReleaseListResponse,
    SubmitPressReleaseRequest,
    SubmitPressReleaseUseCase,
)
from prp.domain.service import AuthService
from prp.interface.api.session import require_principal

router = APIRouter(
    prefix="/press-releases", tags=["press releases"], route_class=DishkaRoute
)


@router.get("", response_model=PressReleaseListResponse)
async def list_press_releases(
    list_use_case: FromDishka[ListPressReleasesUseCase],
    q: str | None = Query(default=None, max_length=200),
    limit: int = Query(default=500, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> PressReleaseListResponse:
    """Browse approved press releases, optionally fuzzy-searched.

    Examples:
        GET /press-releases?q=nairobi
    """
    return await list_use_case.execute(
        ListPressReleasesRequest(q=q, limit=limit, offset=offset)
    )


@router.get("/mine", response_model=PressReleaseListResponse)
async def list_my_press_releases(
    list_use_case: FromDishka[ListMyPressReleasesUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    q: str | None = Query(default=None, max_length=200),
    limit: int = Query(default=500, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> PressReleaseListResponse:
    """The caller's own press releases in every status."""
    principal = require_principal(auth_service, auth_token)
    return await list_use_case.execute(
        ListMyPressReleasesRequest(
            user_id=principal.id, q=q, limit=limit, offset=offset
        )
    )


@router.post("", response_model=PressReleaseItem, status_code=status.HTTP_201_CREATED)
async def submit_press_release(
    request: PressReleaseFields,
    submit_use_case: FromDishka[SubmitPressReleaseUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> PressReleaseItem:
    """Submit a press release for moderation. Approved members only."""
    principal = require_principal(auth_service, auth_token)
    return await submit_use_case.execute(
        SubmitPressReleaseRequest(user_id=principal.id, fields=request)
    )


@router.get("/{press_release_id}", response_model=PressReleaseItem)
async def get_press_release(
    press_release_id: str,
    get_use_case: FromDishka[GetPressReleaseUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> PressReleaseItem:
    """Read one press release.

    Unapproved press releases are visible to their owner only.
    """
    principal = auth_service.current_principal(auth_token)
    return await get_use_case.execute(
        GetPressReleaseRequest(
            press_release_id=press_release_id,
            user_id=principal.id if principal else None,
        )
    )


@router.patch("/{press_release_id}", response_model=PressReleaseItem)
async def edit_press_release(
    press_release_id: str,
    request: PressReleaseFields,
    edit_use_case: FromDishka[EditPressReleaseUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> PressReleaseItem:
    """Edit the caller's own press release. Omitted fields are kept."""
    principal = require_principal(auth_service, auth_token)
    return await edit_use_case.execute(
        EditPressReleaseRequest(
            user_id=principal.id, press_release_id=press_release_id, fields=request
        )
    )


@router.delete("/{press_release_id}", response_model=DeletePressReleaseResponse)
async def delete_press_release(
    press_release_id: str,
    delete_use_case: FromDishka[DeletePressReleaseUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePressReleaseResponse:
    """Delete the caller's own press release."""
    principal = require_principal(auth_service, auth_token)
    return await delete_use_case.execute(
        DeletePressReleaseRequest(user_id=principal.id, press_release_id=press_release_id)
    )
