"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from prp.application.usecase.auth import (
    GetStatusRequest,
    GetStatusResponse,
    GetStatusUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutResponse,
    LogoutUseCase,
    ReapplyRequest,
    ReapplyResponse,
    ReapplyUseCase,
    SignupRequest,
    SignupUseCase,
)
from prp.config import Settings
from prp.domain.service import AuthService
from prp.domain.value import AccountStatus
from prp.interface.api.session import (
    clear_session_cookie,
    require_principal,
    set_session_cookie,
)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class SessionResponse(BaseModel):
    """Signed-in account. The token itself travels in the cookie only."""

    account_id: str
    email: str
    status: AccountStatus


@router.post(
    "/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignupRequest,
    response: Response,
    signup_use_case: FromDishka[SignupUseCase],
    settings: FromDishka[Settings],
) -> SessionResponse:
    """Register with email and password.

    The new account starts in pending_review and is signed in immediately,
    so the client can send the member to the review page.
    """
    result = await signup_use_case.execute(request)
    set_session_cookie(response, result.token, settings)
    return SessionResponse(
        account_id=result.account_id, email=result.email, status=result.status
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> SessionResponse:
    """Sign in with email and password.

    Examples:
        Response:
        {
            "account_id": "kq2...",
            "email": "alice@example.org",
            "status": "approved"
        }
    """
    result = await login_use_case.execute(request)
    set_session_cookie(response, result.token, settings)
    return SessionResponse(
        account_id=result.account_id, email=result.email, status=result.status
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> LogoutResponse:
    """Sign out and clear the session cookie. Safe to call when signed out."""
    principal = auth_service.current_principal(auth_token)
    result = await logout_use_case.execute(
        LogoutRequest(user_id=principal.id if principal else None)
    )
    clear_session_cookie(response)
    return result


@router.get("/status", response_model=GetStatusResponse)
async def get_status(
    get_status_use_case: FromDishka[GetStatusUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetStatusResponse:
    """Current caller's account status.

    Never fails for anonymous callers; they get status "unauthenticated".
    """
    return await get_status_use_case.execute(GetStatusRequest(token=auth_token))


@router.post("/reapply", response_model=ReapplyResponse)
async def reapply(
    reapply_use_case: FromDishka[ReapplyUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
) -> ReapplyResponse:
    """Put a rejected account back in the review queue."""
    principal = require_principal(auth_service, auth_token)
    return await reapply_use_case.execute(ReapplyRequest(user_id=principal.id))
