"""Session cookie handling."""

from fastapi import Response

from prp.config import Settings
from prp.domain.error import NotAuthenticatedError
from prp.domain.service import AuthService
from prp.domain.value import Principal

COOKIE_NAME = "auth_token"


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Store the session JWT in an HTTP-only cookie."""
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=COOKIE_NAME, path="/")


def require_principal(auth_service: AuthService, auth_token: str | None) -> Principal:
    """Resolve the signed-in principal.

    Raises:
        NotAuthenticatedError: If there is no valid session cookie
    """
    principal = auth_service.current_principal(auth_token)
    if principal is None:
        raise NotAuthenticatedError()
    return principal
