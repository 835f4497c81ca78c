"""Logout use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase
from prp.domain.service import AuthService
from prp.domain.value import AccountId


class LogoutRequest(BaseModel):
    """Logout request."""

    user_id: str | None  # None when the caller had no valid session


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool


class LogoutUseCase(BaseUseCase):
    """Use case for ending a session."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        if request.user_id is None:
            return LogoutResponse(success=True)
        outcome = await self.auth_service.sign_out(AccountId(request.user_id))
        return LogoutResponse(success=outcome.success)
