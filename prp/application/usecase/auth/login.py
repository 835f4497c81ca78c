"""Login use case."""

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from prp.application.usecase.base import BaseUseCase
from prp.domain.error import AuthenticationFailedError, ValidationError
from prp.domain.service import AccountService, AuthService
from prp.domain.value import AccountStatus, Email


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    account_id: str
    email: str
    status: AccountStatus


class LoginUseCase(BaseUseCase):
    """Use case for signing in with email and password."""

    def __init__(self, auth_service: AuthService, account_service: AccountService) -> None:
        self.auth_service = auth_service
        self.account_service = account_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login.

        The returned status tells the client where to send the member next:
        approved members to the portal, everyone else to the review page.

        Raises:
            AuthenticationFailedError: If the credentials are rejected
        """
        try:
            email = Email(request.email)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid email address: {request.email}") from e

        with logfire.span("login", email=email.root):
            outcome = await self.auth_service.sign_in(email, request.password)
            if not outcome.success or not outcome.principal:
                raise AuthenticationFailedError(outcome.error_message)

            principal = outcome.principal
            status = await self.account_service.status_of(principal.id)
            token = self.auth_service.issue_session(principal)

            logfire.info("Login succeeded", account_id=principal.id, status=status.value)
            return LoginResponse(
                token=token,
                account_id=principal.id,
                email=principal.email.root,
                status=status,
            )
