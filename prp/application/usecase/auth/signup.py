"""Signup use case."""

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from prp.application.usecase.base import BaseUseCase
from prp.domain.error import AuthenticationFailedError, ValidationError
from prp.domain.service import AccountService, AuthService
from prp.domain.value import AccountStatus, Email


class SignupRequest(BaseModel):
    """Signup request."""

    email: str
    password: str = Field(min_length=1)


class SignupResponse(BaseModel):
    """Signup response."""

    token: str  # Session JWT for the auth cookie
    account_id: str
    email: str
    status: AccountStatus


class SignupUseCase(BaseUseCase):
    """Use case for registering a new member.

    Flow:
    1. Create credentials with the identity provider
    2. Create the account in PENDING_REVIEW
    3. Issue a session token
    """

    def __init__(self, auth_service: AuthService, account_service: AccountService) -> None:
        self.auth_service = auth_service
        self.account_service = account_service

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Execute signup.

        Raises:
            ValidationError: If the email is malformed
            AuthenticationFailedError: If the identity provider refuses
            DuplicateAccountError: If the principal already has an account
            DuplicateEmailError: If the email belongs to another account
        """
        try:
            email = Email(request.email)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid email address: {request.email}") from e

        with logfire.span("signup", email=email.root):
            outcome = await self.auth_service.sign_up(email, request.password)
            if not outcome.success or not outcome.principal:
                raise AuthenticationFailedError(outcome.error_message)

            account = await self.account_service.signup(
                outcome.principal.id, outcome.principal.email
            )
            token = self.auth_service.issue_session(outcome.principal)

            return SignupResponse(
                token=token,
                account_id=account.id,
                email=account.email.root,
                status=AccountStatus.from_trust_state(account.trust_state),
            )
