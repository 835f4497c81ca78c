"""Authentication domain service."""

from abc import ABC, abstractmethod

import logfire

from prp.domain.value import AccountId, AuthOutcome, Email, Principal
from prp.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class IdentityProvider(ABC):
    """Identity collaborator that verifies credentials.

    Outcomes are opaque to the portal: success plus a principal, or failure
    plus a human-readable message.
    """

    @abstractmethod
    async def sign_up(self, email: Email, password: str) -> AuthOutcome:
        """Register new credentials."""
        pass

    @abstractmethod
    async def sign_in(self, email: Email, password: str) -> AuthOutcome:
        """Verify existing credentials."""
        pass

    @abstractmethod
    async def sign_out(self, principal_id: AccountId) -> AuthOutcome:
        """End the principal's provider session."""
        pass


class AuthService(Service):
    """Domain service coordinating the identity provider and session tokens."""

    def __init__(
        self, identity_provider: IdentityProvider, jwt_service: JWTService
    ) -> None:
        """Initialize auth service.

        Args:
            identity_provider: Credential verifying collaborator
            jwt_service: Session token service
        """
        self.identity_provider = identity_provider
        self.jwt_service = jwt_service

    async def sign_up(self, email: Email, password: str) -> AuthOutcome:
        with logfire.span("auth_service.sign_up", email=email.root):
            outcome = await self.identity_provider.sign_up(email, password)
            if not outcome.success:
                logfire.warn(
                    "Sign up failed", email=email.root, error=outcome.error_message
                )
            return outcome

    async def sign_in(self, email: Email, password: str) -> AuthOutcome:
        with logfire.span("auth_service.sign_in", email=email.root):
            outcome = await self.identity_provider.sign_in(email, password)
            if not outcome.success:
                logfire.warn(
                    "Sign in failed", email=email.root, error=outcome.error_message
                )
            return outcome

    async def sign_out(self, principal_id: AccountId) -> AuthOutcome:
        with logfire.span("auth_service.sign_out", account_id=principal_id):
            return await self.identity_provider.sign_out(principal_id)

    def issue_session(self, principal: Principal) -> str:
        """Create a session token for an authenticated principal."""
        return self.jwt_service.create_token(principal.id, principal.email.root)

    def current_principal(self, token: str | None) -> Principal | None:
        """Resolve the principal behind a session token.

        Missing, expired or tampered tokens resolve to None, meaning the
        caller is unauthenticated.
        """
        if not token:
            return None

        try:
            payload = self.jwt_service.verify_token(token)
        except JWTError as e:
            logfire.debug("Treating caller as unauthenticated", error=str(e))
            return None

        return Principal(id=AccountId(payload.user_id), email=Email(payload.email))
