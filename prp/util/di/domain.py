"""Domain layer DI providers."""

from dishka import Scope, provide

from prp.config import (
    AuthSettings,
    EndorsementSettings,
    InvitationSettings,
    SearchSettings,
    SubmissionSettings,
)
from prp.domain.repository import (
    AccountRepository,
    EndorsementRequestRepository,
    InviteCodeRepository,
    PressReleaseRepository,
)
from prp.domain.service import (
    AccountService,
    AuthService,
    EndorsementService,
    IdentityProvider,
    InviteCodeService,
    JWTService,
    PressReleaseService,
    SearchService,
)
from prp.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with the repository/session
    lifecycle. Each HTTP request gets fresh service instances sharing one
    transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT session token service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_auth_service(
        self, identity_provider: IdentityProvider, jwt_service: JWTService
    ) -> AuthService:
        """Provide authentication service backed by the identity provider."""
        return AuthService(identity_provider=identity_provider, jwt_service=jwt_service)

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        endorsement_settings: EndorsementSettings,
    ) -> AccountService:
        """Provide account state machine."""
        return AccountService(
            account_repository=account_repository,
            period_days=endorsement_settings.period_days,
        )

    @provide
    def get_invite_code_service(
        self,
        invite_code_repository: InviteCodeRepository,
        account_service: AccountService,
        invitation_settings: InvitationSettings,
    ) -> InviteCodeService:
        """Provide invite code service."""
        return InviteCodeService(
            invite_code_repository=invite_code_repository,
            account_service=account_service,
            settings=invitation_settings,
        )

    @provide
    def get_endorsement_service(
        self,
        endorsement_repository: EndorsementRequestRepository,
        account_service: AccountService,
        endorsement_settings: EndorsementSettings,
    ) -> EndorsementService:
        """Provide endorsement service."""
        return EndorsementService(
            endorsement_repository=endorsement_repository,
            account_service=account_service,
            settings=endorsement_settings,
        )

    @provide
    def get_press_release_service(
        self,
        press_release_repository: PressReleaseRepository,
        account_service: AccountService,
        submission_settings: SubmissionSettings,
    ) -> PressReleaseService:
        """Provide press release service."""
        return PressReleaseService(
            press_release_repository=press_release_repository,
            account_service=account_service,
            settings=submission_settings,
        )

    @provide
    def get_search_service(self, search_settings: SearchSettings) -> SearchService:
        """Provide fuzzy search service."""
        return SearchService(default_threshold=search_settings.threshold)
