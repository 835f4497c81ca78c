"""Application layer DI providers."""

from dishka import Scope, provide

from prp.application.usecase.auth import (
    GetStatusUseCase,
    LoginUseCase,
    LogoutUseCase,
    ReapplyUseCase,
    SignupUseCase,
)
from prp.application.usecase.endorsement import (
    ListEndorsementsUseCase,
    RequestEndorsementUseCase,
    ResolveEndorsementUseCase,
)
from prp.application.usecase.invite import (
    IssueInviteCodeUseCase,
    ListInviteCodesUseCase,
    RedeemInviteCodeUseCase,
)
from prp.application.usecase.moderation import (
    GetReviewQueueUseCase,
    ModerateAccountUseCase,
    ModeratePressReleaseUseCase,
)
from prp.application.usecase.press_release import (
    DeletePressReleaseUseCase,
    EditPressReleaseUseCase,
    GetPressReleaseUseCase,
    ListMyPressReleasesUseCase,
    ListPressReleasesUseCase,
    SubmitPressReleaseUseCase,
)
from prp.config import Settings
from prp.domain.service import (
    AccountService,
    AuthService,
    EndorsementService,
    InviteCodeService,
    PressReleaseService,
    SearchService,
)
from prp.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_signup_use_case(
        self, auth_service: AuthService, account_service: AccountService
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(auth_service=auth_service, account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, auth_service: AuthService, account_service: AccountService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service, account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, auth_service: AuthService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(auth_service=auth_service)

    @provide(scope=Scope.REQUEST)
    def get_status_use_case(
        self,
        auth_service: AuthService,
        account_service: AccountService,
        settings: Settings,
    ) -> GetStatusUseCase:
        """Provide get status use case."""
        return GetStatusUseCase(
            auth_service=auth_service,
            account_service=account_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_reapply_use_case(self, account_service: AccountService) -> ReapplyUseCase:
        """Provide reapply use case."""
        return ReapplyUseCase(account_service=account_service)

    # Invite code use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_invite_code_use_case(
        self,
        invite_code_service: InviteCodeService,
        account_service: AccountService,
        settings: Settings,
    ) -> IssueInviteCodeUseCase:
        """Provide issue invite code use case."""
        return IssueInviteCodeUseCase(
            invite_code_service=invite_code_service,
            account_service=account_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_code_use_case(
        self, invite_code_service: InviteCodeService
    ) -> RedeemInviteCodeUseCase:
        """Provide redeem invite code use case."""
        return RedeemInviteCodeUseCase(invite_code_service=invite_code_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invite_codes_use_case(
        self, invite_code_service: InviteCodeService
    ) -> ListInviteCodesUseCase:
        """Provide list invite codes use case."""
        return ListInviteCodesUseCase(invite_code_service=invite_code_service)

    # Endorsement use cases
    @provide(scope=Scope.REQUEST)
    def get_request_endorsement_use_case(
        self, endorsement_service: EndorsementService
    ) -> RequestEndorsementUseCase:
        """Provide request endorsement use case."""
        return RequestEndorsementUseCase(endorsement_service=endorsement_service)

    @provide(scope=Scope.REQUEST)
    def get_resolve_endorsement_use_case(
        self, endorsement_service: EndorsementService
    ) -> ResolveEndorsementUseCase:
        """Provide resolve endorsement use case."""
        return ResolveEndorsementUseCase(endorsement_service=endorsement_service)

    @provide(scope=Scope.REQUEST)
    def get_list_endorsements_use_case(
        self, endorsement_service: EndorsementService
    ) -> ListEndorsementsUseCase:
        """Provide list endorsements use case."""
        return ListEndorsementsUseCase(endorsement_service=endorsement_service)

    # Press release use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_press_release_use_case(
        self, press_release_service: PressReleaseService
    ) -> SubmitPressReleaseUseCase:
        """Provide submit press release use case."""
        return SubmitPressReleaseUseCase(press_release_service=press_release_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_press_release_use_case(
        self, press_release_service: PressReleaseService
    ) -> EditPressReleaseUseCase:
        """Provide edit press release use case."""
        return EditPressReleaseUseCase(press_release_service=press_release_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_press_release_use_case(
        self, press_release_service: PressReleaseService
    ) -> DeletePressReleaseUseCase:
        """Provide delete press release use case."""
        return DeletePressReleaseUseCase(press_release_service=press_release_service)

    @provide(scope=Scope.REQUEST)
    def get_press_release_use_case(
        self, press_release_service: PressReleaseService
    ) -> GetPressReleaseUseCase:
        """Provide get press release use case."""
        return GetPressReleaseUseCase(press_release_service=press_release_service)

    @provide(scope=Scope.REQUEST)
    def get_list_press_releases_use_case(
        self,
        press_release_service: PressReleaseService,
        search_service: SearchService,
        settings: Settings,
    ) -> ListPressReleasesUseCase:
        """Provide public press release listing use case."""
        return ListPressReleasesUseCase(
            press_release_service=press_release_service,
            search_service=search_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_press_releases_use_case(
        self,
        press_release_service: PressReleaseService,
        search_service: SearchService,
        settings: Settings,
    ) -> ListMyPressReleasesUseCase:
        """Provide owner press release listing use case."""
        return ListMyPressReleasesUseCase(
            press_release_service=press_release_service,
            search_service=search_service,
            settings=settings,
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_moderate_account_use_case(
        self, account_service: AccountService, settings: Settings
    ) -> ModerateAccountUseCase:
        """Provide moderate account use case."""
        return ModerateAccountUseCase(account_service=account_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_moderate_press_release_use_case(
        self, press_release_service: PressReleaseService, settings: Settings
    ) -> ModeratePressReleaseUseCase:
        """Provide moderate press release use case."""
        return ModeratePressReleaseUseCase(
            press_release_service=press_release_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_review_queue_use_case(
        self,
        account_service: AccountService,
        press_release_service: PressReleaseService,
        settings: Settings,
    ) -> GetReviewQueueUseCase:
        """Provide moderator review queue use case."""
        return GetReviewQueueUseCase(
            account_service=account_service,
            press_release_service=press_release_service,
            settings=settings,
        )
