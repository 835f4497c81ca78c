"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from prp.config import (
    AuthSettings,
    EndorsementSettings,
    InvitationSettings,
    SearchSettings,
    Settings,
    StoreSettings,
    SubmissionSettings,
)
from prp.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    Each nested section is exposed on its own so services only see what they use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        return settings.store

    @provide
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations

    @provide
    def provide_endorsement_settings(self, settings: Settings) -> EndorsementSettings:
        return settings.endorsements

    @provide
    def provide_submission_settings(self, settings: Settings) -> SubmissionSettings:
        return settings.submissions

    @provide
    def provide_search_settings(self, settings: Settings) -> SearchSettings:
        return settings.search
