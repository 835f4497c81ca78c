"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from prp.adapter.firebase import FirebaseIdentityProvider
from prp.config import AuthSettings
from prp.domain.service import IdentityProvider
from prp.util.di.base import ProviderBase
from prp.util.error import ConfigurationError


class IdentityProviderProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProviderProvider(IdentityProviderProvider):
    """Production identity provider backed by Firebase Authentication."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(self, auth_settings: AuthSettings) -> IdentityProvider:
        """Provide Firebase identity provider.

        Raises:
            ConfigurationError: If the Firebase API key is not configured
        """
        firebase = auth_settings.firebase
        if not firebase.api_key:
            raise ConfigurationError("Firebase API key must be configured")

        return FirebaseIdentityProvider(
            api_key=firebase.api_key,
            base_url=firebase.base_url,
            timeout=firebase.timeout_seconds,
        )
