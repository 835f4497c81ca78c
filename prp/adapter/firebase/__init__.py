"""Firebase identity adapter."""

from .client import FirebaseIdentityProvider, MockIdentityProvider

__all__ = ["FirebaseIdentityProvider", "MockIdentityProvider"]
