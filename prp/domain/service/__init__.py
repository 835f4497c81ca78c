"""Domain services."""

from .account_service import AccountService
from .auth_service import AuthService, IdentityProvider
from .base import Service
from .endorsement_service import EndorsementService
from .invite_code_service import InviteCodeService, RedemptionResult
from .jwt_service import JWTService
from .press_release_service import PressReleaseService
from .search_service import SearchMatch, SearchService

__all__ = [
    "AccountService",
    "AuthService",
    "EndorsementService",
    "IdentityProvider",
    "InviteCodeService",
    "JWTService",
    "PressReleaseService",
    "RedemptionResult",
    "SearchMatch",
    "SearchService",
    "Service",
]
