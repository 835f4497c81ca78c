"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .endorsement import InMemoryEndorsementRequestRepository
from .invite_code import InMemoryInviteCodeRepository
from .press_release import InMemoryPressReleaseRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryEndorsementRequestRepository",
    "InMemoryInviteCodeRepository",
    "InMemoryPressReleaseRepository",
]
