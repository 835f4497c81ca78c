"""Repository interfaces for the Press Release Portal domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from prp.domain.repository.account import AccountRepository
from prp.domain.repository.endorsement import EndorsementRequestRepository
from prp.domain.repository.invite_code import InviteCodeRepository
from prp.domain.repository.press_release import PressReleaseRepository

__all__ = [
    "AccountRepository",
    "InviteCodeRepository",
    "EndorsementRequestRepository",
    "PressReleaseRepository",
]
