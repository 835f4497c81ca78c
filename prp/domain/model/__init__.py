"""Domain model entities for the Press Release Portal."""

from prp.domain.model.account import Account
from prp.domain.model.endorsement import EndorsementRequest
from prp.domain.model.invite_code import InviteCode
from prp.domain.model.press_release import PressRelease

__all__ = [
    "Account",
    "InviteCode",
    "EndorsementRequest",
    "PressRelease",
]
