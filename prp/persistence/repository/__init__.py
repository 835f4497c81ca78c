"""PostgreSQL repository implementations."""

from prp.persistence.repository.account import PostgresAccountRepository
from prp.persistence.repository.endorsement import (
    PostgresEndorsementRequestRepository,
)
from prp.persistence.repository.invite_code import PostgresInviteCodeRepository
from prp.persistence.repository.press_release import PostgresPressReleaseRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresInviteCodeRepository",
    "PostgresEndorsementRequestRepository",
    "PostgresPressReleaseRepository",
]
