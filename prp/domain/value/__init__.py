"""Domain value objects for the Press Release Portal."""

from prp.domain.value.identifiers import (
    AccountId,
    EndorsementRequestId,
    PressReleaseId,
)
from prp.domain.value.types import (
    AccountStatus,
    AuthOutcome,
    Email,
    EndorsementDecision,
    EndorsementStatus,
    InviteToken,
    ModerationDecision,
    PressReleaseStatus,
    Principal,
    SearchableField,
    SearchText,
    TrustState,
)

__all__ = [
    # Identifiers
    "AccountId",
    "PressReleaseId",
    "EndorsementRequestId",
    # Types
    "TrustState",
    "AccountStatus",
    "EndorsementStatus",
    "EndorsementDecision",
    "PressReleaseStatus",
    "ModerationDecision",
    "Email",
    "InviteToken",
    "SearchableField",
    "SearchText",
    "Principal",
    "AuthOutcome",
]
