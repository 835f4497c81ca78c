"""Account aggregate root.

One account exists per authenticated principal. It is created at signup in
PENDING_REVIEW and is never deleted.
"""

from datetime import datetime, timedelta

from pydantic import Field

from prp.domain.model.common import DomainModel, utcnow
from prp.domain.value import AccountId, Email, TrustState


class Account(DomainModel):
    """Account aggregate root.

    Only the account state machine changes ``trust_state``. Reputation and
    the per-period endorsement counter are bumped when the account endorses
    someone else.
    """

    id: AccountId
    email: Email
    trust_state: TrustState = TrustState.PENDING_REVIEW
    reputation_score: int = Field(default=0, ge=0)
    endorsements_given_this_period: int = Field(default=0, ge=0)
    period_reset_at: datetime = Field(default_factory=lambda: utcnow() + timedelta(days=30))
    company_domain: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_approved(self) -> bool:
        return self.trust_state == TrustState.APPROVED
