"""Invite code entity.

Invite codes are one of the two peer elevation paths: redeeming a valid
code moves the redeemer's account straight to APPROVED.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from prp.domain.model.common import DomainModel, utcnow
from prp.domain.value import AccountId, InviteToken


class InviteCode(DomainModel):
    """Invite code entity.

    Business rules:
    - ``current_uses`` never exceeds ``max_uses``
    - The code deactivates itself once ``current_uses`` reaches ``max_uses``
    - A code past ``expires_at`` cannot be redeemed even while active
    - When ``invitee_domain`` is set, only emails on that domain may redeem
    """

    code: InviteToken
    issued_by: AccountId
    max_uses: int = Field(default=1, ge=1)
    current_uses: int = Field(default=0, ge=0)
    invitee_domain: Optional[str] = None  # Lowercase, no leading '@'
    expires_at: Optional[datetime] = None
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_uses(self) -> "InviteCode":
        """Validate the use counter stays within bounds."""
        if self.current_uses > self.max_uses:
            raise ValueError("current_uses cannot exceed max_uses")
        return self

    @property
    def remaining_uses(self) -> int:
        return self.max_uses - self.current_uses

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        """Check whether the code can still be redeemed at ``now``."""
        return self.active and self.remaining_uses > 0 and not self.is_expired(now)
