"""Endorsement request entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from prp.domain.model.common import DomainModel, utcnow
from prp.domain.value import AccountId, EndorsementRequestId, EndorsementStatus


class EndorsementRequest(DomainModel):
    """A request from a not-yet-approved member to an approved member.

    Business rules:
    - At most one PENDING request exists per (requester, target) pair
    - ACCEPTED and DECLINED are terminal
    - Only the target may resolve a request
    """

    id: EndorsementRequestId
    requester_id: AccountId
    target_id: AccountId
    status: EndorsementStatus = EndorsementStatus.PENDING
    message: str = Field(default="", max_length=2000)
    created_at: datetime = Field(default_factory=utcnow)
    resolved_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == EndorsementStatus.PENDING
