"""Endorsement request view."""

from datetime import datetime

from pydantic import BaseModel

from prp.domain.model import EndorsementRequest
from prp.domain.value import EndorsementStatus


class EndorsementRequestItem(BaseModel):
    """Endorsement request as returned by the API."""

    id: str
    requester_id: str
    target_id: str
    status: EndorsementStatus
    message: str
    created_at: datetime
    resolved_at: datetime | None = None

    @classmethod
    def from_domain(cls, request: EndorsementRequest) -> "EndorsementRequestItem":
        return cls(
            id=str(request.id),
            requester_id=request.requester_id,
            target_id=request.target_id,
            status=request.status,
            message=request.message,
            created_at=request.created_at,
            resolved_at=request.resolved_at,
        )
