"""In-memory endorsement request repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from prp.domain.model import EndorsementRequest
from prp.domain.repository import EndorsementRequestRepository
from prp.domain.value import AccountId, EndorsementRequestId, EndorsementStatus


class InMemoryEndorsementRequestRepository(EndorsementRequestRepository):
    """In-memory implementation of EndorsementRequestRepository for testing."""

    def __init__(self) -> None:
        self._requests: dict[EndorsementRequestId, EndorsementRequest] = {}

    async def find_by_id(
        self, request_id: EndorsementRequestId
    ) -> Optional[EndorsementRequest]:
        """Find an endorsement request by ID."""
        return self._requests.get(request_id)

    async def exists_pending(self, requester_id: AccountId, target_id: AccountId) -> bool:
        """Check whether a pending request exists for a pair."""
        return any(
            r.requester_id == requester_id
            and r.target_id == target_id
            and r.is_pending
            for r in self._requests.values()
        )

    async def add(self, request: EndorsementRequest) -> EndorsementRequest:
        """Insert a new endorsement request.

        Raises:
            IntegrityError: If a pending request already exists for the pair
        """
        if request.is_pending and await self.exists_pending(
            request.requester_id, request.target_id
        ):
            raise IntegrityError("Duplicate pending endorsement request", None, Exception())
        self._requests[request.id] = request
        return request

    async def resolve(
        self,
        request_id: EndorsementRequestId,
        status: EndorsementStatus,
        resolved_at: datetime,
    ) -> Optional[EndorsementRequest]:
        """Resolve a request if it is still pending."""
        request = self._requests.get(request_id)
        if not request or not request.is_pending:
            return None

        updated = request.model_copy(
            update={"status": status, "resolved_at": resolved_at}
        )
        self._requests[request_id] = updated
        return updated

    async def reopen(
        self, request_id: EndorsementRequestId, status: EndorsementStatus
    ) -> Optional[EndorsementRequest]:
        """Put a resolved request back to pending if it still has ``status``."""
        request = self._requests.get(request_id)
        if not request or request.status != status:
            return None

        updated = request.model_copy(
            update={"status": EndorsementStatus.PENDING, "resolved_at": None}
        )
        self._requests[request_id] = updated
        return updated

    async def find_by_target(
        self,
        target_id: AccountId,
        status: Optional[EndorsementStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EndorsementRequest]:
        """List requests addressed to an account, newest first."""
        requests = [
            r
            for r in self._requests.values()
            if r.target_id == target_id and (status is None or r.status == status)
        ]
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return requests[offset : offset + limit]

    async def find_by_requester(
        self, requester_id: AccountId, limit: int = 50, offset: int = 0
    ) -> list[EndorsementRequest]:
        """List requests made by an account, newest first."""
        requests = [r for r in self._requests.values() if r.requester_id == requester_id]
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return requests[offset : offset + limit]
