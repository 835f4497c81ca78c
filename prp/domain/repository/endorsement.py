"""Endorsement request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from prp.domain.model.endorsement import EndorsementRequest
from prp.domain.value import AccountId, EndorsementRequestId, EndorsementStatus


class EndorsementRequestRepository(ABC):
    """Repository for EndorsementRequest entity.

    Defines the contract for endorsement request persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, request_id: EndorsementRequestId
    ) -> EndorsementRequest | None:
        """Find an endorsement request by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending(self, requester_id: AccountId, target_id: AccountId) -> bool:
        """Check whether a pending request exists for a pair.

        Args:
            requester_id: The requesting account
            target_id: The target account

        Returns:
            True if a pending request exists, False otherwise
        """
        pass

    @abstractmethod
    async def add(self, request: EndorsementRequest) -> EndorsementRequest:
        """Insert a new endorsement request.

        Args:
            request: The request to insert

        Returns:
            The inserted request

        Raises:
            IntegrityError: If a pending request already exists for the pair
        """
        pass

    @abstractmethod
    async def resolve(
        self,
        request_id: EndorsementRequestId,
        status: EndorsementStatus,
        resolved_at: datetime,
    ) -> EndorsementRequest | None:
        """Move a pending request to a terminal status.

        The write is conditional on the request still being pending, so of
        two concurrent resolutions only one succeeds.

        Args:
            request_id: The request to resolve
            status: ACCEPTED or DECLINED
            resolved_at: Resolution timestamp

        Returns:
            The updated request, or None if it was not pending
        """
        pass

    @abstractmethod
    async def reopen(
        self, request_id: EndorsementRequestId, status: EndorsementStatus
    ) -> EndorsementRequest | None:
        """Return a resolved request to pending.

        Undoes a resolution whose follow-up work could not complete. The
        write is conditional on the request still having ``status``.

        Args:
            request_id: The request to reopen
            status: The status the resolution wrote

        Returns:
            The reopened request, or None if it no longer has that status
        """
        pass

    @abstractmethod
    async def find_by_target(
        self,
        target_id: AccountId,
        status: EndorsementStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EndorsementRequest]:
        """List requests addressed to an account, newest first.

        Args:
            target_id: The target account
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of requests
        """
        pass

    @abstractmethod
    async def find_by_requester(
        self, requester_id: AccountId, limit: int = 50, offset: int = 0
    ) -> list[EndorsementRequest]:
        """List requests made by an account, newest first.

        Args:
            requester_id: The requesting account
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of requests
        """
        pass
