"""PostgreSQL implementation of EndorsementRequest repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from prp.config import StoreSettings
from prp.domain.model import EndorsementRequest
from prp.domain.repository import EndorsementRequestRepository
from prp.domain.value import AccountId, EndorsementRequestId, EndorsementStatus
from prp.persistence.mappers import (
    endorsement_request_to_dict,
    row_to_endorsement_request,
)
from prp.persistence.tables import endorsement_requests_table
from prp.util.retry import retry_transient, store_errors, store_write


class PostgresEndorsementRequestRepository(EndorsementRequestRepository):
    """PostgreSQL implementation of EndorsementRequestRepository."""

    def __init__(self, session: AsyncSession, store_settings: StoreSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            store_settings: Retry policy for reads
        """
        self.session = session
        self.store_settings = store_settings

    @retry_transient
    async def find_by_id(
        self, request_id: EndorsementRequestId
    ) -> Optional[EndorsementRequest]:
        """Find an endorsement request by ID."""
        stmt = select(endorsement_requests_table).where(
            endorsement_requests_table.c.id == request_id
        )
        with store_errors("endorsement_requests.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_endorsement_request(dict(row)) if row else None

    @retry_transient
    async def exists_pending(self, requester_id: AccountId, target_id: AccountId) -> bool:
        """Check whether a pending request exists for a pair."""
        t = endorsement_requests_table
        stmt = select(t.c.id).where(
            and_(
                t.c.requester_id == requester_id,
                t.c.target_id == target_id,
                t.c.status == EndorsementStatus.PENDING.value,
            )
        )
        with store_errors("endorsement_requests.exists_pending"):
            result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, request: EndorsementRequest) -> EndorsementRequest:
        """Insert a new endorsement request.

        Raises:
            IntegrityError: If the partial unique index on pending pairs is hit
        """
        stmt = insert(endorsement_requests_table).values(
            **endorsement_request_to_dict(request)
        )
        with store_write(self.session, "endorsement_requests.add"):
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        return request

    async def resolve(
        self,
        request_id: EndorsementRequestId,
        status: EndorsementStatus,
        resolved_at: datetime,
    ) -> Optional[EndorsementRequest]:
        """Resolve a request with an UPDATE conditional on status = pending."""
        t = endorsement_requests_table
        stmt = (
            update(t)
            .where(
                and_(
                    t.c.id == request_id,
                    t.c.status == EndorsementStatus.PENDING.value,
                )
            )
            .values(status=status.value, resolved_at=resolved_at)
            .returning(*t.c)
        )
        with store_write(self.session, "endorsement_requests.resolve"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_endorsement_request(dict(row)) if row else None

    async def reopen(
        self, request_id: EndorsementRequestId, status: EndorsementStatus
    ) -> Optional[EndorsementRequest]:
        """Put a resolved request back to pending, conditional on its status."""
        t = endorsement_requests_table
        stmt = (
            update(t)
            .where(and_(t.c.id == request_id, t.c.status == status.value))
            .values(status=EndorsementStatus.PENDING.value, resolved_at=None)
            .returning(*t.c)
        )
        with store_write(self.session, "endorsement_requests.reopen"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_endorsement_request(dict(row)) if row else None

    @retry_transient
    async def find_by_target(
        self,
        target_id: AccountId,
        status: Optional[EndorsementStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EndorsementRequest]:
        """List requests addressed to an account, newest first."""
        t = endorsement_requests_table
        stmt = select(t).where(t.c.target_id == target_id)
        if status:
            stmt = stmt.where(t.c.status == status.value)
        stmt = stmt.order_by(t.c.created_at.desc()).limit(limit).offset(offset)
        with store_errors("endorsement_requests.find_by_target"):
            result = await self.session.execute(stmt)
        return [row_to_endorsement_request(dict(row)) for row in result.mappings().all()]

    @retry_transient
    async def find_by_requester(
        self, requester_id: AccountId, limit: int = 50, offset: int = 0
    ) -> list[EndorsementRequest]:
        """List requests made by an account, newest first."""
        t = endorsement_requests_table
        stmt = (
            select(t)
            .where(t.c.requester_id == requester_id)
            .order_by(t.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with store_errors("endorsement_requests.find_by_requester"):
            result = await self.session.execute(stmt)
        return [row_to_endorsement_request(dict(row)) for row in result.mappings().all()]
