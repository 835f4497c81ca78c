"""PostgreSQL implementation of InviteCode repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, case, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from prp.config import StoreSettings
from prp.domain.model import InviteCode
from prp.domain.repository import InviteCodeRepository
from prp.domain.value import AccountId, InviteToken
from prp.persistence.mappers import invite_code_to_dict, row_to_invite_code
from prp.persistence.tables import invite_codes_table
from prp.util.retry import retry_transient, store_errors, store_write


class PostgresInviteCodeRepository(InviteCodeRepository):
    """PostgreSQL implementation of InviteCodeRepository."""

    def __init__(self, session: AsyncSession, store_settings: StoreSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            store_settings: Retry policy for reads
        """
        self.session = session
        self.store_settings = store_settings

    @retry_transient
    async def find_by_code(self, code: InviteToken) -> Optional[InviteCode]:
        """Find an invite code."""
        stmt = select(invite_codes_table).where(invite_codes_table.c.code == code.root)
        with store_errors("invite_codes.find_by_code"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    async def add(self, invite_code: InviteCode) -> Optional[InviteCode]:
        """Insert a newly issued invite code.

        A clash on the code itself is skipped with ON CONFLICT DO NOTHING and
        reported as None. Any other constraint violation raises.
        """
        stmt = (
            insert(invite_codes_table)
            .values(**invite_code_to_dict(invite_code))
            .on_conflict_do_nothing(index_elements=["code"])
            .returning(invite_codes_table.c.code)
        )
        with store_write(self.session, "invite_codes.add"):
            result = await self.session.execute(stmt)
        return invite_code if result.first() else None

    async def try_consume_use(
        self, code: InviteToken, now: datetime
    ) -> Optional[InviteCode]:
        """Consume one use with a single conditional UPDATE ... RETURNING.

        Postgres row locking serialises concurrent updates of the same code,
        and the WHERE clause is re-evaluated against the committed row, so
        the last use can only be taken once.
        """
        t = invite_codes_table
        stmt = (
            update(t)
            .where(
                and_(
                    t.c.code == code.root,
                    t.c.active.is_(True),
                    t.c.current_uses < t.c.max_uses,
                    or_(t.c.expires_at.is_(None), t.c.expires_at > now),
                )
            )
            .values(
                current_uses=t.c.current_uses + 1,
                active=case((t.c.current_uses + 1 >= t.c.max_uses, False), else_=True),
            )
            .returning(*t.c)
        )
        with store_write(self.session, "invite_codes.try_consume_use"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    async def release_use(self, code: InviteToken) -> Optional[InviteCode]:
        """Give back one consumed use and reactivate the code."""
        t = invite_codes_table
        stmt = (
            update(t)
            .where(and_(t.c.code == code.root, t.c.current_uses > 0))
            .values(current_uses=t.c.current_uses - 1, active=True)
            .returning(*t.c)
        )
        with store_write(self.session, "invite_codes.release_use"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    @retry_transient
    async def find_by_issuer(
        self, issued_by: AccountId, limit: int = 50, offset: int = 0
    ) -> list[InviteCode]:
        """List codes issued by an account, newest first."""
        stmt = (
            select(invite_codes_table)
            .where(invite_codes_table.c.issued_by == issued_by)
            .order_by(invite_codes_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with store_errors("invite_codes.find_by_issuer"):
            result = await self.session.execute(stmt)
        return [row_to_invite_code(dict(row)) for row in result.mappings().all()]
