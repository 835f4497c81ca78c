"""PostgreSQL implementation of Account repository."""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import case, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from prp.config import StoreSettings
from prp.domain.model import Account
from prp.domain.model.common import utcnow
from prp.domain.repository import AccountRepository
from prp.domain.value import AccountId, Email, TrustState
from prp.persistence.mappers import account_to_dict, row_to_account
from prp.persistence.tables import accounts_table
from prp.util.retry import retry_transient, store_errors, store_write


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession, store_settings: StoreSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            store_settings: Retry policy for reads
        """
        self.session = session
        self.store_settings = store_settings

    @retry_transient
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by principal ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        with store_errors("accounts.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    @retry_transient
    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by email address."""
        stmt = select(accounts_table).where(accounts_table.c.email == email.root)
        with store_errors("accounts.find_by_email"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    @retry_transient
    async def find_by_trust_state(
        self, trust_state: TrustState, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        """List accounts in a trust state, oldest first."""
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.trust_state == trust_state.value)
            .order_by(accounts_table.c.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        with store_errors("accounts.find_by_trust_state"):
            result = await self.session.execute(stmt)
        return [row_to_account(dict(row)) for row in result.mappings().all()]

    async def add(self, account: Account) -> Account:
        """Insert a new account.

        Raises:
            IntegrityError: If an account with this ID or email already exists
        """
        stmt = insert(accounts_table).values(**account_to_dict(account))
        with store_write(self.session, "accounts.add"):
            # Savepoint keeps the request transaction usable after a conflict
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        return account

    async def update_trust_state(
        self, account_id: AccountId, trust_state: TrustState
    ) -> Optional[Account]:
        """Set an account's trust state in a single UPDATE."""
        stmt = (
            update(accounts_table)
            .where(accounts_table.c.id == account_id)
            .values(trust_state=trust_state.value, updated_at=utcnow())
            .returning(*accounts_table.c)
        )
        with store_write(self.session, "accounts.update_trust_state"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def record_endorsement(
        self, account_id: AccountId, now: datetime, period_days: int
    ) -> Optional[Account]:
        """Credit an endorser with one UPDATE ... RETURNING.

        The counters are computed from the stored row, so concurrent credits
        all land and a concurrent trust state change is never overwritten.
        """
        t = accounts_table
        elapsed = t.c.period_reset_at <= now
        stmt = (
            update(t)
            .where(t.c.id == account_id)
            .values(
                reputation_score=t.c.reputation_score + 1,
                endorsements_given_this_period=case(
                    (elapsed, 1), else_=t.c.endorsements_given_this_period + 1
                ),
                period_reset_at=case(
                    (elapsed, now + timedelta(days=period_days)),
                    else_=t.c.period_reset_at,
                ),
                updated_at=now,
            )
            .returning(*t.c)
        )
        with store_write(self.session, "accounts.record_endorsement"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None
