"""In-memory account repository for testing."""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError

from prp.domain.model import Account
from prp.domain.model.common import utcnow
from prp.domain.repository import AccountRepository
from prp.domain.value import AccountId, Email, TrustState


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by email."""
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def find_by_trust_state(
        self, trust_state: TrustState, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        """List accounts in a trust state, oldest first."""
        accounts = [a for a in self._accounts.values() if a.trust_state == trust_state]
        accounts.sort(key=lambda a: a.created_at)
        return accounts[offset : offset + limit]

    async def add(self, account: Account) -> Account:
        """Insert a new account.

        Raises:
            IntegrityError: If the ID or email is already taken
        """
        if account.id in self._accounts:
            raise IntegrityError("Duplicate account", None, Exception())
        if any(a.email == account.email for a in self._accounts.values()):
            raise IntegrityError("Duplicate account email", None, Exception())
        self._accounts[account.id] = account
        return account

    async def update_trust_state(
        self, account_id: AccountId, trust_state: TrustState
    ) -> Optional[Account]:
        """Set an account's trust state."""
        account = self._accounts.get(account_id)
        if not account:
            return None
        updated = account.model_copy(
            update={"trust_state": trust_state, "updated_at": utcnow()}
        )
        self._accounts[account_id] = updated
        return updated

    async def record_endorsement(
        self, account_id: AccountId, now: datetime, period_days: int
    ) -> Optional[Account]:
        """Credit an endorser without awaiting between read and write."""
        account = self._accounts.get(account_id)
        if not account:
            return None
        if now >= account.period_reset_at:
            given = 1
            reset_at = now + timedelta(days=period_days)
        else:
            given = account.endorsements_given_this_period + 1
            reset_at = account.period_reset_at
        updated = account.model_copy(
            update={
                "reputation_score": account.reputation_score + 1,
                "endorsements_given_this_period": given,
                "period_reset_at": reset_at,
                "updated_at": now,
            }
        )
        self._accounts[account_id] = updated
        return updated
