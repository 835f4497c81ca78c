"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from prp.domain.model.account import Account
from prp.domain.value import AccountId, Email, TrustState


class AccountRepository(ABC):
    """Repository for Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Find an account by principal ID.

        Args:
            account_id: The principal ID assigned by the identity provider

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Account | None:
        """Find an account by email address.

        Args:
            email: The normalised email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_trust_state(
        self, trust_state: TrustState, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        """List accounts in a trust state, oldest first.

        Args:
            trust_state: The trust state to filter by
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of accounts
        """
        pass

    @abstractmethod
    async def add(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: The account to insert

        Returns:
            The inserted account

        Raises:
            IntegrityError: If an account with this ID or email already exists
        """
        pass

    @abstractmethod
    async def update_trust_state(
        self, account_id: AccountId, trust_state: TrustState
    ) -> Account | None:
        """Set an account's trust state in a single write.

        Args:
            account_id: The account to update
            trust_state: The new trust state

        Returns:
            The updated account, or None if it does not exist
        """
        pass

    @abstractmethod
    async def record_endorsement(
        self, account_id: AccountId, now: datetime, period_days: int
    ) -> Account | None:
        """Credit an endorser in a single write.

        Bumps reputation and the per-period counter, starting a fresh period
        of ``period_days`` when the current one has elapsed at ``now``. The
        trust state is left untouched.

        Args:
            account_id: The endorsing account
            now: Time of the endorsement
            period_days: Length of a new period

        Returns:
            The updated account, or None if it does not exist
        """
        pass
