"""Invite code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from prp.domain.model.invite_code import InviteCode
from prp.domain.value import AccountId, InviteToken


class InviteCodeRepository(ABC):
    """Repository for InviteCode entity.

    Defines the contract for invite code persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_code(self, code: InviteToken) -> InviteCode | None:
        """Find an invite code.

        Args:
            code: The invite code

        Returns:
            The invite code if found, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, invite_code: InviteCode) -> InviteCode | None:
        """Insert a newly issued invite code.

        Args:
            invite_code: The invite code to insert

        Returns:
            The inserted invite code, or None if the code is already taken
        """
        pass

    @abstractmethod
    async def try_consume_use(
        self, code: InviteToken, now: datetime
    ) -> InviteCode | None:
        """Atomically consume one use of a code.

        The increment only happens when the code is active, unexpired at
        ``now`` and below ``max_uses``. The code is deactivated in the same
        write when the increment reaches ``max_uses``. Two concurrent calls
        on a code with one remaining use yield exactly one success.

        Args:
            code: The invite code
            now: Time used for the expiry check

        Returns:
            The updated invite code, or None if no use could be consumed
        """
        pass

    @abstractmethod
    async def release_use(self, code: InviteToken) -> InviteCode | None:
        """Give back a use consumed by a redemption that could not complete.

        Reactivates the code if it was deactivated by that use.

        Args:
            code: The invite code

        Returns:
            The updated invite code, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_by_issuer(
        self, issued_by: AccountId, limit: int = 50, offset: int = 0
    ) -> list[InviteCode]:
        """List codes issued by an account, newest first.

        Args:
            issued_by: The issuing account
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invite codes
        """
        pass
