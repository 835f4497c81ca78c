"""Press release repository interface."""

from abc import ABC, abstractmethod

from prp.domain.model.press_release import PressRelease
from prp.domain.value import AccountId, PressReleaseId, PressReleaseStatus


class PressReleaseRepository(ABC):
    """Repository for PressRelease aggregate.

    Defines the contract for press release persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, press_release_id: PressReleaseId) -> PressRelease | None:
        """Find a press release by ID.

        Args:
            press_release_id: The press release's unique identifier

        Returns:
            The press release if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, press_release: PressRelease) -> PressRelease:
        """Save a press release (create or update).

        Args:
            press_release: The press release to save

        Returns:
            The saved press release
        """
        pass

    @abstractmethod
    async def delete(self, press_release_id: PressReleaseId) -> bool:
        """Hard delete a press release.

        Args:
            press_release_id: The press release to delete

        Returns:
            True if a record was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def update_status(
        self, press_release_id: PressReleaseId, status: PressReleaseStatus
    ) -> PressRelease | None:
        """Set a press release's moderation status.

        Args:
            press_release_id: The press release to update
            status: The new status

        Returns:
            The updated press release, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_by_status(
        self, status: PressReleaseStatus, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List press releases in a status, newest first.

        Args:
            status: The status to filter by
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of press releases
        """
        pass

    @abstractmethod
    async def find_by_owner(
        self, owner_id: AccountId, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List all of an owner's press releases, newest first.

        Args:
            owner_id: The owning account
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of press releases
        """
        pass
