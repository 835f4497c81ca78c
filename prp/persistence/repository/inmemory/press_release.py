"""In-memory press release repository for testing."""

from typing import Optional

from prp.domain.model import PressRelease
from prp.domain.repository import PressReleaseRepository
from prp.domain.value import AccountId, PressReleaseId, PressReleaseStatus


class InMemoryPressReleaseRepository(PressReleaseRepository):
    """In-memory implementation of PressReleaseRepository for testing."""

    def __init__(self) -> None:
        self._press_releases: dict[PressReleaseId, PressRelease] = {}

    async def find_by_id(self, press_release_id: PressReleaseId) -> Optional[PressRelease]:
        """Find a press release by ID."""
        return self._press_releases.get(press_release_id)

    async def save(self, press_release: PressRelease) -> PressRelease:
        """Save a press release (create or update)."""
        self._press_releases[press_release.id] = press_release
        return press_release

    async def delete(self, press_release_id: PressReleaseId) -> bool:
        """Hard delete a press release."""
        return self._press_releases.pop(press_release_id, None) is not None

    async def update_status(
        self, press_release_id: PressReleaseId, status: PressReleaseStatus
    ) -> Optional[PressRelease]:
        """Set a press release's moderation status."""
        press_release = self._press_releases.get(press_release_id)
        if not press_release:
            return None
        updated = press_release.model_copy(update={"status": status})
        self._press_releases[press_release_id] = updated
        return updated

    async def find_by_status(
        self, status: PressReleaseStatus, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List press releases in a status, newest first."""
        items = [p for p in self._press_releases.values() if p.status == status]
        items.sort(key=lambda p: p.created_at, reverse=True)
        return items[offset : offset + limit]

    async def find_by_owner(
        self, owner_id: AccountId, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List all of an owner's press releases, newest first."""
        items = [p for p in self._press_releases.values() if p.owner_id == owner_id]
        items.sort(key=lambda p: p.created_at, reverse=True)
        return items[offset : offset + limit]
