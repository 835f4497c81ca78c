"""PostgreSQL implementation of PressRelease repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from prp.config import StoreSettings
from prp.domain.model import PressRelease
from prp.domain.repository import PressReleaseRepository
from prp.domain.value import AccountId, PressReleaseId, PressReleaseStatus
from prp.persistence.mappers import press_release_to_dict, row_to_press_release
from prp.persistence.tables import press_releases_table
from prp.util.retry import retry_transient, store_errors, store_write


class PostgresPressReleaseRepository(PressReleaseRepository):
    """PostgreSQL implementation of PressReleaseRepository."""

    def __init__(self, session: AsyncSession, store_settings: StoreSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            store_settings: Retry policy for reads
        """
        self.session = session
        self.store_settings = store_settings

    @retry_transient
    async def find_by_id(self, press_release_id: PressReleaseId) -> Optional[PressRelease]:
        """Find a press release by ID."""
        stmt = select(press_releases_table).where(
            press_releases_table.c.id == press_release_id
        )
        with store_errors("press_releases.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_press_release(dict(row)) if row else None

    async def save(self, press_release: PressRelease) -> PressRelease:
        """Save a press release (create or update)."""
        values = press_release_to_dict(press_release)

        existing = await self.find_by_id(press_release.id)
        with store_write(self.session, "press_releases.save"):
            if existing:
                values.pop("id")
                stmt = (
                    update(press_releases_table)
                    .where(press_releases_table.c.id == press_release.id)
                    .values(**values)
                )
            else:
                stmt = insert(press_releases_table).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
        return press_release

    async def delete(self, press_release_id: PressReleaseId) -> bool:
        """Hard delete a press release."""
        stmt = delete(press_releases_table).where(
            press_releases_table.c.id == press_release_id
        )
        with store_write(self.session, "press_releases.delete"):
            result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def update_status(
        self, press_release_id: PressReleaseId, status: PressReleaseStatus
    ) -> Optional[PressRelease]:
        """Set a press release's moderation status."""
        t = press_releases_table
        stmt = (
            update(t)
            .where(t.c.id == press_release_id)
            .values(status=status.value)
            .returning(*t.c)
        )
        with store_write(self.session, "press_releases.update_status"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_press_release(dict(row)) if row else None

    @retry_transient
    async def find_by_status(
        self, status: PressReleaseStatus, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List press releases in a status, newest first."""
        t = press_releases_table
        stmt = (
            select(t)
            .where(t.c.status == status.value)
            .order_by(t.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with store_errors("press_releases.find_by_status"):
            result = await self.session.execute(stmt)
        return [row_to_press_release(dict(row)) for row in result.mappings().all()]

    @retry_transient
    async def find_by_owner(
        self, owner_id: AccountId, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List all of an owner's press releases, newest first."""
        t = press_releases_table
        stmt = (
            select(t)
            .where(t.c.owner_id == owner_id)
            .order_by(t.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with store_errors("press_releases.find_by_owner"):
            result = await self.session.execute(stmt)
        return [row_to_press_release(dict(row)) for row in result.mappings().all()]
