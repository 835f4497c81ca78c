"""Press release views."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from prp.domain.model import PressRelease
from prp.domain.value import PressReleaseStatus


class PressReleaseFields(BaseModel):
    """Press release content as submitted by a member.

    Every field is optional here so that missing and blank values are
    reported by the submission rules rather than by request parsing.
    """

    headline: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    what: Optional[str] = None
    who: Optional[str] = None
    when: Optional[str] = None
    where: Optional[str] = None
    why: Optional[str] = None
    how: Optional[str] = None
    website: Optional[str] = None


class PressReleaseItem(BaseModel):
    """Press release as returned by the API."""

    id: str
    owner_id: str
    status: PressReleaseStatus
    headline: str
    location: str
    date: str
    what: str
    who: str
    when: str
    where: str
    why: str
    how: str
    website: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    # Set on search results only
    distance: Optional[float] = None

    @classmethod
    def from_domain(
        cls, press_release: PressRelease, distance: float | None = None
    ) -> "PressReleaseItem":
        return cls(
            id=str(press_release.id),
            owner_id=press_release.owner_id,
            status=press_release.status,
            created_at=press_release.created_at,
            updated_at=press_release.updated_at,
            distance=distance,
            **press_release.content(),
        )


class PressReleaseListResponse(BaseModel):
    """A list of press releases."""

    items: list[PressReleaseItem]
