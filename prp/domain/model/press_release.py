"""Press release aggregate root.

Press releases are submitted by approved members and only become public
once a moderator approves them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from prp.domain.model.common import DomainModel, utcnow
from prp.domain.value import AccountId, PressReleaseId, PressReleaseStatus

# Fields a submission must carry, in form order
CONTENT_FIELDS: tuple[str, ...] = (
    "headline",
    "location",
    "date",
    "what",
    "who",
    "when",
    "where",
    "why",
    "how",
    "website",
)

# Fields counted towards the word limit
NARRATIVE_FIELDS: tuple[str, ...] = ("what", "who", "when", "where", "why", "how")


class PressRelease(DomainModel):
    """Press release aggregate root.

    Content fields are validated by the submission rules before a record is
    built, so the model itself only guards types.
    """

    id: PressReleaseId
    owner_id: AccountId
    status: PressReleaseStatus = PressReleaseStatus.PENDING_MODERATION
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
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @property
    def is_public(self) -> bool:
        return self.status == PressReleaseStatus.APPROVED

    def content(self) -> dict[str, str]:
        """Return the ten content fields as a dict."""
        return {name: getattr(self, name) for name in CONTENT_FIELDS}
