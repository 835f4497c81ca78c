"""List own press releases use case."""

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase
from prp.application.usecase.press_release.item import (
    PressReleaseItem,
    PressReleaseListResponse,
)
from prp.config import Settings
from prp.domain.service import PressReleaseService, SearchService
from prp.domain.value import AccountId


class ListMyPressReleasesRequest(BaseModel):
    """List own press releases request."""

    user_id: str
    q: str | None = None
    limit: int = Field(default=500, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


class ListMyPressReleasesUseCase(BaseUseCase):
    """Use case for a member's own dashboard, every status included."""

    def __init__(
        self,
        press_release_service: PressReleaseService,
        search_service: SearchService,
        settings: Settings,
    ) -> None:
        self.press_release_service = press_release_service
        self.search_service = search_service
        self.settings = settings

    async def execute(self, request: ListMyPressReleasesRequest) -> PressReleaseListResponse:
        corpus = await self.press_release_service.list_for_owner(
            AccountId(request.user_id), request.limit, request.offset
        )

        if not request.q or not request.q.strip():
            return PressReleaseListResponse(
                items=[PressReleaseItem.from_domain(pr) for pr in corpus]
            )

        matches = self.search_service.search(
            corpus, request.q, self.settings.search.private_fields
        )
        return PressReleaseListResponse(
            items=[PressReleaseItem.from_domain(m.item, m.distance) for m in matches]
        )
