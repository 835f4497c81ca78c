"""List public press releases use case."""

from pydantic import BaseModel, Field

from prp.application.usecase.base import BaseUseCase
from prp.application.usecase.press_release.item import (
    PressReleaseItem,
    PressReleaseListResponse,
)
from prp.config import Settings
from prp.domain.service import PressReleaseService, SearchService


class ListPressReleasesRequest(BaseModel):
    """List public press releases request."""

    q: str | None = None
    limit: int = Field(default=500, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


class ListPressReleasesUseCase(BaseUseCase):
    """Use case for browsing and searching approved press releases."""

    def __init__(
        self,
        press_release_service: PressReleaseService,
        search_service: SearchService,
        settings: Settings,
    ) -> None:
        """Initialize list press releases use case.

        Args:
            press_release_service: Press release service
            search_service: Fuzzy search over the fetched corpus
            settings: Application settings, for the public search fields
        """
        self.press_release_service = press_release_service
        self.search_service = search_service
        self.settings = settings

    async def execute(self, request: ListPressReleasesRequest) -> PressReleaseListResponse:
        corpus = await self.press_release_service.list_public(request.limit, request.offset)

        if not request.q or not request.q.strip():
            return PressReleaseListResponse(
                items=[PressReleaseItem.from_domain(pr) for pr in corpus]
            )

        matches = self.search_service.search(
            corpus, request.q, self.settings.search.public_fields
        )
        return PressReleaseListResponse(
            items=[PressReleaseItem.from_domain(m.item, m.distance) for m in matches]
        )
