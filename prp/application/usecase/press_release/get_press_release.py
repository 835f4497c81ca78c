"""Get press release use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, parse_id
from prp.application.usecase.press_release.item import PressReleaseItem
from prp.domain.service import PressReleaseService
from prp.domain.value import AccountId, PressReleaseId


class GetPressReleaseRequest(BaseModel):
    """Get press release request."""

    press_release_id: str
    user_id: str | None = None  # None for anonymous viewers


class GetPressReleaseUseCase(BaseUseCase):
    """Use case for reading a single press release."""

    def __init__(self, press_release_service: PressReleaseService) -> None:
        self.press_release_service = press_release_service

    async def execute(self, request: GetPressReleaseRequest) -> PressReleaseItem:
        """Execute get press release.

        Raises:
            NotFoundError: If missing, or not approved and not the caller's own
        """
        viewer_id = AccountId(request.user_id) if request.user_id else None
        press_release = await self.press_release_service.get_visible(
            PressReleaseId(parse_id(request.press_release_id, "Press release")),
            viewer_id,
        )
        return PressReleaseItem.from_domain(press_release)
