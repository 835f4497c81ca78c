"""Moderate press release use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, parse_id, require_moderator
from prp.application.usecase.press_release.item import PressReleaseItem
from prp.config import Settings
from prp.domain.service import PressReleaseService
from prp.domain.value import ModerationDecision, PressReleaseId


class ModeratePressReleaseRequest(BaseModel):
    """Moderate press release request."""

    user_id: str  # Moderator
    press_release_id: str
    decision: ModerationDecision


class ModeratePressReleaseUseCase(BaseUseCase):
    """Use case for a moderator publishing or rejecting a press release."""

    def __init__(self, press_release_service: PressReleaseService, settings: Settings) -> None:
        self.press_release_service = press_release_service
        self.settings = settings

    async def execute(self, request: ModeratePressReleaseRequest) -> PressReleaseItem:
        """Execute moderate press release.

        Raises:
            NotAuthorizedError: If the caller is not a moderator
            NotFoundError: If the press release does not exist
        """
        require_moderator(
            self.settings, request.user_id, "press release", request.press_release_id
        )
        press_release = await self.press_release_service.moderate(
            PressReleaseId(parse_id(request.press_release_id, "Press release")),
            request.decision,
        )
        return PressReleaseItem.from_domain(press_release)
