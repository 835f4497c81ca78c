"""Submit press release use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase
from prp.application.usecase.press_release.item import PressReleaseFields, PressReleaseItem
from prp.domain.model.press_release import CONTENT_FIELDS
from prp.domain.service import PressReleaseService
from prp.domain.value import AccountId


class SubmitPressReleaseRequest(BaseModel):
    """Submit press release request."""

    user_id: str
    fields: PressReleaseFields


class SubmitPressReleaseUseCase(BaseUseCase):
    """Use case for submitting a press release for moderation."""

    def __init__(self, press_release_service: PressReleaseService) -> None:
        self.press_release_service = press_release_service

    async def execute(self, request: SubmitPressReleaseRequest) -> PressReleaseItem:
        """Execute submit press release.

        Raises:
            NotAuthorizedError: If the caller is not approved
            IncompleteSubmissionError: If a field is missing or blank
            WordLimitExceededError: If the narrative is over the word limit
        """
        fields = request.fields.model_dump(include=set(CONTENT_FIELDS))
        press_release = await self.press_release_service.submit(
            AccountId(request.user_id), fields
        )
        return PressReleaseItem.from_domain(press_release)
