"""Edit press release use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, parse_id
from prp.application.usecase.press_release.item import PressReleaseFields, PressReleaseItem
from prp.domain.service import PressReleaseService
from prp.domain.value import AccountId, PressReleaseId


class EditPressReleaseRequest(BaseModel):
    """Edit press release request."""

    user_id: str
    press_release_id: str
    fields: PressReleaseFields  # Only the fields that are set are changed


class EditPressReleaseUseCase(BaseUseCase):
    """Use case for an owner editing their press release."""

    def __init__(self, press_release_service: PressReleaseService) -> None:
        self.press_release_service = press_release_service

    async def execute(self, request: EditPressReleaseRequest) -> PressReleaseItem:
        """Execute edit press release.

        Raises:
            NotFoundError: If the press release does not exist
            NotAuthorizedError: If the caller is not the owner
            IncompleteSubmissionError: If a changed field is blank
            WordLimitExceededError: If the edit pushes the narrative over the limit
        """
        changes = request.fields.model_dump(exclude_none=True)
        press_release = await self.press_release_service.edit(
            PressReleaseId(parse_id(request.press_release_id, "Press release")),
            AccountId(request.user_id),
            changes,
        )
        return PressReleaseItem.from_domain(press_release)
