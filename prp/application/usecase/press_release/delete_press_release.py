"""Delete press release use case."""

from pydantic import BaseModel

from prp.application.usecase.base import BaseUseCase, parse_id
from prp.domain.service import PressReleaseService
from prp.domain.value import AccountId, PressReleaseId


class DeletePressReleaseRequest(BaseModel):
    """Delete press release request."""

    user_id: str
    press_release_id: str


class DeletePressReleaseResponse(BaseModel):
    """Delete press release response."""

    success: bool


class DeletePressReleaseUseCase(BaseUseCase):
    """Use case for an owner deleting their press release."""

    def __init__(self, press_release_service: PressReleaseService) -> None:
        self.press_release_service = press_release_service

    async def execute(self, request: DeletePressReleaseRequest) -> DeletePressReleaseResponse:
        """Execute delete press release.

        Raises:
            NotFoundError: If the press release does not exist
            NotAuthorizedError: If the caller is not the owner
        """
        await self.press_release_service.delete(
            PressReleaseId(parse_id(request.press_release_id, "Press release")),
            AccountId(request.user_id),
        )
        return DeletePressReleaseResponse(success=True)
