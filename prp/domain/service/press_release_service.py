"""Press release domain service."""

from collections.abc import Mapping
from uuid import uuid4

import logfire

from prp.config import SubmissionSettings
from prp.domain.error import NotAuthorizedError, NotFoundError
from prp.domain.model import PressRelease
from prp.domain.model.common import utcnow
from prp.domain.repository import PressReleaseRepository
from prp.domain.value import (
    AccountId,
    ModerationDecision,
    PressReleaseId,
    PressReleaseStatus,
)

from .account_service import AccountService
from .base import Service
from .submission import validate_submission

_DECISION_STATUS = {
    ModerationDecision.APPROVE: PressReleaseStatus.APPROVED,
    ModerationDecision.REJECT: PressReleaseStatus.REJECTED,
}


class PressReleaseService(Service):
    """Domain service for the press release moderation lifecycle.

    Approved members submit press releases, which wait in
    PENDING_MODERATION until a moderator approves or rejects them. Only
    approved press releases are visible outside their owner.
    """

    def __init__(
        self,
        press_release_repository: PressReleaseRepository,
        account_service: AccountService,
        settings: SubmissionSettings,
    ) -> None:
        """Initialize press release service.

        Args:
            press_release_repository: Press release repository
            account_service: Account state machine, used for the trust gate
            settings: Submission settings
        """
        self.press_release_repository = press_release_repository
        self.account_service = account_service
        self.settings = settings

    async def submit(
        self, owner_id: AccountId, fields: Mapping[str, str | None]
    ) -> PressRelease:
        """Submit a press release for moderation.

        Args:
            owner_id: Submitting account, must be approved
            fields: All ten content fields

        Returns:
            The new press release in PENDING_MODERATION

        Raises:
            NotAuthorizedError: If the owner is not approved
            IncompleteSubmissionError: If a field is missing or blank
            WordLimitExceededError: If the narrative fields are too long
        """
        with logfire.span("press_release_service.submit", owner_id=owner_id):
            account = await self.account_service.find_by_id(owner_id)
            if not account or not account.is_approved:
                logfire.warn("Submission by unapproved account", owner_id=owner_id)
                raise NotAuthorizedError(
                    "press release",
                    "new",
                    owner_id,
                    reason="only approved members can submit",
                )

            content = validate_submission(
                fields, allow_partial=False, max_words=self.settings.max_words
            )

            press_release = PressRelease(
                id=PressReleaseId(uuid4()),
                owner_id=owner_id,
                status=PressReleaseStatus.PENDING_MODERATION,
                created_at=utcnow(),
                **content,
            )
            saved = await self.press_release_repository.save(press_release)
            logfire.info(
                "Press release submitted",
                press_release_id=str(saved.id),
                owner_id=owner_id,
            )
            return saved

    async def edit(
        self,
        press_release_id: PressReleaseId,
        editor_id: AccountId,
        fields: Mapping[str, str | None],
    ) -> PressRelease:
        """Edit a press release.

        The changes are merged over the stored content and the result is
        validated as a full submission. The moderation status is kept as is.
        Nothing is written if any check fails.

        Args:
            press_release_id: Press release to edit
            editor_id: Calling account, must be the owner
            fields: Changed content fields

        Returns:
            The updated press release

        Raises:
            NotFoundError: If the press release does not exist
            NotAuthorizedError: If the editor is not the owner
            IncompleteSubmissionError: If a field is blank
            WordLimitExceededError: If the narrative fields are too long
        """
        with logfire.span(
            "press_release_service.edit",
            press_release_id=str(press_release_id),
            editor_id=editor_id,
        ):
            press_release = await self._get_owned(press_release_id, editor_id)

            changes = validate_submission(
                fields, allow_partial=True, max_words=self.settings.max_words
            )
            merged = validate_submission(
                {**press_release.content(), **changes},
                allow_partial=False,
                max_words=self.settings.max_words,
            )

            updated = press_release.model_copy(
                update={**merged, "updated_at": utcnow()}
            )
            saved = await self.press_release_repository.save(updated)
            logfire.info(
                "Press release edited",
                press_release_id=str(press_release_id),
                changed_fields=sorted(changes),
            )
            return saved

    async def delete(
        self, press_release_id: PressReleaseId, caller_id: AccountId
    ) -> None:
        """Delete a press release.

        Raises:
            NotFoundError: If the press release does not exist
            NotAuthorizedError: If the caller is not the owner
        """
        with logfire.span(
            "press_release_service.delete",
            press_release_id=str(press_release_id),
            caller_id=caller_id,
        ):
            await self._get_owned(press_release_id, caller_id)
            await self.press_release_repository.delete(press_release_id)
            logfire.info(
                "Press release deleted", press_release_id=str(press_release_id)
            )

    async def moderate(
        self, press_release_id: PressReleaseId, decision: ModerationDecision
    ) -> PressRelease:
        """Approve or reject a press release.

        Repeating a decision succeeds without change; a different decision
        overwrites the previous one.

        Raises:
            NotFoundError: If the press release does not exist
        """
        status = _DECISION_STATUS[decision]
        with logfire.span(
            "press_release_service.moderate",
            press_release_id=str(press_release_id),
            decision=decision.value,
        ):
            press_release = await self.press_release_repository.find_by_id(
                press_release_id
            )
            if not press_release:
                raise NotFoundError("Press release", str(press_release_id))

            if press_release.status == status:
                logfire.info(
                    "Press release status unchanged",
                    press_release_id=str(press_release_id),
                    status=status.value,
                )
                return press_release

            updated = await self.press_release_repository.update_status(
                press_release_id, status
            )
            if not updated:
                raise NotFoundError("Press release", str(press_release_id))

            logfire.info(
                "Press release moderated",
                press_release_id=str(press_release_id),
                previous_status=press_release.status.value,
                status=status.value,
            )
            return updated

    async def get_visible(
        self, press_release_id: PressReleaseId, viewer_id: AccountId | None
    ) -> PressRelease:
        """Get a press release if the viewer may see it.

        Approved press releases are visible to everyone; others only to
        their owner. Hidden press releases are reported as not found.

        Raises:
            NotFoundError: If missing or not visible to the viewer
        """
        with logfire.span(
            "press_release_service.get_visible",
            press_release_id=str(press_release_id),
            viewer_id=viewer_id,
        ):
            press_release = await self.press_release_repository.find_by_id(
                press_release_id
            )
            if not press_release or (
                not press_release.is_public and press_release.owner_id != viewer_id
            ):
                raise NotFoundError("Press release", str(press_release_id))
            return press_release

    async def list_public(self, limit: int = 500, offset: int = 0) -> list[PressRelease]:
        """List approved press releases, newest first."""
        with logfire.span("press_release_service.list_public", limit=limit):
            items = await self.press_release_repository.find_by_status(
                PressReleaseStatus.APPROVED, limit, offset
            )
            # Only approved items cross the public read boundary
            items = [item for item in items if item.is_public]
            logfire.info("Public press releases listed", count=len(items))
            return items

    async def list_for_owner(
        self, owner_id: AccountId, limit: int = 500, offset: int = 0
    ) -> list[PressRelease]:
        """List all of an owner's press releases regardless of status."""
        with logfire.span("press_release_service.list_for_owner", owner_id=owner_id):
            items = await self.press_release_repository.find_by_owner(
                owner_id, limit, offset
            )
            logfire.info("Owner press releases listed", owner_id=owner_id, count=len(items))
            return items

    async def list_pending_moderation(
        self, limit: int = 50, offset: int = 0
    ) -> list[PressRelease]:
        """List press releases awaiting moderation."""
        with logfire.span("press_release_service.list_pending_moderation"):
            return await self.press_release_repository.find_by_status(
                PressReleaseStatus.PENDING_MODERATION, limit, offset
            )

    async def _get_owned(
        self, press_release_id: PressReleaseId, caller_id: AccountId
    ) -> PressRelease:
        press_release = await self.press_release_repository.find_by_id(press_release_id)
        if not press_release:
            raise NotFoundError("Press release", str(press_release_id))

        if press_release.owner_id != caller_id:
            logfire.warn(
                "Unauthorized press release access",
                press_release_id=str(press_release_id),
                owner_id=press_release.owner_id,
                caller_id=caller_id,
            )
            raise NotAuthorizedError("press release", str(press_release_id), caller_id)

        return press_release
