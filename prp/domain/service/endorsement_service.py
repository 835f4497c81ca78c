"""Endorsement request domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from prp.config import EndorsementSettings
from prp.domain.error import (
    AlreadyResolvedError,
    DuplicatePendingRequestError,
    EndorsementQuotaExceededError,
    NotAuthorizedError,
    NotFoundError,
    SelfEndorsementError,
    TargetNotApprovedError,
    ValidationError,
)
from prp.domain.model import Account, EndorsementRequest
from prp.domain.model.common import utcnow
from prp.domain.repository import EndorsementRequestRepository
from prp.domain.value import (
    AccountId,
    Email,
    EndorsementDecision,
    EndorsementRequestId,
    EndorsementStatus,
    TrustState,
)

from .account_service import AccountService
from .base import Service


class EndorsementService(Service):
    """Domain service for the peer endorsement workflow.

    A member still under review asks an approved member to vouch for them.
    If the approved member accepts, the requester is elevated to APPROVED.
    """

    def __init__(
        self,
        endorsement_repository: EndorsementRequestRepository,
        account_service: AccountService,
        settings: EndorsementSettings,
    ) -> None:
        """Initialize endorsement service.

        Args:
            endorsement_repository: Endorsement request repository
            account_service: Account state machine
            settings: Endorsement settings
        """
        self.endorsement_repository = endorsement_repository
        self.account_service = account_service
        self.settings = settings

    async def create(
        self,
        requester_id: AccountId,
        target: str,
        message: str | None = None,
    ) -> EndorsementRequest:
        """Ask an approved member for an endorsement.

        Args:
            requester_id: Requesting account
            target: Target member's email address or account ID
            message: Optional note to the target

        Returns:
            The pending endorsement request

        Raises:
            ValidationError: If no target is given
            SelfEndorsementError: If the requester targets themselves
            NotFoundError: If the requester has no account
            NotAuthorizedError: If the requester is already approved
            TargetNotApprovedError: If no approved member matches the target
            DuplicatePendingRequestError: If a pending request already exists
        """
        target = target.strip()
        with logfire.span(
            "endorsement_service.create", requester_id=requester_id, target=target
        ):
            if not target:
                raise ValidationError("An endorser email or account ID is required")

            requester = await self.account_service.get_by_id(requester_id)
            if requester.trust_state == TrustState.APPROVED:
                raise NotAuthorizedError(
                    "endorsement request",
                    "new",
                    requester_id,
                    reason="account is already approved",
                )

            target_account = await self._resolve_target(requester, target)

            if await self.endorsement_repository.exists_pending(
                requester_id, target_account.id
            ):
                logfire.warn(
                    "Pending endorsement request already exists",
                    requester_id=requester_id,
                    target_id=target_account.id,
                )
                raise DuplicatePendingRequestError(requester_id, target_account.id)

            request = EndorsementRequest(
                id=EndorsementRequestId(uuid4()),
                requester_id=requester_id,
                target_id=target_account.id,
                status=EndorsementStatus.PENDING,
                message=(message or "").strip() or self.settings.default_message,
                created_at=utcnow(),
            )

            try:
                saved = await self.endorsement_repository.add(request)
            except IntegrityError as e:
                # A concurrent create for the same pair got there first
                logfire.warn(
                    "Concurrent endorsement request detected",
                    requester_id=requester_id,
                    target_id=target_account.id,
                    error=str(e),
                )
                raise DuplicatePendingRequestError(
                    requester_id, target_account.id
                ) from e

            logfire.info(
                "Endorsement request created",
                request_id=str(saved.id),
                requester_id=requester_id,
                target_id=target_account.id,
            )
            return saved

    async def resolve(
        self,
        request_id: EndorsementRequestId,
        target_id: AccountId,
        decision: EndorsementDecision,
    ) -> EndorsementRequest:
        """Accept or decline an endorsement request.

        Resolution is terminal. The status write is conditional on the request
        still being pending, so concurrent resolutions cannot both apply.

        Args:
            request_id: Request to resolve
            target_id: Calling account, must be the request's target
            decision: ACCEPT or DECLINE

        Returns:
            The resolved request

        Raises:
            NotFoundError: If the request does not exist
            NotAuthorizedError: If the caller is not the target, or accepts
                while no longer approved
            AlreadyResolvedError: If the request is no longer pending
            EndorsementQuotaExceededError: If the endorser's quota is used up
        """
        with logfire.span(
            "endorsement_service.resolve",
            request_id=str(request_id),
            target_id=target_id,
            decision=decision.value,
        ):
            request = await self.endorsement_repository.find_by_id(request_id)
            if not request:
                raise NotFoundError("Endorsement request", str(request_id))

            if request.target_id != target_id:
                logfire.warn(
                    "Unauthorized endorsement resolution",
                    request_id=str(request_id),
                    caller_id=target_id,
                )
                raise NotAuthorizedError(
                    "endorsement request", str(request_id), target_id
                )

            if not request.is_pending:
                raise AlreadyResolvedError(str(request_id), request.status.value)

            now = utcnow()
            if decision == EndorsementDecision.ACCEPT:
                endorser = await self.account_service.get_by_id(target_id)
                if endorser.trust_state != TrustState.APPROVED:
                    logfire.warn(
                        "Endorser no longer approved",
                        request_id=str(request_id),
                        target_id=target_id,
                        trust_state=endorser.trust_state.value,
                    )
                    raise NotAuthorizedError(
                        "endorsement request",
                        str(request_id),
                        target_id,
                        reason="only approved members can endorse",
                    )
                self._check_quota(endorser, now)
                status = EndorsementStatus.ACCEPTED
            else:
                status = EndorsementStatus.DECLINED

            resolved = await self.endorsement_repository.resolve(
                request_id, status, now
            )
            if not resolved:
                latest = await self.endorsement_repository.find_by_id(request_id)
                current = latest.status.value if latest else "removed"
                raise AlreadyResolvedError(str(request_id), current)

            if status == EndorsementStatus.ACCEPTED:
                try:
                    await self.account_service.endorsement_accepted(
                        request.requester_id
                    )
                    await self.account_service.record_endorsement_given(
                        target_id, now
                    )
                except Exception as e:
                    logfire.error(
                        "Endorsement follow-up failed, reopening request",
                        request_id=str(request_id),
                        requester_id=request.requester_id,
                        error=str(e),
                    )
                    await self.endorsement_repository.reopen(request_id, status)
                    raise

            logfire.info(
                "Endorsement request resolved",
                request_id=str(request_id),
                requester_id=request.requester_id,
                target_id=target_id,
                status=status.value,
            )
            return resolved

    async def list_incoming(
        self,
        target_id: AccountId,
        status: EndorsementStatus | None = EndorsementStatus.PENDING,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EndorsementRequest]:
        """List requests addressed to a member, pending ones by default."""
        with logfire.span(
            "endorsement_service.list_incoming",
            target_id=target_id,
            status=status.value if status else None,
        ):
            requests = await self.endorsement_repository.find_by_target(
                target_id, status, limit, offset
            )
            logfire.info(
                "Incoming endorsement requests listed",
                target_id=target_id,
                count=len(requests),
            )
            return requests

    async def list_outgoing(
        self, requester_id: AccountId, limit: int = 50, offset: int = 0
    ) -> list[EndorsementRequest]:
        """List requests a member has made."""
        with logfire.span(
            "endorsement_service.list_outgoing", requester_id=requester_id
        ):
            return await self.endorsement_repository.find_by_requester(
                requester_id, limit, offset
            )

    async def _resolve_target(self, requester: Account, target: str) -> Account:
        if "@" in target:
            try:
                email = Email(target)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid email address: {target}") from e
            if email == requester.email:
                raise SelfEndorsementError()
            target_account = await self.account_service.find_by_email(email)
        else:
            if target == requester.id:
                raise SelfEndorsementError()
            target_account = await self.account_service.find_by_id(AccountId(target))

        if target_account and target_account.id == requester.id:
            raise SelfEndorsementError()

        # Missing and unapproved targets look the same to the requester
        if not target_account or target_account.trust_state != TrustState.APPROVED:
            logfire.warn("Endorsement target not approved", target=target)
            raise TargetNotApprovedError(target)

        return target_account

    def _check_quota(self, endorser: Account, now: datetime) -> None:
        if not self.settings.enforce_quota:
            return

        given = self.account_service.endorsements_this_period(endorser, now)
        if given >= self.settings.max_per_period:
            logfire.warn(
                "Endorsement quota exceeded",
                account_id=endorser.id,
                given=given,
                limit=self.settings.max_per_period,
            )
            raise EndorsementQuotaExceededError(
                endorser.id, self.settings.max_per_period
            )
