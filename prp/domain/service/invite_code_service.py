"""Invite code domain service."""

import secrets
import string
from datetime import datetime, timezone

import logfire

from prp.config import InvitationSettings
from prp.domain.error import (
    CodeCollisionError,
    CodeExhaustedError,
    CodeExpiredError,
    CodeNotFoundError,
    DomainMismatchError,
    ValidationError,
)
from prp.domain.model import Account, InviteCode
from prp.domain.model.common import utcnow
from prp.domain.repository import InviteCodeRepository
from prp.domain.value import AccountId, InviteToken, TrustState
from prp.domain.value.common import ValueObject

from .account_service import AccountService
from .base import Service

CODE_ALPHABET = string.ascii_uppercase + string.digits


class RedemptionResult(ValueObject):
    """Outcome of a successful invite code redemption."""

    code: InviteToken
    account_id: AccountId
    trust_state: TrustState
    # False when the redeemer was already approved and no use was consumed
    elevated: bool
    remaining_uses: int


def generate_code(prefix: str, length: int) -> str:
    """Generate a candidate code such as 'PRP-4K7Q2Z'."""
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
    return f"{prefix}-{suffix}"


def normalize_domain(domain: str | None) -> str | None:
    """Lowercase a domain restriction and drop a leading '@'."""
    if domain is None:
        return None
    domain = domain.strip().lower().lstrip("@")
    return domain or None


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class InviteCodeService(Service):
    """Domain service for issuing and redeeming invite codes."""

    def __init__(
        self,
        invite_code_repository: InviteCodeRepository,
        account_service: AccountService,
        settings: InvitationSettings,
    ) -> None:
        """Initialize invite code service.

        Args:
            invite_code_repository: Invite code repository
            account_service: Account state machine, used to elevate redeemers
            settings: Invitation settings
        """
        self.invite_code_repository = invite_code_repository
        self.account_service = account_service
        self.settings = settings

    async def issue(
        self,
        issued_by: AccountId,
        max_uses: int = 1,
        invitee_domain: str | None = None,
        expires_at: datetime | None = None,
        prefix: str | None = None,
    ) -> InviteCode:
        """Issue a new invite code.

        Codes are random, so a collision with an existing code is retried
        with a fresh candidate.

        Args:
            issued_by: Issuing account
            max_uses: Number of redemptions allowed
            invitee_domain: Optional email domain restriction
            expires_at: Optional expiry, must be in the future
            prefix: Code prefix, defaults to the member prefix

        Returns:
            The issued invite code

        Raises:
            ValidationError: If max_uses or expires_at is invalid
            CodeCollisionError: If no unique code was found
        """
        prefix = (prefix or self.settings.code_prefix).upper()
        with logfire.span(
            "invite_code_service.issue",
            issued_by=issued_by,
            max_uses=max_uses,
            prefix=prefix,
        ):
            if isinstance(max_uses, bool) or max_uses < 1:
                raise ValidationError("max_uses must be a positive integer")

            now = utcnow()
            if expires_at is not None:
                expires_at = as_utc(expires_at)
                if expires_at <= now:
                    raise ValidationError("expires_at must be in the future")

            domain = normalize_domain(invitee_domain)
            attempts = self.settings.code_generation_attempts

            for attempt in range(1, attempts + 1):
                invite_code = InviteCode(
                    code=InviteToken(generate_code(prefix, self.settings.code_length)),
                    issued_by=issued_by,
                    max_uses=max_uses,
                    invitee_domain=domain,
                    expires_at=expires_at,
                    created_at=now,
                )
                saved = await self.invite_code_repository.add(invite_code)
                if saved is None:
                    logfire.warn(
                        "Invite code collision, retrying",
                        code=invite_code.code.root,
                        attempt=attempt,
                    )
                    continue

                logfire.info(
                    "Invite code issued",
                    code=saved.code.root,
                    issued_by=issued_by,
                    max_uses=max_uses,
                    invitee_domain=domain,
                )
                return saved

            logfire.error("Invite code generation exhausted", attempts=attempts)
            raise CodeCollisionError(attempts)

    async def redeem(
        self, code: InviteToken, principal_id: AccountId
    ) -> RedemptionResult:
        """Redeem an invite code and elevate the redeemer.

        Consuming a use is a single conditional write in the store, so two
        redemptions racing for the last use cannot both succeed. If the
        account transition fails afterwards the use is released again.

        Args:
            code: Invite code
            principal_id: Redeeming principal

        Returns:
            Redemption result

        Raises:
            CodeNotFoundError: If the code does not exist
            NotFoundError: If the principal has no account
            CodeExpiredError: If the code has expired
            CodeExhaustedError: If the code is used up or inactive
            DomainMismatchError: If the principal's email domain is not allowed
        """
        with logfire.span(
            "invite_code_service.redeem", code=code.root, account_id=principal_id
        ):
            invite_code = await self.invite_code_repository.find_by_code(code)
            if not invite_code:
                logfire.warn("Invite code not found", code=code.root)
                raise CodeNotFoundError(code.root)

            account = await self.account_service.get_by_id(principal_id)
            now = utcnow()
            self._check_redeemable(invite_code, account, now)

            if account.trust_state == TrustState.APPROVED:
                logfire.info(
                    "Redeemer already approved, no use consumed",
                    code=code.root,
                    account_id=principal_id,
                )
                return RedemptionResult(
                    code=code,
                    account_id=principal_id,
                    trust_state=account.trust_state,
                    elevated=False,
                    remaining_uses=invite_code.remaining_uses,
                )

            consumed = await self.invite_code_repository.try_consume_use(code, now)
            if not consumed:
                # Another redemption took the last use, or the code expired
                # between the read and the write
                logfire.warn("Invite code redemption lost race", code=code.root)
                latest = await self.invite_code_repository.find_by_code(code)
                if latest and latest.is_expired(now):
                    raise CodeExpiredError(code.root)
                raise CodeExhaustedError(code.root)

            try:
                elevated = await self.account_service.invite_redeemed(
                    principal_id, code
                )
            except Exception as e:
                logfire.error(
                    "Account elevation failed, releasing invite use",
                    code=code.root,
                    account_id=principal_id,
                    error=str(e),
                )
                await self.invite_code_repository.release_use(code)
                raise

            logfire.info(
                "Invite code redeemed",
                code=code.root,
                account_id=principal_id,
                current_uses=consumed.current_uses,
                active=consumed.active,
            )
            return RedemptionResult(
                code=code,
                account_id=principal_id,
                trust_state=elevated.trust_state,
                elevated=True,
                remaining_uses=consumed.remaining_uses,
            )

    async def list_issued(
        self, issued_by: AccountId, limit: int = 50, offset: int = 0
    ) -> list[InviteCode]:
        """List codes issued by an account, newest first."""
        with logfire.span(
            "invite_code_service.list_issued",
            issued_by=issued_by,
            limit=limit,
            offset=offset,
        ):
            codes = await self.invite_code_repository.find_by_issuer(
                issued_by, limit, offset
            )
            logfire.info("Invite codes listed", issued_by=issued_by, count=len(codes))
            return codes

    def _check_redeemable(
        self, invite_code: InviteCode, account: Account, now: datetime
    ) -> None:
        code = invite_code.code.root
        if invite_code.is_expired(now):
            logfire.warn("Invite code expired", code=code)
            raise CodeExpiredError(code)
        if not invite_code.active or invite_code.remaining_uses <= 0:
            logfire.warn(
                "Invite code exhausted",
                code=code,
                current_uses=invite_code.current_uses,
                max_uses=invite_code.max_uses,
            )
            raise CodeExhaustedError(code)
        if (
            invite_code.invitee_domain
            and account.email.domain != invite_code.invitee_domain
        ):
            logfire.warn(
                "Invite code domain mismatch",
                code=code,
                expected=invite_code.invitee_domain,
                actual=account.email.domain,
            )
            raise DomainMismatchError(
                code, invite_code.invitee_domain, account.email.domain
            )
