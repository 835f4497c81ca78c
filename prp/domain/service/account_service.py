"""Account state machine."""

from datetime import datetime, timedelta

import logfire
from sqlalchemy.exc import IntegrityError

from prp.domain.error import (
    DuplicateAccountError,
    DuplicateEmailError,
    NotAuthorizedError,
    NotFoundError,
)
from prp.domain.model import Account
from prp.domain.model.common import utcnow
from prp.domain.repository import AccountRepository
from prp.domain.value import AccountId, AccountStatus, Email, InviteToken, TrustState

from .base import Service

DEFAULT_PERIOD_DAYS = 30


class AccountService(Service):
    """Domain service owning every account trust state transition.

    Transitions:
    - signup: creates the account in PENDING_REVIEW
    - moderator_approve / moderator_reject: direct, last write wins
    - endorsement_accepted / invite_redeemed: any non-approved state to
      APPROVED, a no-op when already approved
    - reapply: REJECTED back to PENDING_REVIEW

    Approving is idempotent, so concurrent elevations of the same account
    need no locking.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        period_days: int = DEFAULT_PERIOD_DAYS,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            period_days: Length of the endorsement bookkeeping period
        """
        self.account_repository = account_repository
        self.period_days = period_days

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=account_id):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=account_id)
                raise NotFoundError("Account", account_id)
            return account

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Get account by ID, or None."""
        with logfire.span("account_service.find_by_id", account_id=account_id):
            return await self.account_repository.find_by_id(account_id)

    async def find_by_email(self, email: Email) -> Account | None:
        """Get account by email, or None."""
        with logfire.span("account_service.find_by_email", email=email.root):
            return await self.account_repository.find_by_email(email)

    async def signup(self, principal_id: AccountId, email: Email) -> Account:
        """Create the account for a newly registered principal.

        Args:
            principal_id: Principal ID assigned by the identity provider
            email: Principal's email address

        Returns:
            The new account in PENDING_REVIEW

        Raises:
            DuplicateAccountError: If the principal already has an account
            DuplicateEmailError: If the email belongs to another account
        """
        with logfire.span(
            "account_service.signup", account_id=principal_id, email=email.root
        ):
            existing = await self.account_repository.find_by_id(principal_id)
            if existing:
                logfire.warn("Account already exists", account_id=principal_id)
                raise DuplicateAccountError(principal_id)

            if await self.account_repository.find_by_email(email):
                logfire.warn("Email already registered", email=email.root)
                raise DuplicateEmailError(email.root)

            now = utcnow()
            account = Account(
                id=principal_id,
                email=email,
                trust_state=TrustState.PENDING_REVIEW,
                company_domain=email.domain,
                period_reset_at=now + timedelta(days=self.period_days),
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.account_repository.add(account)
            except IntegrityError as e:
                # Lost a race with a concurrent signup for the principal or email
                logfire.warn(
                    "Concurrent signup detected", account_id=principal_id, error=str(e)
                )
                if await self.account_repository.find_by_id(principal_id):
                    raise DuplicateAccountError(principal_id) from e
                raise DuplicateEmailError(email.root) from e

            logfire.info(
                "Account created",
                account_id=principal_id,
                company_domain=saved.company_domain,
            )
            return saved

    async def moderator_approve(self, account_id: AccountId) -> Account:
        """Approve an account. Re-approving succeeds without change."""
        return await self._set_trust_state(
            account_id, TrustState.APPROVED, "moderator_approve"
        )

    async def moderator_reject(self, account_id: AccountId) -> Account:
        """Reject an account. Re-rejecting succeeds without change."""
        return await self._set_trust_state(
            account_id, TrustState.REJECTED, "moderator_reject"
        )

    async def endorsement_accepted(self, requester_id: AccountId) -> Account:
        """Elevate a requester whose endorsement request was accepted."""
        return await self._elevate(requester_id, reason="endorsement")

    async def invite_redeemed(
        self, principal_id: AccountId, code: InviteToken
    ) -> Account:
        """Elevate a principal who redeemed a valid invite code.

        The code has already been validated and consumed by the caller.
        """
        return await self._elevate(principal_id, reason="invite", code=code.root)

    async def reapply(self, account_id: AccountId) -> Account:
        """Move a rejected account back into the review queue.

        Raises:
            NotFoundError: If account not found
            NotAuthorizedError: If the account is already approved
        """
        with logfire.span("account_service.reapply", account_id=account_id):
            account = await self.get_by_id(account_id)

            if account.trust_state == TrustState.APPROVED:
                raise NotAuthorizedError(
                    "account", account_id, account_id, reason="already approved"
                )
            if account.trust_state == TrustState.PENDING_REVIEW:
                logfire.info("Account already pending review", account_id=account_id)
                return account

            updated = await self._write_trust_state(
                account_id, TrustState.PENDING_REVIEW
            )
            logfire.info("Account re-entered review", account_id=account_id)
            return updated

    async def status_of(self, principal_id: AccountId | None) -> AccountStatus:
        """Resolve the status of a caller.

        Args:
            principal_id: Authenticated principal ID, or None if anonymous

        Returns:
            UNAUTHENTICATED for anonymous callers, otherwise the stored trust
            state. A principal that signed in but has no account yet reads as
            PENDING_REVIEW.
        """
        with logfire.span("account_service.status_of", account_id=principal_id):
            if principal_id is None:
                return AccountStatus.UNAUTHENTICATED

            account = await self.account_repository.find_by_id(principal_id)
            if not account:
                logfire.info("Principal has no account", account_id=principal_id)
                return AccountStatus.PENDING_REVIEW

            return AccountStatus.from_trust_state(account.trust_state)

    async def list_by_trust_state(
        self, trust_state: TrustState, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        """List accounts in a trust state, oldest first."""
        with logfire.span(
            "account_service.list_by_trust_state",
            trust_state=trust_state.value,
            limit=limit,
            offset=offset,
        ):
            accounts = await self.account_repository.find_by_trust_state(
                trust_state, limit, offset
            )
            logfire.info(
                "Accounts listed", trust_state=trust_state.value, count=len(accounts)
            )
            return accounts

    def endorsements_this_period(self, account: Account, now: datetime) -> int:
        """Endorsements the account has given in the current period."""
        if now >= account.period_reset_at:
            return 0
        return account.endorsements_given_this_period

    async def record_endorsement_given(
        self, endorser_id: AccountId, now: datetime | None = None
    ) -> Account:
        """Credit an endorser after they accept a request.

        Bumps reputation and the per-period counter, starting a fresh period
        first when the current one has elapsed. The trust state is not
        written.

        Raises:
            NotFoundError: If account not found
        """
        now = now or utcnow()
        with logfire.span(
            "account_service.record_endorsement_given", account_id=endorser_id
        ):
            updated = await self.account_repository.record_endorsement(
                endorser_id, now, self.period_days
            )
            if not updated:
                raise NotFoundError("Account", endorser_id)

            logfire.info(
                "Endorsement recorded",
                account_id=endorser_id,
                reputation_score=updated.reputation_score,
                given_this_period=updated.endorsements_given_this_period,
            )
            return updated

    async def _elevate(self, account_id: AccountId, reason: str, **attrs) -> Account:
        with logfire.span(
            "account_service.elevate", account_id=account_id, reason=reason, **attrs
        ):
            account = await self.get_by_id(account_id)

            if account.trust_state == TrustState.APPROVED:
                logfire.info("Account already approved", account_id=account_id)
                return account

            updated = await self._write_trust_state(account_id, TrustState.APPROVED)
            logfire.info(
                "Account elevated",
                account_id=account_id,
                reason=reason,
                previous_state=account.trust_state.value,
            )
            return updated

    async def _set_trust_state(
        self, account_id: AccountId, trust_state: TrustState, action: str
    ) -> Account:
        with logfire.span(
            f"account_service.{action}",
            account_id=account_id,
            trust_state=trust_state.value,
        ):
            account = await self.get_by_id(account_id)

            if account.trust_state == trust_state:
                logfire.info(
                    "Trust state unchanged",
                    account_id=account_id,
                    trust_state=trust_state.value,
                )
                return account

            updated = await self._write_trust_state(account_id, trust_state)
            logfire.info(
                "Trust state changed",
                account_id=account_id,
                previous_state=account.trust_state.value,
                trust_state=trust_state.value,
            )
            return updated

    async def _write_trust_state(
        self, account_id: AccountId, trust_state: TrustState
    ) -> Account:
        updated = await self.account_repository.update_trust_state(
            account_id, trust_state
        )
        if not updated:
            raise NotFoundError("Account", account_id)
        return updated
